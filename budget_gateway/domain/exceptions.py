"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidInputError(DomainException):
    """Request payload is malformed or violates a field constraint"""

    pass


class NotFoundError(DomainException):
    """Referenced entity id does not resolve"""

    def __init__(self, entity_type: str, entity_id: str):
        super().__init__(f"{entity_type.capitalize()} {entity_id} not found")
        self.entity_type = entity_type
        self.entity_id = entity_id


class ConflictError(DomainException):
    """Operation would violate a referential or uniqueness invariant"""

    pass


class ServiceUnavailableError(DomainException):
    """External collaborator (advisor, email) is unreachable or unconfigured"""

    pass
