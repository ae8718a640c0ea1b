"""Shared plumbing for services that mutate the store"""

from decimal import Decimal, InvalidOperation

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from budget_gateway.domain.exceptions import InvalidInputError
from budget_gateway.domain.money import to_money
from budget_gateway.services.activity import ActivityLogWriter


class MutationService:
    """Commit-then-log: the mutation commits first, its audit entry follows"""

    def __init__(self, db: Session):
        self.db = db
        self.activity = ActivityLogWriter(db)

    def _commit(self, operation):
        try:
            result = operation()
            self.db.commit()
            return result
        except SQLAlchemyError:
            self.db.rollback()
            raise

    @staticmethod
    def _amount(value, field_name: str) -> Decimal:
        """Non-negative 2-place money value"""
        try:
            amount = to_money(value)
        except (InvalidOperation, ValueError, TypeError) as e:
            raise InvalidInputError(f"{field_name} is not a valid amount: {value!r}") from e
        if not amount.is_finite() or amount < 0:
            raise InvalidInputError(f"{field_name} must be a non-negative amount")
        return amount
