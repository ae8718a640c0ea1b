"""Category management with the deletion guard

Categories are shared across users; the acting user only matters for
the activity log.
"""

from typing import Any, Dict, List

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from budget_gateway.domain.exceptions import ConflictError, InvalidInputError, NotFoundError
from budget_gateway.domain.billing import field_diff
from budget_gateway.infrastructure.database.models import Category, Goal
from budget_gateway.infrastructure.database.repositories import CategoryRepository, UserRepository
from budget_gateway.services.activity import record_snapshot
from budget_gateway.services.base import MutationService


class CategoryService(MutationService):
    """Create, edit and guarded delete of categories"""

    def __init__(self, db: Session):
        super().__init__(db)
        self.categories = CategoryRepository(db)
        self.users = UserRepository(db)

    def list_categories(self) -> List[Category]:
        return self.categories.list_all()

    def create_category(self, user_id: str, data: Dict[str, Any]) -> Category:
        self._require_user(user_id)
        fields = {k: v for k, v in data.items() if v is not None}
        if not (fields.get("name") or "").strip():
            raise InvalidInputError("name is required")
        fields["name"] = fields["name"].strip()

        category = self._commit(lambda: self.categories.create(**fields))
        self.activity.log(
            user_id,
            "create",
            "category",
            category.id,
            f"Category '{category.name}' created",
            {"color": category.color, "icon": category.icon},
        )
        return category

    def update_category(self, user_id: str, category_id: str, changes: Dict[str, Any]) -> Category:
        """
        Raises:
            NotFoundError: Unknown user or category
            InvalidInputError: Empty name, color or icon
        """
        self._require_user(user_id)
        category = self.categories.get(category_id)
        if category is None:
            raise NotFoundError("category", category_id)
        changes = dict(changes)
        for key, value in changes.items():
            if value is None or not str(value).strip():
                raise InvalidInputError(f"{key} cannot be empty")
            if isinstance(value, str):
                changes[key] = value.strip()

        before = record_snapshot(category)
        updated = self._commit(lambda: self.categories.update(category_id, changes))
        self.activity.log(
            user_id,
            "update",
            "category",
            category_id,
            f"Category '{updated.name}' updated",
            {"changes": field_diff(before, changes)},
        )
        return updated

    def delete_category(self, user_id: str, category_id: str) -> None:
        """
        Delete a category nobody's bills point at.

        Goals referencing it become uncategorized; bills are never touched.

        Raises:
            NotFoundError: Unknown user or category
            ConflictError: At least one bill still references the category
        """
        self._require_user(user_id)
        category = self.categories.get(category_id)
        if category is None:
            raise NotFoundError("category", category_id)
        if self.categories.is_referenced(category_id):
            raise ConflictError(
                f"Category '{category.name}' is used by existing bills; reassign or delete them first"
            )

        snapshot = record_snapshot(category)

        def remove() -> None:
            self.db.query(Goal).filter(Goal.category_id == category_id).update(
                {Goal.category_id: None}, synchronize_session="fetch"
            )
            self.categories.delete(category_id)

        try:
            self._commit(remove)
        except IntegrityError as e:
            # A bill was attached between the check and the delete
            raise ConflictError(f"Category '{category.name}' is used by existing bills") from e

        self.activity.log(
            user_id,
            "delete",
            "category",
            category_id,
            f"Category '{snapshot['name']}' deleted",
            {"category": snapshot},
        )

    def _require_user(self, user_id: str) -> None:
        if self.users.get(user_id) is None:
            raise NotFoundError("user", user_id)
