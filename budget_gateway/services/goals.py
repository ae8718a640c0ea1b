"""Goal management"""

from typing import Any, Dict, List

from sqlalchemy.orm import Session

from budget_gateway.domain.billing import field_diff
from budget_gateway.domain.exceptions import InvalidInputError, NotFoundError
from budget_gateway.infrastructure.database.models import Goal
from budget_gateway.infrastructure.database.repositories import CategoryRepository, GoalRepository, UserRepository
from budget_gateway.services.activity import record_snapshot
from budget_gateway.services.base import MutationService

GOAL_TYPES = ("savings", "expense_limit", "income_target")
GOAL_PERIODS = ("monthly", "yearly", "custom")
MONEY_FIELDS = ("target_amount", "current_amount")


class GoalService(MutationService):
    """Create, update and delete goals, logging each mutation"""

    def __init__(self, db: Session):
        super().__init__(db)
        self.goals = GoalRepository(db)
        self.categories = CategoryRepository(db)
        self.users = UserRepository(db)

    def list_goals(self, user_id: str, active_only: bool = False) -> List[Goal]:
        return self.goals.list_by_user(user_id, active_only)

    def create_goal(self, user_id: str, data: Dict[str, Any]) -> Goal:
        """
        Raises:
            NotFoundError: Unknown user
            InvalidInputError: Bad type, period, amount or category
        """
        if self.users.get(user_id) is None:
            raise NotFoundError("user", user_id)

        fields = {k: v for k, v in data.items() if v is not None}
        for required in ("name", "type", "target_amount", "period"):
            if fields.get(required) in (None, ""):
                raise InvalidInputError(f"{required} is required")
        fields = self._validated_fields(fields)

        goal = self._commit(lambda: self.goals.create(user_id=user_id, **fields))
        self.activity.log(
            user_id,
            "create",
            "goal",
            goal.id,
            f"Goal '{goal.name}' created",
            {"type": goal.type, "target_amount": goal.target_amount, "period": goal.period},
        )
        return goal

    def update_goal(self, goal_id: str, changes: Dict[str, Any]) -> Goal:
        goal = self.goals.get(goal_id)
        if goal is None:
            raise NotFoundError("goal", goal_id)

        for key, value in changes.items():
            if value is None and key not in ("description", "target_date", "category_id"):
                raise InvalidInputError(f"{key} cannot be empty")
        fields = self._validated_fields(dict(changes))

        before = record_snapshot(goal)
        updated = self._commit(lambda: self.goals.update(goal_id, fields))
        self.activity.log(
            updated.user_id,
            "update",
            "goal",
            goal_id,
            f"Goal '{updated.name}' updated",
            {"changes": field_diff(before, fields)},
        )
        return updated

    def delete_goal(self, goal_id: str) -> None:
        goal = self.goals.get(goal_id)
        if goal is None:
            raise NotFoundError("goal", goal_id)

        snapshot = record_snapshot(goal)
        self._commit(lambda: self.goals.delete(goal_id))
        self.activity.log(
            snapshot["user_id"],
            "delete",
            "goal",
            goal_id,
            f"Goal '{snapshot['name']}' deleted",
            {"goal": snapshot},
        )

    def _validated_fields(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        if "type" in fields and fields["type"] not in GOAL_TYPES:
            raise InvalidInputError(f"type must be one of {', '.join(GOAL_TYPES)}")
        if "period" in fields and fields["period"] not in GOAL_PERIODS:
            raise InvalidInputError(f"period must be one of {', '.join(GOAL_PERIODS)}")
        for name in MONEY_FIELDS:
            if name in fields:
                fields[name] = self._amount(fields[name], name)
        if fields.get("category_id") is not None and self.categories.get(fields["category_id"]) is None:
            raise InvalidInputError(f"Unknown category {fields['category_id']}")
        return fields
