"""Income management"""

from typing import Any, Dict, List

from sqlalchemy.orm import Session

from budget_gateway.domain.billing import field_diff
from budget_gateway.domain.calendar import validate_income_schedule
from budget_gateway.domain.exceptions import InvalidInputError, NotFoundError
from budget_gateway.infrastructure.database.models import Income
from budget_gateway.infrastructure.database.repositories import IncomeRepository, UserRepository
from budget_gateway.services.activity import record_snapshot
from budget_gateway.services.base import MutationService


class IncomeService(MutationService):
    """Create, update and delete incomes, logging each mutation"""

    def __init__(self, db: Session):
        super().__init__(db)
        self.incomes = IncomeRepository(db)
        self.users = UserRepository(db)

    def list_incomes(self, user_id: str) -> List[Income]:
        return self.incomes.list_by_user(user_id)

    def create_income(self, user_id: str, data: Dict[str, Any]) -> Income:
        """
        Raises:
            NotFoundError: Unknown user
            InvalidInputError: Missing source/amount or a schedule that does not match is_recurring
        """
        if self.users.get(user_id) is None:
            raise NotFoundError("user", user_id)

        fields = dict(data)
        fields.setdefault("is_recurring", True)
        if not (fields.get("source") or "").strip():
            raise InvalidInputError("source is required")
        if fields.get("amount") is None:
            raise InvalidInputError("amount is required")
        fields["amount"] = self._amount(fields["amount"], "amount")
        fields.setdefault("description", "")
        validate_income_schedule(fields["is_recurring"], fields.get("receipt_day"), fields.get("date"))

        income = self._commit(lambda: self.incomes.create(user_id=user_id, **fields))
        self.activity.log(
            user_id,
            "create",
            "income",
            income.id,
            f"Income '{income.description or income.source}' created",
            {"source": income.source, "amount": income.amount, "is_recurring": income.is_recurring},
        )
        return income

    def update_income(self, income_id: str, changes: Dict[str, Any]) -> Income:
        """
        Raises:
            NotFoundError: Unknown income
            InvalidInputError: Bad amount or schedule after merging the changes
        """
        income = self.incomes.get(income_id)
        if income is None:
            raise NotFoundError("income", income_id)

        fields = dict(changes)
        for required in ("source", "amount", "is_recurring"):
            if required in fields and fields[required] in (None, ""):
                raise InvalidInputError(f"{required} cannot be empty")
        if "amount" in fields:
            fields["amount"] = self._amount(fields["amount"], "amount")
        validate_income_schedule(
            fields.get("is_recurring", income.is_recurring),
            fields.get("receipt_day", income.receipt_day),
            fields.get("date", income.date),
        )

        before = record_snapshot(income)
        updated = self._commit(lambda: self.incomes.update(income_id, fields))
        self.activity.log(
            updated.user_id,
            "update",
            "income",
            income_id,
            f"Income '{updated.description or updated.source}' updated",
            {"changes": field_diff(before, fields)},
        )
        return updated

    def delete_income(self, income_id: str) -> None:
        income = self.incomes.get(income_id)
        if income is None:
            raise NotFoundError("income", income_id)

        snapshot = record_snapshot(income)
        self._commit(lambda: self.incomes.delete(income_id))
        self.activity.log(
            snapshot["user_id"],
            "delete",
            "income",
            income_id,
            f"Income '{snapshot['description'] or snapshot['source']}' deleted",
            {"income": snapshot},
        )
