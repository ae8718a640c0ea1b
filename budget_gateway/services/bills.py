"""Bill lifecycle manager - every valid state transition of a bill"""

from datetime import date
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from budget_gateway.domain.billing import (
    cleared_payment_fields,
    field_diff,
    payment_fields,
    resolve_payment_changes,
    validate_day_of_month,
)
from budget_gateway.domain.exceptions import InvalidInputError, NotFoundError
from budget_gateway.domain.installments import installment_amount, validate_installment_counters
from budget_gateway.infrastructure.database.models import Bill
from budget_gateway.infrastructure.database.repositories import (
    BillRepository,
    CategoryRepository,
    UserRepository,
)
from budget_gateway.infrastructure.observability.metrics import record_bill_mutation
from budget_gateway.services.activity import record_snapshot
from budget_gateway.services.base import MutationService

INSTALLMENT_FIELDS = ("total_installments", "current_installment", "original_amount")
REQUIRED_FIELDS = ("name", "amount", "due_day", "is_recurring", "is_paid", "is_installment")


class BillService(MutationService):
    """Creates, updates, pays, unpays and deletes bills, logging each mutation"""

    def __init__(self, db: Session):
        super().__init__(db)
        self.bills = BillRepository(db)
        self.categories = CategoryRepository(db)
        self.users = UserRepository(db)

    def list_bills(self, user_id: str) -> List[Bill]:
        return self.bills.list_by_user(user_id)

    def get_bill(self, bill_id: str) -> Bill:
        bill = self.bills.get(bill_id)
        if bill is None:
            raise NotFoundError("bill", bill_id)
        return bill

    def create_bill(self, user_id: str, data: Dict[str, Any]) -> Bill:
        """
        Create a pending bill.

        Raises:
            NotFoundError: Unknown user
            InvalidInputError: Empty name, bad amount or due day, unknown category,
                inconsistent installment counters
        """
        if self.users.get(user_id) is None:
            raise NotFoundError("user", user_id)

        fields = self._validated_fields(data)
        if not fields.get("name"):
            raise InvalidInputError("name is required")
        if "due_day" not in fields:
            raise InvalidInputError("due_day is required")

        if fields.get("is_installment"):
            validate_installment_counters(fields.get("total_installments"), fields.get("current_installment"))
            if fields.get("amount") is None:
                if fields.get("original_amount") is None:
                    raise InvalidInputError("amount or original_amount is required")
                fields["amount"] = installment_amount(
                    fields["original_amount"], fields["total_installments"], fields["current_installment"]
                )
        else:
            fields["is_installment"] = False
            for name in INSTALLMENT_FIELDS:
                fields[name] = None

        if fields.get("amount") is None:
            raise InvalidInputError("amount is required")

        fields.setdefault("is_recurring", True)
        fields.update(cleared_payment_fields())

        bill = self._commit(lambda: self.bills.create(user_id=user_id, **fields))
        record_bill_mutation("create")
        self.activity.log(
            user_id,
            "create",
            "bill",
            bill.id,
            f"Bill '{bill.name}' created",
            {"category_id": bill.category_id, "amount": bill.amount},
        )
        return bill

    def update_bill(self, bill_id: str, changes: Dict[str, Any]) -> Bill:
        """
        Merge a partial update.

        Payment metadata follows the state machine: is_paid=True needs
        payment_date and payment_method, is_paid=False clears them.

        Raises:
            NotFoundError: Unknown bill
            InvalidInputError: Constraint violation in the changes
        """
        bill = self.get_bill(bill_id)
        fields = self._validated_fields(changes)
        for required in REQUIRED_FIELDS:
            if required in fields and fields[required] in (None, ""):
                raise InvalidInputError(f"{required} cannot be empty")
        fields = resolve_payment_changes(bill.is_paid, fields)
        if {"is_installment", *INSTALLMENT_FIELDS} & fields.keys():
            if fields.get("is_installment", bill.is_installment):
                validate_installment_counters(
                    fields.get("total_installments", bill.total_installments),
                    fields.get("current_installment", bill.current_installment),
                )
            else:
                for name in INSTALLMENT_FIELDS:
                    fields[name] = None

        action = "payment" if fields.get("is_paid") and not bill.is_paid else "update"
        return self._apply(bill, fields, action, "Bill '{name}' updated")

    def mark_paid(
        self,
        bill_id: str,
        payment_date: Optional[date],
        payment_method: Optional[str],
        payment_source: Optional[str] = None,
    ) -> Bill:
        """
        Pending -> Paid.

        Raises:
            NotFoundError: Unknown bill
            InvalidInputError: payment_date or payment_method missing
        """
        bill = self.get_bill(bill_id)
        fields = payment_fields(payment_date, payment_method, payment_source)
        return self._apply(bill, fields, "payment", "Bill '{name}' marked as paid")

    def mark_unpaid(self, bill_id: str) -> Bill:
        """Paid -> Pending; payment metadata is always cleared"""
        bill = self.get_bill(bill_id)
        return self._apply(bill, cleared_payment_fields(), "update", "Bill '{name}' marked as unpaid")

    def delete_bill(self, bill_id: str) -> None:
        """
        Remove a bill in any state; the log keeps the pre-deletion snapshot.

        Raises:
            NotFoundError: Unknown bill
        """
        bill = self.get_bill(bill_id)
        snapshot = record_snapshot(bill)

        self._commit(lambda: self.bills.delete(bill_id))
        record_bill_mutation("delete")
        self.activity.log(
            snapshot["user_id"],
            "delete",
            "bill",
            bill_id,
            f"Bill '{snapshot['name']}' deleted",
            {"bill": snapshot},
        )

    def _apply(self, bill: Bill, fields: Dict[str, Any], action: str, message: str) -> Bill:
        before = record_snapshot(bill)
        updated = self._commit(lambda: self.bills.update(bill.id, fields))
        diff = field_diff(before, {k: getattr(updated, k) for k in fields})

        record_bill_mutation(action)
        self.activity.log(
            updated.user_id,
            action,
            "bill",
            updated.id,
            message.format(name=updated.name),
            {"changes": diff},
        )
        return updated

    def _validated_fields(self, data: Dict[str, Any]) -> Dict[str, Any]:
        fields = dict(data)
        if "name" in fields and fields["name"] is not None:
            fields["name"] = fields["name"].strip()
        if "amount" in fields and fields["amount"] is not None:
            fields["amount"] = self._amount(fields["amount"], "amount")
        if fields.get("original_amount") is not None:
            fields["original_amount"] = self._amount(fields["original_amount"], "original_amount")
        if "due_day" in fields:
            validate_day_of_month(fields["due_day"])
        if fields.get("category_id") is not None and self.categories.get(fields["category_id"]) is None:
            raise InvalidInputError(f"Unknown category {fields['category_id']}")
        return fields
