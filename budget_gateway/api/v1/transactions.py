"""Transaction endpoints - realized monthly instances of bills and incomes"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from budget_gateway.api.v1.schemas import TransactionCreate, TransactionResponse, TransactionUpdate
from budget_gateway.domain.exceptions import InvalidInputError, NotFoundError
from budget_gateway.domain.money import to_money
from budget_gateway.infrastructure.database.session import get_db
from budget_gateway.infrastructure.database.repositories import (
    BillRepository,
    IncomeRepository,
    TransactionRepository,
    UserRepository,
)

router = APIRouter()


@router.get("/transactions/{user_id}", response_model=List[TransactionResponse])
def list_transactions(
    user_id: str,
    month: Optional[int] = Query(None, ge=1, le=12),
    year: Optional[int] = Query(None),
    db: Session = Depends(get_db),
):
    return TransactionRepository(db).list_by_user(user_id, month, year)


@router.post("/transactions/{user_id}", response_model=TransactionResponse, status_code=201)
def create_transaction(user_id: str, body: TransactionCreate, db: Session = Depends(get_db)):
    """Record a realized expense or income; month and year default to those of date"""
    if UserRepository(db).get(user_id) is None:
        raise NotFoundError("user", user_id)
    if body.bill_id and BillRepository(db).get(body.bill_id) is None:
        raise InvalidInputError(f"Unknown bill {body.bill_id}")
    if body.income_id and IncomeRepository(db).get(body.income_id) is None:
        raise InvalidInputError(f"Unknown income {body.income_id}")

    fields = body.model_dump()
    fields["amount"] = to_money(body.amount)
    fields["month"] = body.month or body.date.month
    fields["year"] = body.year or body.date.year

    transaction = TransactionRepository(db).create(user_id=user_id, **fields)
    db.commit()
    return transaction


@router.patch("/transactions/item/{transaction_id}", response_model=TransactionResponse)
def update_transaction(transaction_id: str, body: TransactionUpdate, db: Session = Depends(get_db)):
    changes = body.model_dump(exclude_unset=True)
    if any(changes.get(k) is None for k in changes):
        raise InvalidInputError("Transaction fields cannot be cleared")
    if "amount" in changes:
        changes["amount"] = to_money(changes["amount"])
    if "date" in changes:
        changes.setdefault("month", changes["date"].month)
        changes.setdefault("year", changes["date"].year)

    transaction = TransactionRepository(db).update(transaction_id, changes)
    if transaction is None:
        raise NotFoundError("transaction", transaction_id)
    db.commit()
    return transaction
