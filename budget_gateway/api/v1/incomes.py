"""Income endpoints"""

from typing import List

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from budget_gateway.api.v1.schemas import IncomeCreate, IncomeResponse, IncomeUpdate
from budget_gateway.infrastructure.database.session import get_db
from budget_gateway.services.incomes import IncomeService

router = APIRouter()


@router.get("/incomes/{user_id}", response_model=List[IncomeResponse])
def list_incomes(user_id: str, db: Session = Depends(get_db)):
    return IncomeService(db).list_incomes(user_id)


@router.post("/incomes/{user_id}", response_model=IncomeResponse, status_code=201)
def create_income(user_id: str, body: IncomeCreate, db: Session = Depends(get_db)):
    """
    Create an income.

    Recurring incomes need receipt_day; one-off incomes (is_recurring=false) need date.
    """
    return IncomeService(db).create_income(user_id, body.model_dump(exclude_none=True))


@router.patch("/incomes/item/{income_id}", response_model=IncomeResponse)
def update_income(income_id: str, body: IncomeUpdate, db: Session = Depends(get_db)):
    return IncomeService(db).update_income(income_id, body.model_dump(exclude_unset=True))


@router.delete("/incomes/item/{income_id}", status_code=204)
def delete_income(income_id: str, db: Session = Depends(get_db)):
    IncomeService(db).delete_income(income_id)
    return Response(status_code=204)
