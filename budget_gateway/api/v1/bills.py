"""Bill endpoints - CRUD plus the paid/unpaid transitions"""

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from budget_gateway.api.dependencies import get_today
from budget_gateway.api.v1.schemas import BillCreate, BillResponse, BillUpdate, PaymentRequest
from budget_gateway.api.v1.serializers import bill_response
from budget_gateway.infrastructure.database.session import get_db
from budget_gateway.services.bills import BillService

router = APIRouter()


@router.get("/bills/{user_id}", response_model=List[BillResponse])
def list_bills(
    user_id: str,
    reference_date: Optional[date] = Query(None, description="Date the status is computed against"),
    today: date = Depends(get_today),
    db: Session = Depends(get_db),
):
    """List a user's bills with their derived status"""
    as_of = reference_date or today
    return [bill_response(b, as_of) for b in BillService(db).list_bills(user_id)]


@router.post("/bills/{user_id}", response_model=BillResponse, status_code=201)
def create_bill(
    user_id: str,
    body: BillCreate,
    today: date = Depends(get_today),
    db: Session = Depends(get_db),
):
    """Create a pending bill"""
    bill = BillService(db).create_bill(user_id, body.model_dump(exclude_none=True))
    return bill_response(bill, today)


@router.patch("/bills/item/{bill_id}", response_model=BillResponse)
def update_bill(
    bill_id: str,
    body: BillUpdate,
    today: date = Depends(get_today),
    db: Session = Depends(get_db),
):
    """Partial update; only fields present in the body change"""
    bill = BillService(db).update_bill(bill_id, body.model_dump(exclude_unset=True))
    return bill_response(bill, today)


@router.post("/bills/item/{bill_id}/pay", response_model=BillResponse)
def mark_bill_paid(
    bill_id: str,
    body: PaymentRequest,
    today: date = Depends(get_today),
    db: Session = Depends(get_db),
):
    """Pending -> Paid; payment_date and payment_method are required"""
    bill = BillService(db).mark_paid(bill_id, body.payment_date, body.payment_method, body.payment_source)
    return bill_response(bill, today)


@router.post("/bills/item/{bill_id}/unpay", response_model=BillResponse)
def mark_bill_unpaid(
    bill_id: str,
    today: date = Depends(get_today),
    db: Session = Depends(get_db),
):
    """Paid -> Pending; clears all payment details"""
    bill = BillService(db).mark_unpaid(bill_id)
    return bill_response(bill, today)


@router.delete("/bills/item/{bill_id}", status_code=204)
def delete_bill(bill_id: str, db: Session = Depends(get_db)):
    BillService(db).delete_bill(bill_id)
    return Response(status_code=204)
