"""GET /v1/dashboard/{user_id} - monthly summary"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from budget_gateway.api.dependencies import get_today
from budget_gateway.api.v1.schemas import (
    CategoryBreakdownItem,
    CategoryResponse,
    DashboardResponse,
    IncomeResponse,
    TransactionResponse,
)
from budget_gateway.api.v1.serializers import bill_response
from budget_gateway.infrastructure.database.session import get_db
from budget_gateway.services.dashboard import DashboardService

router = APIRouter()


@router.get("/dashboard/{user_id}", response_model=DashboardResponse)
def get_dashboard(
    user_id: str,
    reference_date: Optional[date] = Query(None, description="Date the figures are computed against"),
    today: date = Depends(get_today),
    db: Session = Depends(get_db),
):
    """
    Monthly income, expenses, balance, upcoming bills and category breakdown.

    Returns:
        Aggregates plus the bills, incomes, categories and current-month transactions behind them
    """
    as_of = reference_date or today
    dashboard = DashboardService(db).get_dashboard(user_id, as_of)
    summary = dashboard.summary

    return DashboardResponse(
        reference_date=as_of,
        monthly_income=summary.monthly_income,
        monthly_expenses=summary.monthly_expenses,
        monthly_balance=summary.monthly_balance,
        upcoming_bills=summary.upcoming_bills,
        bills=[bill_response(b, as_of) for b in dashboard.bills],
        incomes=[IncomeResponse.model_validate(i) for i in dashboard.incomes],
        categories=[CategoryResponse.model_validate(c) for c in dashboard.categories],
        category_breakdown=[
            CategoryBreakdownItem(
                category_id=c.category_id,
                name=c.name,
                color=c.color,
                icon=c.icon,
                total_amount=c.total_amount,
                percentage=c.percentage,
            )
            for c in summary.category_breakdown
        ],
        transactions=[TransactionResponse.model_validate(t) for t in dashboard.transactions],
    )
