"""Pydantic schemas for API request/response validation"""

import datetime as dt
from decimal import Decimal
from typing import Annotated, Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

Money = Annotated[Decimal, Field(ge=0, max_digits=10, decimal_places=2)]
DayOfMonth = Annotated[int, Field(ge=1, le=31)]
HexColor = Annotated[str, Field(pattern=r"^#[0-9A-Fa-f]{6}$")]

GoalType = Literal["savings", "expense_limit", "income_target"]
GoalPeriod = Literal["monthly", "yearly", "custom"]
NotificationKind = Literal["warning", "info", "success", "error"]


class _Partial(BaseModel):
    """PATCH bodies: unknown fields are rejected, unset fields are left alone"""

    model_config = ConfigDict(extra="forbid")


# Users

class UserCreate(BaseModel):
    """Request body for POST /v1/users"""

    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)
    email: Optional[str] = None
    name: str = Field(..., min_length=1)


class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    username: str
    email: Optional[str] = None
    name: str


# Categories

class CategoryCreate(BaseModel):
    """Request body for POST /v1/categories"""

    name: str = Field(..., min_length=1)
    color: Optional[HexColor] = None
    icon: Optional[str] = None


class CategoryUpdate(_Partial):
    name: Optional[str] = Field(None, min_length=1)
    color: Optional[HexColor] = None
    icon: Optional[str] = None


class CategoryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    color: str
    icon: str


# Bills

class BillCreate(BaseModel):
    """Request body for POST /v1/bills/{user_id}"""

    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    amount: Optional[Money] = None
    due_day: DayOfMonth
    category_id: Optional[str] = None
    is_recurring: bool = True
    is_installment: bool = False
    total_installments: Optional[int] = Field(None, ge=1)
    current_installment: Optional[int] = Field(None, ge=1)
    original_amount: Optional[Money] = None


class BillUpdate(_Partial):
    """Request body for PATCH /v1/bills/item/{bill_id}"""

    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    amount: Optional[Money] = None
    due_day: Optional[DayOfMonth] = None
    category_id: Optional[str] = None
    is_recurring: Optional[bool] = None
    is_paid: Optional[bool] = None
    is_installment: Optional[bool] = None
    total_installments: Optional[int] = Field(None, ge=1)
    current_installment: Optional[int] = Field(None, ge=1)
    original_amount: Optional[Money] = None
    payment_date: Optional[dt.date] = None
    payment_method: Optional[str] = None
    payment_source: Optional[str] = None


class PaymentRequest(BaseModel):
    """Request body for POST /v1/bills/item/{bill_id}/pay"""

    payment_date: Optional[dt.date] = None
    payment_method: Optional[str] = None
    payment_source: Optional[str] = None


class BillResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    category_id: Optional[str] = None
    name: str
    description: Optional[str] = None
    amount: Decimal
    due_day: int
    is_paid: bool
    is_recurring: bool
    is_installment: bool
    total_installments: Optional[int] = None
    current_installment: Optional[int] = None
    original_amount: Optional[Decimal] = None
    payment_date: Optional[dt.date] = None
    payment_method: Optional[str] = None
    payment_source: Optional[str] = None
    created_at: dt.datetime
    updated_at: dt.datetime
    # Derived from the reference date on every read
    status: str
    days_until_due: int
    days_overdue: int = 0


# Incomes

class IncomeCreate(BaseModel):
    """Request body for POST /v1/incomes/{user_id}"""

    source: str = Field(..., min_length=1)
    description: str = ""
    amount: Money
    receipt_day: Optional[DayOfMonth] = None
    is_recurring: bool = True
    date: Optional[dt.date] = None


class IncomeUpdate(_Partial):
    source: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    amount: Optional[Money] = None
    receipt_day: Optional[DayOfMonth] = None
    is_recurring: Optional[bool] = None
    date: Optional[dt.date] = None


class IncomeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    source: str
    description: str
    amount: Decimal
    receipt_day: Optional[int] = None
    is_recurring: bool
    date: Optional[dt.date] = None
    created_at: dt.datetime


# Transactions

class TransactionCreate(BaseModel):
    """Request body for POST /v1/transactions/{user_id}"""

    bill_id: Optional[str] = None
    income_id: Optional[str] = None
    type: Literal["expense", "income"]
    amount: Money
    date: dt.date
    month: Optional[int] = Field(None, ge=1, le=12)
    year: Optional[int] = Field(None, ge=1900)
    is_paid: bool = False

    @model_validator(mode="after")
    def check_source(self) -> "TransactionCreate":
        if self.bill_id and self.income_id:
            raise ValueError("A transaction references either a bill or an income, not both")
        if self.bill_id and self.type != "expense":
            raise ValueError("Bill transactions must be expenses")
        if self.income_id and self.type != "income":
            raise ValueError("Income transactions must be incomes")
        return self


class TransactionUpdate(_Partial):
    amount: Optional[Money] = None
    date: Optional[dt.date] = None
    month: Optional[int] = Field(None, ge=1, le=12)
    year: Optional[int] = Field(None, ge=1900)
    is_paid: Optional[bool] = None


class TransactionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    bill_id: Optional[str] = None
    income_id: Optional[str] = None
    type: str
    amount: Decimal
    date: dt.date
    month: int
    year: int
    is_paid: bool
    created_at: dt.datetime


# Goals

class GoalCreate(BaseModel):
    """Request body for POST /v1/goals/{user_id}"""

    category_id: Optional[str] = None
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    type: GoalType
    target_amount: Money
    current_amount: Optional[Money] = None
    period: GoalPeriod
    target_date: Optional[dt.date] = None
    color: Optional[HexColor] = None
    icon: Optional[str] = None


class GoalUpdate(_Partial):
    category_id: Optional[str] = None
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    type: Optional[GoalType] = None
    target_amount: Optional[Money] = None
    current_amount: Optional[Money] = None
    period: Optional[GoalPeriod] = None
    target_date: Optional[dt.date] = None
    is_active: Optional[bool] = None
    color: Optional[HexColor] = None
    icon: Optional[str] = None


class GoalResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    category_id: Optional[str] = None
    name: str
    description: Optional[str] = None
    type: str
    target_amount: Decimal
    current_amount: Decimal
    period: str
    target_date: Optional[dt.date] = None
    is_active: bool
    color: str
    icon: str
    created_at: dt.datetime
    updated_at: dt.datetime
    progress_percentage: float = 0.0


# Notifications

class NotificationCreate(BaseModel):
    """Request body for POST /v1/notifications/{user_id}"""

    title: str = Field(..., min_length=1)
    message: str = Field(..., min_length=1)
    type: NotificationKind
    related_id: Optional[str] = None


class NotificationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    title: str
    message: str
    type: str
    is_read: bool
    related_id: Optional[str] = None
    created_at: dt.datetime
    icon: str
    color: str


class MarkReadResponse(BaseModel):
    success: bool
    updated: int = 0


# Activity logs

class ActivityLogResponse(BaseModel):
    id: str
    user_id: str
    action: str
    entity_type: str
    entity_id: Optional[str] = None
    message: str
    metadata: Optional[Dict[str, Any]] = None
    created_at: dt.datetime


# Dashboard and calendar

class CategoryBreakdownItem(BaseModel):
    category_id: str
    name: str
    color: str
    icon: str
    total_amount: Decimal
    percentage: float


class DashboardResponse(BaseModel):
    """Response for GET /v1/dashboard/{user_id}"""

    reference_date: dt.date
    monthly_income: Decimal
    monthly_expenses: Decimal
    monthly_balance: Decimal
    upcoming_bills: int
    bills: List[BillResponse]
    incomes: List[IncomeResponse]
    categories: List[CategoryResponse]
    category_breakdown: List[CategoryBreakdownItem]
    transactions: List[TransactionResponse]


class OccurrenceSchema(BaseModel):
    entity_id: str
    kind: str
    name: str
    occurrence_date: dt.date
    amount: Decimal


class CalendarResponse(BaseModel):
    """Response for GET /v1/calendar/{user_id}"""

    start: dt.date
    end: dt.date
    occurrences: List[OccurrenceSchema]


# Assistant

class AdviceSchema(BaseModel):
    suggestion: str
    potential_savings: Decimal
    priority: str
    category: str
    action_items: List[str]


class AnalysisResponse(BaseModel):
    analysis: str


class ReminderResponse(BaseModel):
    sent: int
    total: int
    skipped_reason: Optional[str] = None
