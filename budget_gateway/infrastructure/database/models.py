"""SQLAlchemy ORM models for the household budget store"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, String, Boolean, DateTime, Date, Integer, Numeric, ForeignKey, Text, JSON
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()


def new_id() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(Base):
    """Identity anchor; every owned record carries its id"""

    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=new_id)
    username = Column(Text, nullable=False, unique=True)
    password_hash = Column(Text, nullable=False)
    email = Column(Text, nullable=True)
    name = Column(Text, nullable=False)


class Category(Base):
    """Shared label for grouping bills; not owned by a user"""

    __tablename__ = "categories"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(Text, nullable=False)
    color = Column(Text, nullable=False, default="#3B82F6")
    icon = Column(Text, nullable=False, default="fas fa-tag")

    bills = relationship("Bill", back_populates="category")


class Bill(Base):
    """Payable obligation repeating on due_day"""

    __tablename__ = "bills"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    # No ON DELETE: category deletion is refused while bills reference it
    category_id = Column(String(36), ForeignKey("categories.id"), nullable=True, index=True)
    name = Column(Text, nullable=False)
    description = Column(Text, nullable=True)
    amount = Column(Numeric(10, 2), nullable=False)
    due_day = Column(Integer, nullable=False)
    is_paid = Column(Boolean, nullable=False, default=False)
    is_recurring = Column(Boolean, nullable=False, default=True)

    is_installment = Column(Boolean, nullable=False, default=False)
    total_installments = Column(Integer, nullable=True)
    current_installment = Column(Integer, nullable=True)
    original_amount = Column(Numeric(10, 2), nullable=True)

    payment_date = Column(Date, nullable=True)
    payment_method = Column(Text, nullable=True)  # "pix", "credit", "debit", "cash", ...
    payment_source = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    category = relationship("Category", back_populates="bills")


class Income(Base):
    """Receivable; recurring on receipt_day or one-off on date"""

    __tablename__ = "incomes"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    source = Column(Text, nullable=False)
    description = Column(Text, nullable=False)
    amount = Column(Numeric(10, 2), nullable=False)
    receipt_day = Column(Integer, nullable=True)
    is_recurring = Column(Boolean, nullable=False, default=True)
    date = Column(Date, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)


class Transaction(Base):
    """Realized monthly instance of a bill or income"""

    __tablename__ = "transactions"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    bill_id = Column(String(36), ForeignKey("bills.id", ondelete="SET NULL"), nullable=True)
    income_id = Column(String(36), ForeignKey("incomes.id", ondelete="SET NULL"), nullable=True)
    type = Column(Text, nullable=False)  # "expense" or "income"
    amount = Column(Numeric(10, 2), nullable=False)
    date = Column(Date, nullable=False)
    month = Column(Integer, nullable=False, index=True)
    year = Column(Integer, nullable=False, index=True)
    is_paid = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)


class Goal(Base):
    """Savings, expense-limit or income target with progress"""

    __tablename__ = "goals"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    category_id = Column(String(36), ForeignKey("categories.id"), nullable=True)
    name = Column(Text, nullable=False)
    description = Column(Text, nullable=True)
    type = Column(Text, nullable=False)  # "savings" | "expense_limit" | "income_target"
    target_amount = Column(Numeric(10, 2), nullable=False)
    current_amount = Column(Numeric(10, 2), nullable=False, default=0)
    period = Column(Text, nullable=False)  # "monthly" | "yearly" | "custom"
    target_date = Column(Date, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    color = Column(Text, nullable=False, default="#3B82F6")
    icon = Column(Text, nullable=False, default="fas fa-bullseye")
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)


class Notification(Base):
    """User-facing alert"""

    __tablename__ = "notifications"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    title = Column(Text, nullable=False)
    message = Column(Text, nullable=False)
    type = Column(Text, nullable=False)  # "warning" | "info" | "success" | "error"
    is_read = Column(Boolean, nullable=False, default=False)
    related_id = Column(String(36), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, index=True)


class ActivityLog(Base):
    """Append-only audit record; rows are never updated or deleted"""

    __tablename__ = "activity_logs"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    action = Column(Text, nullable=False)  # "create" | "update" | "delete" | "payment"
    entity_type = Column(Text, nullable=False)  # "bill" | "income" | "category" | "goal"
    entity_id = Column(String(36), nullable=True)
    message = Column(Text, nullable=False)
    # "metadata" is reserved on declarative classes
    details = Column("metadata", JSON, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, index=True)
