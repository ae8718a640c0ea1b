"""Data access layer for budget entities

Repositories flush but never commit; the caller owns the transaction.
Per-user collections are always filtered on user_id explicitly.
"""

from typing import Any, Dict, List, Optional
from sqlalchemy.orm import Session
from budget_gateway.infrastructure.database.models import (
    ActivityLog,
    Bill,
    Category,
    Goal,
    Income,
    Notification,
    Transaction,
    User,
    utcnow,
)


class _Repository:
    model = None

    def __init__(self, db: Session):
        self.db = db

    def get(self, entity_id: str):
        """Fetch one record by id, or None"""
        return self.db.get(self.model, entity_id)

    def create(self, **fields):
        record = self.model(**fields)
        self.db.add(record)
        self.db.flush()  # Get ID and defaults without committing
        return record

    def update(self, entity_id: str, changes: Dict[str, Any]):
        """Merge changes into an existing record; None when the id does not resolve"""
        record = self.get(entity_id)
        if record is None:
            return None
        for key, value in changes.items():
            setattr(record, key, value)
        if hasattr(record, "updated_at"):
            record.updated_at = utcnow()
        self.db.flush()
        return record

    def delete(self, entity_id: str) -> bool:
        record = self.get(entity_id)
        if record is None:
            return False
        self.db.delete(record)
        self.db.flush()
        return True


class UserRepository(_Repository):
    """Repository for users"""

    model = User

    def get_by_username(self, username: str) -> Optional[User]:
        return self.db.query(User).filter(User.username == username).first()


class CategoryRepository(_Repository):
    """Repository for shared categories"""

    model = Category

    def list_all(self) -> List[Category]:
        return self.db.query(Category).order_by(Category.name).all()

    def is_referenced(self, category_id: str) -> bool:
        """True when any bill still points at the category"""
        return self.db.query(Bill.id).filter(Bill.category_id == category_id).first() is not None


class BillRepository(_Repository):
    """Repository for bills"""

    model = Bill

    def list_by_user(self, user_id: str) -> List[Bill]:
        """Bills in creation order"""
        return (
            self.db.query(Bill)
            .filter(Bill.user_id == user_id)
            .order_by(Bill.created_at, Bill.id)
            .all()
        )


class IncomeRepository(_Repository):
    """Repository for incomes"""

    model = Income

    def list_by_user(self, user_id: str) -> List[Income]:
        """Incomes in creation order"""
        return (
            self.db.query(Income)
            .filter(Income.user_id == user_id)
            .order_by(Income.created_at, Income.id)
            .all()
        )


class TransactionRepository(_Repository):
    """Repository for realized transactions"""

    model = Transaction

    def list_by_user(self, user_id: str, month: Optional[int] = None, year: Optional[int] = None) -> List[Transaction]:
        query = self.db.query(Transaction).filter(Transaction.user_id == user_id)
        if month is not None:
            query = query.filter(Transaction.month == month)
        if year is not None:
            query = query.filter(Transaction.year == year)
        return query.order_by(Transaction.date, Transaction.created_at).all()


class GoalRepository(_Repository):
    """Repository for goals"""

    model = Goal

    def list_by_user(self, user_id: str, active_only: bool = False) -> List[Goal]:
        query = self.db.query(Goal).filter(Goal.user_id == user_id)
        if active_only:
            query = query.filter(Goal.is_active.is_(True))
        return query.order_by(Goal.created_at).all()


class NotificationRepository(_Repository):
    """Repository for notifications"""

    model = Notification

    def list_by_user(self, user_id: str, is_read: Optional[bool] = None) -> List[Notification]:
        """Newest first"""
        query = self.db.query(Notification).filter(Notification.user_id == user_id)
        if is_read is not None:
            query = query.filter(Notification.is_read.is_(is_read))
        return query.order_by(Notification.created_at.desc()).all()

    def mark_read(self, notification_id: str) -> bool:
        notification = self.get(notification_id)
        if notification is None:
            return False
        notification.is_read = True
        self.db.flush()
        return True

    def mark_all_read(self, user_id: str) -> int:
        """Mark every unread notification of the user as read; returns how many changed"""
        updated = (
            self.db.query(Notification)
            .filter(Notification.user_id == user_id, Notification.is_read.is_(False))
            .update({Notification.is_read: True}, synchronize_session="fetch")
        )
        self.db.flush()
        return updated


class ActivityLogRepository:
    """Append-only repository for activity logs: no update, no delete"""

    def __init__(self, db: Session):
        self.db = db

    def append(
        self,
        user_id: str,
        action: str,
        entity_type: str,
        entity_id: Optional[str],
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> ActivityLog:
        entry = ActivityLog(
            user_id=user_id,
            action=action,
            entity_type=entity_type,
            entity_id=entity_id,
            message=message,
            details=details,
        )
        self.db.add(entry)
        self.db.flush()
        return entry

    def list_by_user(self, user_id: str, limit: Optional[int] = None) -> List[ActivityLog]:
        """Newest first, capped at limit when given"""
        query = (
            self.db.query(ActivityLog)
            .filter(ActivityLog.user_id == user_id)
            .order_by(ActivityLog.created_at.desc())
        )
        if limit is not None:
            query = query.limit(limit)
        return query.all()
