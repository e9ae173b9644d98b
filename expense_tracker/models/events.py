"""
Change Event Models for Expense Tracker

Every mutation of the expense store, and every load or persist problem,
produces one of these events. Subscribers (the UI, the audit logger)
receive them after the change has been written through to storage.

DESIGN DECISION: Events are plain data. The store never depends on
what a subscriber does with them.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ExpenseEventType(str, Enum):
    """Types of store events."""
    # Loading
    STORE_LOADED = "store_loaded"
    LOAD_FAILED = "load_failed"

    # Mutations
    EXPENSE_ADDED = "expense_added"
    EXPENSES_DELETED = "expenses_deleted"
    EXPENSES_SORTED = "expenses_sorted"

    # Persistence
    PERSIST_FAILED = "persist_failed"


class EventSeverity(str, Enum):
    """Severity level for store events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class ExpenseEvent(BaseModel):
    """
    A single store event.

    `entity_id` is set when the event concerns exactly one expense.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: ExpenseEventType = Field(
        ...,
        description="Type of event"
    )
    severity: EventSeverity = Field(
        default=EventSeverity.INFO,
        description="Event severity"
    )

    entity_id: Optional[UUID] = Field(
        default=None,
        description="ID of the expense this event relates to"
    )

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )

    error_message: Optional[str] = None

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_id": str(self.entity_id) if self.entity_id else None,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
        }


class ExpenseEventBuilder:
    """
    Helper class to build store events.

    Usage:
        event = ExpenseEventBuilder.expense_added(expense_id, name, amount, category, count)
        event = ExpenseEventBuilder.persist_failed(key, error_message)
    """

    @staticmethod
    def store_loaded(key: str, count: int) -> ExpenseEvent:
        return ExpenseEvent(
            event_type=ExpenseEventType.STORE_LOADED,
            description=f"Loaded {count} expenses from '{key}'",
            details={
                "key": key,
                "count": count,
            },
        )

    @staticmethod
    def load_failed(key: str, error_message: str) -> ExpenseEvent:
        return ExpenseEvent(
            event_type=ExpenseEventType.LOAD_FAILED,
            severity=EventSeverity.WARNING,
            description=f"Could not load expenses from '{key}'",
            details={
                "key": key,
            },
            error_message=error_message,
        )

    @staticmethod
    def expense_added(
        expense_id: UUID,
        name: str,
        amount: float,
        category: str,
        count: int,
    ) -> ExpenseEvent:
        return ExpenseEvent(
            event_type=ExpenseEventType.EXPENSE_ADDED,
            entity_id=expense_id,
            description=f"Expense added: {name}",
            details={
                "name": name,
                "amount": amount,
                "category": category,
                "count": count,
            },
        )

    @staticmethod
    def expenses_deleted(expense_ids: list[UUID], count: int) -> ExpenseEvent:
        return ExpenseEvent(
            event_type=ExpenseEventType.EXPENSES_DELETED,
            entity_id=expense_ids[0] if len(expense_ids) == 1 else None,
            description=f"Deleted {len(expense_ids)} expenses",
            details={
                "expense_ids": [str(expense_id) for expense_id in expense_ids],
                "count": count,
            },
        )

    @staticmethod
    def expenses_sorted(ascending: bool, count: int) -> ExpenseEvent:
        direction = "ascending" if ascending else "descending"
        return ExpenseEvent(
            event_type=ExpenseEventType.EXPENSES_SORTED,
            description=f"Expenses sorted by amount ({direction})",
            details={
                "ascending": ascending,
                "count": count,
            },
        )

    @staticmethod
    def persist_failed(key: str, error_message: str) -> ExpenseEvent:
        return ExpenseEvent(
            event_type=ExpenseEventType.PERSIST_FAILED,
            severity=EventSeverity.ERROR,
            description=f"Could not save expenses to '{key}'",
            details={
                "key": key,
            },
            error_message=error_message,
        )
