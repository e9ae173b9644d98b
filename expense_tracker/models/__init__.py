"""
Data Models Package

This package contains the Pydantic models used by the Expense Tracker.
"""

from expense_tracker.models.expense import (
    ALL_CATEGORIES,
    CATEGORY_FILTER_OPTIONS,
    Expense,
    ExpenseCategory,
)
from expense_tracker.models.events import (
    EventSeverity,
    ExpenseEvent,
    ExpenseEventBuilder,
    ExpenseEventType,
)
from expense_tracker.models.form import (
    ExpenseDraft,
    ValidationIssue,
    ValidationResult,
)

__all__ = [
    # Expense models
    "ALL_CATEGORIES",
    "CATEGORY_FILTER_OPTIONS",
    "Expense",
    "ExpenseCategory",
    # Event models
    "EventSeverity",
    "ExpenseEvent",
    "ExpenseEventBuilder",
    "ExpenseEventType",
    # Form models
    "ExpenseDraft",
    "ValidationIssue",
    "ValidationResult",
]
