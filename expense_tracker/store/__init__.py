"""Expense store package."""

from expense_tracker.store.codec import decode_expenses, encode_expenses
from expense_tracker.store.errors import (
    ExpenseDecodeError,
    ExpenseEncodeError,
    ExpenseNotFoundError,
    InvalidExpenseError,
    PositionOutOfRangeError,
    StoreError,
)
from expense_tracker.store.expense_store import DEFAULT_STORAGE_KEY, ExpenseStore

__all__ = [
    "DEFAULT_STORAGE_KEY",
    "ExpenseStore",
    # Codec
    "decode_expenses",
    "encode_expenses",
    # Exceptions
    "ExpenseDecodeError",
    "ExpenseEncodeError",
    "ExpenseNotFoundError",
    "InvalidExpenseError",
    "PositionOutOfRangeError",
    "StoreError",
]
