"""Form validation package."""

from expense_tracker.validation.validator import (
    ExpenseDraftValidator,
    InvalidAmountError,
    parse_amount,
)

__all__ = ["ExpenseDraftValidator", "InvalidAmountError", "parse_amount"]
