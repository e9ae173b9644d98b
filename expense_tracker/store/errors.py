"""Exceptions raised by the expense store."""


class StoreError(Exception):
    """Base exception for expense store operations."""
    pass


class PositionOutOfRangeError(StoreError, IndexError):
    """A delete position does not exist in the sequence."""

    def __init__(self, position: int, length: int):
        self.position = position
        self.length = length
        super().__init__(
            f"Position {position} is out of range for {length} expenses"
        )


class ExpenseNotFoundError(StoreError, LookupError):
    """No expense with the given ID is in the store."""
    pass


class InvalidExpenseError(StoreError, ValueError):
    """Fields passed to the store cannot form an expense."""
    pass


class ExpenseDecodeError(StoreError, ValueError):
    """The persisted blob is not a valid expense list."""
    pass


class ExpenseEncodeError(StoreError, ValueError):
    """The expense list could not be serialized."""
    pass
