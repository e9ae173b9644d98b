"""
Persisted blob format for the expense list.

The whole list is stored as one JSON array:

    [{"id": "<uuid>", "name": "Coffee", "amount": 4.5, "category": "Food"}, ...]

Order in the array is the store order.

Decoding is strict: every record must carry its own id, ids must be
unique across the array, and amounts must be JSON numbers.
"""

from typing import Iterable
from uuid import UUID

from pydantic import Field, TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError

from expense_tracker.models.expense import Expense
from expense_tracker.store.errors import ExpenseDecodeError, ExpenseEncodeError


class _StoredExpense(Expense):
    """A saved record. Unlike a new expense, its id is never generated."""

    id: UUID = Field(
        ...,
        description="Unique expense ID, as saved"
    )


_EXPENSE_LIST = TypeAdapter(list[Expense])
_STORED_EXPENSE_LIST = TypeAdapter(list[_StoredExpense])


def encode_expenses(expenses: Iterable[Expense]) -> str:
    """Serialize expenses, in order, to the persisted JSON text."""
    try:
        return _EXPENSE_LIST.dump_json(list(expenses)).decode("utf-8")
    except PydanticSerializationError as e:
        raise ExpenseEncodeError(f"Failed to encode expenses: {e}") from e


def decode_expenses(blob: str) -> list[Expense]:
    """
    Parse persisted JSON text back into expenses.

    Raises:
        ExpenseDecodeError: If the text is not JSON, any element is not
            a valid expense, or two elements share an id
    """
    try:
        stored = _STORED_EXPENSE_LIST.validate_json(blob, strict=True)
    except ValidationError as e:
        raise ExpenseDecodeError(
            f"Malformed expense data ({e.error_count()} errors): {e}"
        ) from e

    seen: set[UUID] = set()
    for record in stored:
        if record.id in seen:
            raise ExpenseDecodeError(f"Malformed expense data: duplicate id {record.id}")
        seen.add(record.id)

    return [Expense.model_validate(record.model_dump()) for record in stored]
