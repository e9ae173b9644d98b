"""
Expense Store

DESIGN DECISION: The store is the only owner of the expense list.
The presentation layer reads from it and sends it commands; it never
edits the list directly.

Every mutation:
1. Changes the in-memory list
2. Writes the whole list through to storage (one key, one overwrite)
3. Publishes an ExpenseEvent to subscribers

Storage problems never propagate out of the store. The in-memory list
stays the source of truth and the next mutation simply tries again.
"""

from typing import Callable, Iterable, Iterator, Optional
from uuid import UUID

import structlog
from pydantic import ValidationError

from expense_tracker.models.events import ExpenseEvent, ExpenseEventBuilder
from expense_tracker.models.expense import Expense
from expense_tracker.services.storage import KeyValueStorageInterface, StorageError
from expense_tracker.store.codec import decode_expenses, encode_expenses
from expense_tracker.store.errors import (
    ExpenseDecodeError,
    ExpenseEncodeError,
    ExpenseNotFoundError,
    InvalidExpenseError,
    PositionOutOfRangeError,
)


logger = structlog.get_logger(__name__)

Subscriber = Callable[[ExpenseEvent], None]

DEFAULT_STORAGE_KEY = "expenses"


class ExpenseStore:
    """
    Ordered, persisted collection of expenses.

    Order is insertion order until `sort_by_amount` is called; sorting
    changes the stored order, not just the displayed one.
    """

    def __init__(
        self,
        storage: KeyValueStorageInterface,
        key: str = DEFAULT_STORAGE_KEY,
        autoload: bool = True,
    ):
        """
        Initialize the store.

        Args:
            storage: Key-value backend the list is persisted to
            key: Storage key holding the serialized list
            autoload: Load from storage immediately (the normal startup path)
        """
        self._storage = storage
        self._key = key
        self._expenses: list[Expense] = []
        self._subscribers: list[Subscriber] = []

        if autoload:
            self.load()

    # -------------------------------------------------------------------------
    # Reading
    # -------------------------------------------------------------------------

    @property
    def key(self) -> str:
        return self._key

    @property
    def expenses(self) -> tuple[Expense, ...]:
        """Snapshot of the current sequence."""
        return tuple(self._expenses)

    def __len__(self) -> int:
        return len(self._expenses)

    def __iter__(self) -> Iterator[Expense]:
        return iter(tuple(self._expenses))

    def index_of(self, expense_id: UUID) -> int:
        """Return the current position of an expense."""
        for position, expense in enumerate(self._expenses):
            if expense.id == expense_id:
                return position
        raise ExpenseNotFoundError(f"Expense not found: {expense_id}")

    def filter_by_category(self, category: Optional[str] = None) -> list[Expense]:
        """
        Return the expenses in a category, in store order.

        None or an empty string means no filter. Matching is exact and
        case-sensitive. The store is never modified.
        """
        if not category:
            return list(self._expenses)
        return [expense for expense in self._expenses if expense.category == category]

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def add(self, name: str, amount: float, category: str) -> Expense:
        """
        Append a new expense and persist.

        Empty names, zero or negative amounts and unknown categories are
        all accepted. Raises InvalidExpenseError only when the values
        cannot form an expense at all (e.g. a NaN amount).
        """
        try:
            expense = Expense(name=name, amount=amount, category=category)
        except ValidationError as e:
            raise InvalidExpenseError(f"Cannot create expense: {e}") from e

        self._expenses.append(expense)
        self.persist()
        self._publish(ExpenseEventBuilder.expense_added(
            expense_id=expense.id,
            name=expense.name,
            amount=expense.amount,
            category=expense.category,
            count=len(self._expenses),
        ))
        return expense

    def delete_at(self, positions: Iterable[int]) -> list[Expense]:
        """
        Remove the expenses at the given positions of the full sequence.

        Positions are checked before anything is removed: a single
        out-of-range position raises PositionOutOfRangeError and the
        sequence is left as it was.

        Returns:
            The removed expenses, in their former order
        """
        targets = sorted(set(positions))
        if not targets:
            return []

        length = len(self._expenses)
        for position in targets:
            if not 0 <= position < length:
                raise PositionOutOfRangeError(position, length)

        removed = [self._expenses[position] for position in targets]
        for position in reversed(targets):
            del self._expenses[position]

        self.persist()
        self._publish(ExpenseEventBuilder.expenses_deleted(
            expense_ids=[expense.id for expense in removed],
            count=len(self._expenses),
        ))
        return removed

    def delete_by_ids(self, expense_ids: Iterable[UUID]) -> list[Expense]:
        """
        Remove expenses by ID.

        Raises ExpenseNotFoundError, without removing anything, if any ID
        is not in the store.
        """
        return self.delete_at([self.index_of(expense_id) for expense_id in expense_ids])

    def sort_by_amount(self, ascending: bool = True) -> None:
        """
        Reorder the whole sequence by amount and persist.

        The sort is stable in both directions: equal amounts keep their
        relative order.
        """
        # reverse=True in list.sort keeps equal items in original order
        self._expenses.sort(key=lambda expense: expense.amount, reverse=not ascending)

        self.persist()
        self._publish(ExpenseEventBuilder.expenses_sorted(
            ascending=ascending,
            count=len(self._expenses),
        ))

    # -------------------------------------------------------------------------
    # Persistence
    # -------------------------------------------------------------------------

    def load(self) -> None:
        """
        Replace the sequence with the persisted one.

        If nothing is stored the sequence is left unchanged. If the stored
        data cannot be read or decoded, the failure is logged and published
        as a LOAD_FAILED event; this method never raises.
        """
        try:
            blob = self._storage.get(self._key)
        except StorageError as e:
            self._load_failed(e)
            return

        if blob is None:
            logger.debug("expenses_not_found", key=self._key)
            return

        try:
            loaded = decode_expenses(blob)
        except ExpenseDecodeError as e:
            self._load_failed(e)
            return

        self._expenses = loaded
        logger.info("expenses_loaded", key=self._key, count=len(loaded))
        self._publish(ExpenseEventBuilder.store_loaded(key=self._key, count=len(loaded)))

    def persist(self) -> bool:
        """
        Write the whole sequence to storage.

        Returns:
            True if the write succeeded. Failures are logged and published
            as PERSIST_FAILED; they are never raised.
        """
        try:
            self._storage.set(self._key, encode_expenses(self._expenses))
        except (StorageError, ExpenseEncodeError) as e:
            logger.error(
                "expenses_persist_failed",
                key=self._key,
                count=len(self._expenses),
                error=str(e),
            )
            self._publish(ExpenseEventBuilder.persist_failed(key=self._key, error_message=str(e)))
            return False
        return True

    def _load_failed(self, error: Exception) -> None:
        logger.warning("expenses_load_failed", key=self._key, error=str(error))
        self._publish(ExpenseEventBuilder.load_failed(key=self._key, error_message=str(error)))

    # -------------------------------------------------------------------------
    # Subscriptions
    # -------------------------------------------------------------------------

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """
        Register a callback for store events.

        Returns:
            A function that removes the subscription
        """
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def _publish(self, event: ExpenseEvent) -> None:
        for callback in list(self._subscribers):
            try:
                callback(event)
            except Exception as e:
                # A broken subscriber must not undo or block a mutation
                logger.exception(
                    "expense_subscriber_failed",
                    event_type=event.event_type.value,
                    error=str(e),
                )
