"""
Main Orchestrator for Expense Tracker

This module ties the components together and holds the view logic the
UI needs, without depending on any UI framework:
1. Expense list (filter → show → sort → delete)
2. Add expense (draft → validate → save)

DESIGN DECISION: The orchestrator enforces the boundaries:
- The UI never edits the expense list directly, only through the store
- Deletes from a filtered list go by expense ID, never by display position
- Nothing is saved until the form validates
"""

from typing import Iterable, Optional

from expense_tracker.audit import AuditLogger, configure_logging
from expense_tracker.config import Settings, get_settings
from expense_tracker.models.expense import ALL_CATEGORIES, Expense
from expense_tracker.models.form import ExpenseDraft, ValidationResult
from expense_tracker.services.storage import (
    FileKeyValueStorage,
    InMemoryKeyValueStorage,
    KeyValueStorageInterface,
)
from expense_tracker.store import ExpenseStore, PositionOutOfRangeError
from expense_tracker.validation import ExpenseDraftValidator


class ExpenseListFlow:
    """
    View state for the expense list.

    The selected category is transient: it only changes what is shown,
    never what is stored.
    """

    def __init__(self, store: ExpenseStore, currency_symbol: str = "$"):
        self._store = store
        self._currency_symbol = currency_symbol
        self.selected_category: str = ALL_CATEGORIES

    def select_category(self, category: Optional[str]) -> None:
        """Choose the category to show. None or "All" shows everything."""
        self.selected_category = category or ALL_CATEGORIES

    def visible_expenses(self) -> list[Expense]:
        if self.selected_category == ALL_CATEGORIES:
            return self._store.filter_by_category(None)
        return self._store.filter_by_category(self.selected_category)

    def filter_label(self) -> str:
        return f"Filtering by: {self.selected_category}"

    def sort(self, ascending: bool) -> None:
        self._store.sort_by_amount(ascending=ascending)

    def delete_visible(self, positions: Iterable[int]) -> list[Expense]:
        """
        Delete rows of the list as it is currently shown.

        Display positions are turned into expense IDs first, so the
        right records are removed even while a filter is active.

        Raises:
            PositionOutOfRangeError: If a position is not on screen
        """
        visible = self.visible_expenses()
        expense_ids = []
        for position in sorted(set(positions)):
            if not 0 <= position < len(visible):
                raise PositionOutOfRangeError(position, len(visible))
            expense_ids.append(visible[position].id)

        if not expense_ids:
            return []
        return self._store.delete_by_ids(expense_ids)

    def format_amount(self, amount: float) -> str:
        return f"{self._currency_symbol}{amount:.2f}"

    def total(self) -> float:
        """Sum of the visible amounts."""
        return sum(expense.amount for expense in self.visible_expenses())


class AddExpenseFlow:
    """
    The add-expense form.

    Flow:
    1. User edits the draft (name, amount text, category)
    2. Save → validate the draft
    3. Valid → store.add, draft reset
       Invalid → nothing saved, draft kept so the user can fix it
    """

    def __init__(
        self,
        store: ExpenseStore,
        validator: Optional[ExpenseDraftValidator] = None,
    ):
        self._store = store
        self._validator = validator or ExpenseDraftValidator()
        self.draft = ExpenseDraft()
        self.last_saved: Optional[Expense] = None

    def update_draft(
        self,
        name: Optional[str] = None,
        amount_text: Optional[str] = None,
        category: Optional[str] = None,
    ) -> ExpenseDraft:
        changes = {
            field: value
            for field, value in (
                ("name", name),
                ("amount_text", amount_text),
                ("category", category),
            )
            if value is not None
        }
        self.draft = self.draft.model_copy(update=changes)
        return self.draft

    def save(self) -> ValidationResult:
        """
        Validate the draft and add it to the store if it is valid.

        Returns:
            The validation result; `is_valid` tells whether a record was added
        """
        result = self._validator.validate(self.draft)
        if not result.is_valid:
            return result

        self.last_saved = self._store.add(
            name=self.draft.name,
            amount=result.amount,
            category=self.draft.category,
        )
        self.draft = ExpenseDraft()
        return result

    def cancel(self) -> None:
        self.draft = ExpenseDraft()


def create_storage(settings: Settings) -> KeyValueStorageInterface:
    """Build the storage backend selected in settings."""
    storage_settings = settings.storage
    if storage_settings.backend == "memory":
        return InMemoryKeyValueStorage()
    return FileKeyValueStorage(storage_settings.data_dir, fsync=storage_settings.fsync)


def create_app_components(
    settings: Optional[Settings] = None,
    storage: Optional[KeyValueStorageInterface] = None,
) -> tuple[ExpenseStore, ExpenseListFlow, AddExpenseFlow, AuditLogger]:
    """
    Factory function to create all application components.

    Args:
        settings: Settings to use. Defaults to get_settings().
        storage: Storage backend override (tests pass an in-memory one).

    Returns:
        (store, list_flow, add_flow, audit_logger)
    """
    settings = settings or get_settings()
    app_settings = settings.app

    configure_logging(app_settings.log_level)

    storage = storage or create_storage(settings)
    audit_logger = AuditLogger(history_size=app_settings.audit_history_size)

    # Subscribe before loading so the startup load is audited too
    store = ExpenseStore(storage, key=settings.storage.key, autoload=False)
    audit_logger.attach(store)
    store.load()

    list_flow = ExpenseListFlow(store, currency_symbol=app_settings.currency_symbol)
    add_flow = AddExpenseFlow(store)

    return store, list_flow, add_flow, audit_logger
