"""
Tests for Expense Tracker

Test strategy:
1. Unit tests for individual components (models, codec, storage, validation)
2. Flow tests for the store and the view logic, on in-memory storage
3. File storage tests only touch pytest's tmp_path
"""

import pytest
from uuid import UUID, uuid4

from pydantic import ValidationError

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


class TestExpenseModel:
    """Tests for the Expense record."""

    def test_expense_creation(self):
        """Test Expense model creation."""
        expense = Expense(name="Coffee", amount=4.5, category="Food")
        assert expense.name == "Coffee"
        assert expense.amount == 4.5
        assert expense.category == "Food"
        assert isinstance(expense.id, UUID)

    def test_each_expense_gets_fresh_id(self):
        """Test that IDs are generated per record."""
        first = Expense(name="A", amount=1.0, category="Food")
        second = Expense(name="A", amount=1.0, category="Food")
        assert first.id != second.id

    def test_expense_accepts_empty_name_zero_and_negative_amounts(self):
        """Test that the record itself does not validate business rules."""
        refund = Expense(name="", amount=-12.0, category="Other")
        free = Expense(name="Sample", amount=0, category="Anything")
        assert refund.name == ""
        assert refund.amount == -12.0
        assert free.amount == 0.0
        assert free.category == "Anything"

    def test_expense_name_is_not_stripped(self):
        """Test that names are stored exactly as typed."""
        expense = Expense(name="  Bus  ", amount=2.0, category="Travel")
        assert expense.name == "  Bus  "

    @pytest.mark.parametrize("amount", [float("nan"), float("inf"), float("-inf")])
    def test_expense_rejects_non_finite_amount(self, amount):
        """Test that amounts must be representable as JSON numbers."""
        with pytest.raises(ValidationError):
            Expense(name="Broken", amount=amount, category="Food")

    def test_expense_is_frozen(self):
        """Test that a record cannot be changed after creation."""
        expense = Expense(name="Coffee", amount=4.5, category="Food")
        with pytest.raises(ValidationError):
            expense.amount = 10.0

    def test_expense_accepts_legacy_capitalized_category(self):
        """Test that old blobs using 'Category' still load."""
        expense_id = uuid4()
        expense = Expense.model_validate({
            "id": str(expense_id),
            "name": "Taxi",
            "amount": 15,
            "Category": "Travel",
        })
        assert expense.id == expense_id
        assert expense.category == "Travel"


class TestExpenseCategories:
    """Tests for the category vocabulary."""

    def test_category_values(self):
        """Test category string values."""
        assert [category.value for category in ExpenseCategory] == [
            "Food", "Travel", "Shopping", "Other",
        ]

    def test_filter_options_start_with_all(self):
        """Test that the filter menu offers 'All' plus every category."""
        assert ALL_CATEGORIES == "All"
        assert CATEGORY_FILTER_OPTIONS == ("All", "Food", "Travel", "Shopping", "Other")

    def test_category_compares_to_plain_string(self):
        """Test that enum members can be stored as plain strings."""
        assert ExpenseCategory.FOOD == "Food"


class TestExpenseEvents:
    """Tests for store event models."""

    def test_event_defaults(self):
        """Test ExpenseEvent model creation."""
        event = ExpenseEvent(
            event_type=ExpenseEventType.EXPENSE_ADDED,
            description="Expense added: Coffee",
        )
        assert event.severity == EventSeverity.INFO
        assert event.entity_id is None
        assert event.timestamp.tzinfo is not None

    def test_event_to_log_dict(self):
        """Test conversion to log dictionary."""
        expense_id = uuid4()
        event = ExpenseEventBuilder.expense_added(
            expense_id=expense_id,
            name="Coffee",
            amount=4.5,
            category="Food",
            count=1,
        )
        log_dict = event.to_log_dict()
        assert log_dict["event_type"] == "expense_added"
        assert log_dict["entity_id"] == str(expense_id)
        assert log_dict["details"]["amount"] == 4.5

    def test_builder_failures_carry_error(self):
        """Test that failure events carry severity and message."""
        load_failed = ExpenseEventBuilder.load_failed("expenses", "bad json")
        persist_failed = ExpenseEventBuilder.persist_failed("expenses", "disk full")

        assert load_failed.severity == EventSeverity.WARNING
        assert load_failed.error_message == "bad json"
        assert persist_failed.severity == EventSeverity.ERROR
        assert persist_failed.error_message == "disk full"

    def test_builder_deleted_single_and_many(self):
        """Test that entity_id is only set for single-record deletes."""
        one = uuid4()
        single = ExpenseEventBuilder.expenses_deleted([one], count=3)
        many = ExpenseEventBuilder.expenses_deleted([uuid4(), uuid4()], count=1)

        assert single.entity_id == one
        assert many.entity_id is None
        assert len(many.details["expense_ids"]) == 2

    def test_builder_sorted_direction(self):
        """Test sorted event description."""
        event = ExpenseEventBuilder.expenses_sorted(ascending=False, count=2)
        assert "descending" in event.description
        assert event.details == {"ascending": False, "count": 2}


class TestFormModels:
    """Tests for form and validation models."""

    def test_draft_defaults(self):
        """Test that a new draft is empty with the Food category."""
        draft = ExpenseDraft()
        assert draft.name == ""
        assert draft.amount_text == ""
        assert draft.category == "Food"

    def test_validation_result_has_errors(self):
        """Test has_errors property."""
        result = ValidationResult(
            is_valid=False,
            issues=[
                ValidationIssue(
                    field="amount",
                    issue_type="invalid_format",
                    message="Not a number: 'abc'",
                    severity="error",
                ),
            ],
        )
        assert result.has_errors is True
        assert result.error_count == 1
        assert result.messages_for("amount") == ["Not a number: 'abc'"]

    def test_validation_result_warnings_only(self):
        """Test that warnings don't count as errors."""
        result = ValidationResult(
            is_valid=True,
            amount=3.0,
            issues=[
                ValidationIssue(
                    field="name",
                    issue_type="missing",
                    message="Expense has no name",
                    severity="warning",
                ),
            ],
        )
        assert result.has_errors is False
        assert result.warnings == ["Expense has no name"]

    def test_validation_issue_rejects_unknown_severity(self):
        """Test severity pattern."""
        with pytest.raises(ValidationError):
            ValidationIssue(field="x", issue_type="y", message="z", severity="fatal")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
