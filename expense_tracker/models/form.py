"""
Add-Expense Form Models

The form keeps whatever the user typed, as text, until Save is pressed.
Nothing here is persisted.
"""

from typing import Optional

from pydantic import BaseModel, Field

from expense_tracker.models.expense import ExpenseCategory


class ExpenseDraft(BaseModel):
    """Transient contents of the add-expense form."""

    name: str = ""
    amount_text: str = ""
    category: str = ExpenseCategory.FOOD.value


class ValidationIssue(BaseModel):
    """A single validation issue found."""

    field: str = Field(
        ...,
        description="Field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'missing', 'invalid_format', 'unknown_category')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
    severity: str = Field(
        ...,
        pattern="^(error|warning)$",
        description="Issue severity"
    )


class ValidationResult(BaseModel):
    """
    Result of validating a draft.

    `amount` is the parsed amount when the amount text was valid.
    """

    is_valid: bool
    amount: Optional[float] = None
    issues: list[ValidationIssue] = Field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        """Check if there are any error-level issues."""
        return any(issue.severity == "error" for issue in self.issues)

    @property
    def error_count(self) -> int:
        """Count error-level issues."""
        return sum(1 for issue in self.issues if issue.severity == "error")

    @property
    def warnings(self) -> list[str]:
        return [issue.message for issue in self.issues if issue.severity == "warning"]

    def messages_for(self, field: str) -> list[str]:
        return [issue.message for issue in self.issues if issue.field == field]
