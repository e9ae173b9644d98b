"""
Add-Expense Form Validation

DESIGN DECISION: Malformed amount text is rejected explicitly.
A draft whose amount cannot be parsed never reaches the store, and the
caller gets a ValidationResult that says why.

Checks:
- Amount text must be a plain decimal number (sign and exponent allowed)
- Category must be one of the form's fixed categories
- An empty name is allowed but reported as a warning

IMPORTANT: Validation never silently fixes the draft. It only reports.
"""

import math
import re

from expense_tracker.models.expense import ExpenseCategory
from expense_tracker.models.form import ExpenseDraft, ValidationIssue, ValidationResult


_AMOUNT_PATTERN = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?$", re.ASCII)


class InvalidAmountError(ValueError):
    """Amount text is not a finite decimal number."""
    pass


def parse_amount(text: str) -> float:
    """
    Parse the amount typed into the form.

    Surrounding whitespace is ignored. Thousands separators, currency
    symbols, 'inf' and 'nan' are rejected.

    Raises:
        InvalidAmountError: If the text is not a finite decimal number
    """
    candidate = (text or "").strip()
    if not candidate:
        raise InvalidAmountError("Amount is required")
    if not _AMOUNT_PATTERN.match(candidate):
        raise InvalidAmountError(f"Not a number: {text!r}")

    amount = float(candidate)
    if not math.isfinite(amount):
        raise InvalidAmountError(f"Amount is too large: {text!r}")
    return amount


class ExpenseDraftValidator:
    """Validates the add-expense form before anything is saved."""

    def __init__(self, allowed_categories: tuple[str, ...] = tuple(c.value for c in ExpenseCategory)):
        self._allowed_categories = allowed_categories

    def validate(self, draft: ExpenseDraft) -> ValidationResult:
        issues = []
        amount = None

        try:
            amount = parse_amount(draft.amount_text)
        except InvalidAmountError as e:
            issues.append(ValidationIssue(
                field="amount",
                issue_type="missing" if not draft.amount_text.strip() else "invalid_format",
                message=str(e),
                severity="error",
            ))

        if draft.category not in self._allowed_categories:
            issues.append(ValidationIssue(
                field="category",
                issue_type="unknown_category",
                message=f"Unknown category: {draft.category!r}",
                severity="error",
            ))

        if not draft.name:
            issues.append(ValidationIssue(
                field="name",
                issue_type="missing",
                message="Expense has no name",
                severity="warning",
            ))

        return ValidationResult(
            is_valid=not any(issue.severity == "error" for issue in issues),
            amount=amount,
            issues=issues,
        )
