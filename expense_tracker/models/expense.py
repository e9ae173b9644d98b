"""
Core Data Models for Expense Tracker

DESIGN DECISION: The expense record is a frozen Pydantic model.
Once created, an expense never changes; the store only appends,
removes and reorders records.

The persisted field names are lowercase (`id`, `name`, `amount`,
`category`). Older blobs that used a capitalized `Category` key are
still accepted when loading.
"""

from enum import Enum
from uuid import UUID, uuid4

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class ExpenseCategory(str, Enum):
    """
    Categories offered by the add-expense form.

    The store itself accepts any string as a category; this list only
    constrains what the UI lets the user pick.
    """
    FOOD = "Food"
    TRAVEL = "Travel"
    SHOPPING = "Shopping"
    OTHER = "Other"


# Filter sentinel meaning "show everything". Never saved as a category by the UI.
ALL_CATEGORIES = "All"

CATEGORY_FILTER_OPTIONS: tuple[str, ...] = (ALL_CATEGORIES,) + tuple(
    category.value for category in ExpenseCategory
)


# =============================================================================
# EXPENSE RECORD
# =============================================================================

class Expense(BaseModel):
    """
    One logged spending entry.

    `id` is generated on creation and is the stable handle for the record.
    `name` may be empty and `amount` may be zero or negative; the only
    restriction is that the amount must be a finite number so it can be
    written as a JSON number.
    """
    model_config = ConfigDict(
        frozen=True,
        allow_inf_nan=False,
    )

    id: UUID = Field(
        default_factory=uuid4,
        description="Unique expense ID"
    )
    name: str = Field(
        ...,
        description="Free-form label"
    )
    amount: float = Field(
        ...,
        description="Signed amount"
    )
    category: str = Field(
        ...,
        validation_alias=AliasChoices("category", "Category"),
        description="Category label (any string)"
    )
