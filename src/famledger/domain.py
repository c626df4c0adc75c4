"""
Domain objects for famledger.

This module defines the core domain objects:
- TransactionRecord: One dated income or expense entry
- RecurringIntent: What the user asked for when entering a recurring transaction
- Category: Grouping for transactions (income or expense)
- Budget: Monthly spending limit for an expense category
- Goal: Savings/spending target tracked against a category
"""

import math
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Optional

from .errors import ValidationError


class TransactionKind(Enum):
    """Direction of money."""
    INCOME = 'income'
    EXPENSE = 'expense'


class RecurrenceFrequency(Enum):
    """How often a recurring transaction repeats."""
    MONTHLY = 'monthly'


class DeletionScope(Enum):
    """Breadth of a delete request relative to the selected occurrence."""
    ONE = 'one'        # Only this occurrence
    FUTURE = 'future'  # This occurrence and every later one
    ALL = 'all'        # The entire series


def parse_date(value, field: str = 'date') -> date:
    """
    Coerce a value into a date.

    Accepts date objects, 'YYYY-MM-DD' strings, and ISO 8601 date-time
    strings or datetime objects. Times are dropped, so every stored date
    is a plain date and dates always compare with each other.

    Raises:
        ValidationError: If the value is missing or not a valid date
    """
    if value is None or value == '':
        raise ValidationError(f"{field} is required")
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        value = value.strip()
        try:
            return datetime.strptime(value, '%Y-%m-%d').date()
        except ValueError:
            pass
        try:
            return datetime.fromisoformat(value).date()
        except ValueError:
            raise ValidationError(f"Invalid {field}: {value}. Use YYYY-MM-DD")
    raise ValidationError(f"Invalid {field}: {value!r}")


def _coerce_amount(value, label: str) -> float:
    if isinstance(value, bool):
        raise ValidationError(f"{label} must be a number")
    if isinstance(value, str):
        try:
            value = float(value)
        except ValueError:
            raise ValidationError(f"{label} must be a number (got {value!r})")
    if value is None:
        raise ValidationError(f"{label} must be positive")
    if not isinstance(value, (int, float)) or not math.isfinite(value):
        raise ValidationError(f"{label} must be a finite number (got {value!r})")
    if value <= 0:
        raise ValidationError(f"{label} must be positive")
    return value


def coerce_kind(value) -> TransactionKind:
    """Turn 'income' / 'expense' (any case) into a TransactionKind."""
    if isinstance(value, TransactionKind):
        return value
    try:
        return TransactionKind(str(value).lower())
    except ValueError:
        raise ValidationError(f"Invalid transaction type: {value!r} (use income or expense)")


@dataclass
class TransactionRecord:
    """
    A single dated transaction.

    Recurring transactions are materialized as one record per occurrence.
    Every occurrence of one series carries the same series_id.

    Attributes:
        description: Free-text label
        amount: Positive magnitude (direction comes from kind)
        date: Calendar date of the transaction
        kind: Income or expense
        category_id: ID of the category this transaction belongs to
        id: Store-assigned identifier (None until stored)
        is_recurring: True for occurrences of a recurring series
        recurrence_frequency: Set iff is_recurring
        recurrence_end_date: End date the user chose for the series, if any
        series_id: Identifier shared by every occurrence of one series
        merchant: Optional merchant name
    """
    description: str
    amount: float
    date: date
    kind: TransactionKind
    category_id: str
    id: Optional[str] = None
    is_recurring: bool = False
    recurrence_frequency: Optional[RecurrenceFrequency] = None
    recurrence_end_date: Optional[date] = None
    series_id: Optional[str] = None
    merchant: Optional[str] = None

    def __post_init__(self):
        """Validate transaction data."""
        if not self.description or not str(self.description).strip():
            raise ValidationError("Transaction description cannot be empty")
        if not self.category_id:
            raise ValidationError("Transaction category cannot be empty")

        self.amount = _coerce_amount(self.amount, "Transaction amount")
        self.date = parse_date(self.date)
        self.kind = coerce_kind(self.kind)

        if isinstance(self.recurrence_frequency, str):
            try:
                self.recurrence_frequency = RecurrenceFrequency(self.recurrence_frequency.lower())
            except ValueError:
                raise ValidationError(f"Invalid recurrence frequency: {self.recurrence_frequency}")
        if self.recurrence_end_date is not None:
            self.recurrence_end_date = parse_date(self.recurrence_end_date, 'recurrence end date')

        if self.is_recurring:
            if self.recurrence_frequency is None:
                raise ValidationError("Recurring transaction requires a recurrence frequency")
        else:
            if self.series_id:
                raise ValidationError("Non-recurring transaction cannot belong to a series")
            if self.recurrence_frequency is not None or self.recurrence_end_date is not None:
                raise ValidationError("Non-recurring transaction cannot carry recurrence fields")

    @property
    def signed_amount(self) -> float:
        """Amount with expenses negative."""
        return self.amount if self.kind == TransactionKind.INCOME else -self.amount


@dataclass
class RecurringIntent:
    """
    A recurring transaction as entered by the user, before expansion.

    Attributes:
        description: Label copied to every occurrence
        amount: Positive amount per occurrence
        kind: Income or expense
        category_id: Category for every occurrence
        start_date: Date of the first occurrence
        recurrence_end_date: Last date an occurrence may fall on (None = default horizon)
        merchant: Optional merchant name
    """
    description: str
    amount: float
    kind: TransactionKind
    category_id: str
    start_date: date
    recurrence_end_date: Optional[date] = None
    merchant: Optional[str] = None

    def __post_init__(self):
        """Validate intent data."""
        if not self.description or not str(self.description).strip():
            raise ValidationError("Transaction description cannot be empty")
        if not self.category_id:
            raise ValidationError("Transaction category cannot be empty")

        self.amount = _coerce_amount(self.amount, "Transaction amount")
        self.kind = coerce_kind(self.kind)
        self.start_date = parse_date(self.start_date, 'start date')
        if self.recurrence_end_date is not None and self.recurrence_end_date != '':
            self.recurrence_end_date = parse_date(self.recurrence_end_date, 'recurrence end date')
        else:
            self.recurrence_end_date = None


@dataclass
class Category:
    """
    A transaction category.

    Attributes:
        id: Unique identifier (user-defined, e.g., "groceries")
        name: Display name
        type: Whether this category holds income or expenses
        icon: Optional icon name
        color: Optional color tag
    """
    id: str
    name: str
    type: TransactionKind
    icon: Optional[str] = None
    color: Optional[str] = None

    def __post_init__(self):
        """Validate category data."""
        if not self.id:
            raise ValueError("Category id cannot be empty")
        if not self.name:
            raise ValueError("Category name cannot be empty")

        # Ensure type is TransactionKind enum
        if isinstance(self.type, str):
            self.type = TransactionKind(self.type.lower())


@dataclass
class Budget:
    """
    A monthly spending limit for one expense category.

    Attributes:
        category_id: Category the limit applies to
        limit: Maximum monthly spending
    """
    category_id: str
    limit: float

    def __post_init__(self):
        """Validate budget data."""
        if not self.category_id:
            raise ValueError("Budget category cannot be empty")
        if self.limit is None or self.limit <= 0:
            raise ValueError("Budget limit must be positive")


@dataclass
class Goal:
    """
    A target amount tracked against this month's activity in a category.

    Attributes:
        id: Unique identifier
        name: Display name
        target_amount: Amount to reach
        category_id: Category whose transactions count toward the goal
        deadline: Optional target date
    """
    id: str
    name: str
    target_amount: float
    category_id: str
    deadline: Optional[date] = None

    def __post_init__(self):
        """Validate goal data."""
        if not self.id:
            raise ValueError("Goal id cannot be empty")
        if not self.name:
            raise ValueError("Goal name cannot be empty")
        if not self.category_id:
            raise ValueError("Goal category cannot be empty")
        if self.target_amount is None or self.target_amount <= 0:
            raise ValueError("Goal target must be positive")

        if isinstance(self.deadline, str):
            try:
                self.deadline = datetime.strptime(self.deadline, '%Y-%m-%d').date()
            except ValueError:
                raise ValueError(f"Invalid date format: {self.deadline}. Use YYYY-MM-DD")


# =============================================================================
# UTILITY FUNCTIONS
# =============================================================================

def sort_by_date(records: list[TransactionRecord]) -> list[TransactionRecord]:
    """Return records ordered by date (stable for same-day records)."""
    return sorted(records, key=lambda r: r.date)


def validate_category_references(budgets: list[Budget], goals: list[Goal],
                                 categories: list[Category]) -> list[str]:
    """
    Check that budgets and goals point at existing, compatible categories.

    Args:
        budgets: List of all budgets
        goals: List of all goals
        categories: List of all categories

    Returns:
        List of validation error messages (empty if valid)
    """
    errors = []
    categories_by_id = {c.id: c for c in categories}

    seen_budget_categories = set()
    for budget in budgets:
        category = categories_by_id.get(budget.category_id)
        if not category:
            errors.append(f"Budget for '{budget.category_id}': category does not exist")
            continue
        if category.type != TransactionKind.EXPENSE:
            errors.append(f"Budget for '{budget.category_id}': budgets apply to expense categories only")
        if budget.category_id in seen_budget_categories:
            errors.append(f"Budget for '{budget.category_id}': defined more than once")
        seen_budget_categories.add(budget.category_id)

    for goal in goals:
        if goal.category_id not in categories_by_id:
            errors.append(f"Goal '{goal.id}': category '{goal.category_id}' does not exist")

    return errors
