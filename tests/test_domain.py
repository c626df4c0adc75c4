"""
Tests for famledger domain objects (TransactionRecord, RecurringIntent, Category, Budget, Goal).
"""

import pytest
from datetime import date, datetime

from famledger.domain import (
    TransactionRecord, RecurringIntent, Category, Budget, Goal,
    TransactionKind, RecurrenceFrequency,
    parse_date, sort_by_date, validate_category_references
)
from famledger.errors import ValidationError


class TestParseDate:
    """Tests for parse_date."""

    def test_date_passthrough(self):
        """Test that date objects are returned unchanged."""
        assert parse_date(date(2025, 1, 31)) == date(2025, 1, 31)

    def test_iso_string(self):
        """Test parsing YYYY-MM-DD strings."""
        assert parse_date('2025-01-31') == date(2025, 1, 31)

    def test_datetime_string_truncated_to_date(self):
        """Test that ISO date-time strings become plain dates."""
        parsed = parse_date('2025-01-31T08:30:00')
        assert parsed == date(2025, 1, 31)
        assert type(parsed) is date

    def test_datetime_object_truncated_to_date(self):
        """Test that datetime objects become plain dates."""
        parsed = parse_date(datetime(2025, 1, 31, 23, 59))
        assert parsed == date(2025, 1, 31)
        assert type(parsed) is date

    def test_invalid_string(self):
        """Test that garbage is rejected with the field name."""
        with pytest.raises(ValidationError, match="Invalid start date"):
            parse_date('31/01/2025', 'start date')

    def test_missing(self):
        """Test that None is rejected."""
        with pytest.raises(ValidationError, match="date is required"):
            parse_date(None)


class TestTransactionRecord:
    """Tests for TransactionRecord domain object."""

    def test_create_expense(self):
        """Test creating a one-off expense."""
        record = TransactionRecord(
            description='Groceries',
            amount=82.40,
            date=date(2025, 1, 4),
            kind=TransactionKind.EXPENSE,
            category_id='groceries'
        )
        assert record.id is None
        assert record.is_recurring is False
        assert record.series_id is None
        assert record.signed_amount == -82.40

    def test_fields_from_strings(self):
        """Test that kind, date, and amount are coerced from strings."""
        record = TransactionRecord(
            description='Salary',
            amount='3000',
            date='2025-01-31',
            kind='Income',
            category_id='salary'
        )
        assert record.amount == 3000.0
        assert record.date == date(2025, 1, 31)
        assert record.kind == TransactionKind.INCOME
        assert record.signed_amount == 3000.0

    def test_recurring_occurrence(self):
        """Test creating an occurrence of a series."""
        record = TransactionRecord(
            description='Rent',
            amount=1500,
            date=date(2025, 1, 1),
            kind='expense',
            category_id='housing',
            is_recurring=True,
            recurrence_frequency='monthly',
            recurrence_end_date='2025-12-01',
            series_id='abc'
        )
        assert record.recurrence_frequency == RecurrenceFrequency.MONTHLY
        assert record.recurrence_end_date == date(2025, 12, 1)

    def test_recurring_requires_frequency(self):
        """Test that a recurring record must state its frequency."""
        with pytest.raises(ValidationError, match="requires a recurrence frequency"):
            TransactionRecord(
                description='Rent', amount=1500, date=date(2025, 1, 1),
                kind='expense', category_id='housing', is_recurring=True, series_id='abc'
            )

    def test_non_recurring_cannot_have_series(self):
        """Test that a series id implies a recurring record."""
        with pytest.raises(ValidationError, match="cannot belong to a series"):
            TransactionRecord(
                description='Rent', amount=1500, date=date(2025, 1, 1),
                kind='expense', category_id='housing', series_id='abc'
            )

    def test_non_recurring_cannot_have_frequency(self):
        """Test that recurrence fields need is_recurring."""
        with pytest.raises(ValidationError, match="cannot carry recurrence fields"):
            TransactionRecord(
                description='Rent', amount=1500, date=date(2025, 1, 1),
                kind='expense', category_id='housing', recurrence_frequency='monthly'
            )

    @pytest.mark.parametrize('amount', [0, -10, None, True])
    def test_amount_must_be_positive(self, amount):
        """Test that zero, negative, missing, and boolean amounts are rejected."""
        with pytest.raises(ValidationError, match="amount must be"):
            TransactionRecord(
                description='Coffee', amount=amount, date=date(2025, 1, 1),
                kind='expense', category_id='food'
            )

    @pytest.mark.parametrize('amount', [float('nan'), float('inf'), 'nan', 'inf', '-inf'])
    def test_amount_must_be_finite(self, amount):
        """Test that NaN and infinite amounts are rejected."""
        with pytest.raises(ValidationError, match="must be a finite number"):
            TransactionRecord(
                description='Coffee', amount=amount, date=date(2025, 1, 1),
                kind='expense', category_id='food'
            )

    def test_intent_amount_must_be_finite(self):
        """Test that a recurring intent rejects a NaN amount."""
        with pytest.raises(ValidationError, match="must be a finite number"):
            RecurringIntent(
                description='Rent', amount=float('nan'), kind='expense',
                category_id='housing', start_date='2025-01-01'
            )

    def test_datetime_fields_stored_as_dates(self):
        """Test that date-time input for date and end date is stored as plain dates."""
        record = TransactionRecord(
            description='Rent', amount=1500, date='2025-01-01T09:00:00',
            kind='expense', category_id='housing', is_recurring=True,
            recurrence_frequency='monthly', recurrence_end_date=datetime(2025, 6, 1, 12, 0),
            series_id='abc'
        )
        assert type(record.date) is date
        assert type(record.recurrence_end_date) is date
        assert record.recurrence_end_date == date(2025, 6, 1)

    def test_empty_description(self):
        """Test that a blank description is rejected."""
        with pytest.raises(ValidationError, match="description cannot be empty"):
            TransactionRecord(
                description='  ', amount=5, date=date(2025, 1, 1),
                kind='expense', category_id='food'
            )

    def test_invalid_kind(self):
        """Test that unknown kinds are rejected."""
        with pytest.raises(ValidationError, match="Invalid transaction type"):
            TransactionRecord(
                description='Coffee', amount=5, date=date(2025, 1, 1),
                kind='transfer', category_id='food'
            )

    def test_validation_error_is_value_error(self):
        """Test that validation errors can be caught as ValueError."""
        with pytest.raises(ValueError):
            TransactionRecord(
                description='Coffee', amount=5, date='not a date',
                kind='expense', category_id='food'
            )


class TestRecurringIntent:
    """Tests for RecurringIntent."""

    def test_defaults(self):
        """Test that the end date defaults to None."""
        intent = RecurringIntent(
            description='Rent', amount=1500, kind='expense',
            category_id='housing', start_date='2025-01-01'
        )
        assert intent.start_date == date(2025, 1, 1)
        assert intent.recurrence_end_date is None
        assert intent.kind == TransactionKind.EXPENSE

    def test_empty_end_date_means_none(self):
        """Test that an empty end date string is treated as absent."""
        intent = RecurringIntent(
            description='Rent', amount=1500, kind='expense',
            category_id='housing', start_date='2025-01-01', recurrence_end_date=''
        )
        assert intent.recurrence_end_date is None

    def test_missing_start_date(self):
        """Test that a start date is required."""
        with pytest.raises(ValidationError, match="start date is required"):
            RecurringIntent(
                description='Rent', amount=1500, kind='expense',
                category_id='housing', start_date=None
            )


class TestCategory:
    """Tests for Category domain object."""

    def test_type_from_string(self):
        """Test creating a category with type as string."""
        category = Category(id='salary', name='Salary', type='INCOME')
        assert category.type == TransactionKind.INCOME
        assert category.icon is None

    def test_empty_id_raises_error(self):
        """Test that empty id raises ValueError."""
        with pytest.raises(ValueError, match="id cannot be empty"):
            Category(id='', name='Salary', type='income')


class TestBudget:
    """Tests for Budget domain object."""

    def test_create(self):
        """Test creating a budget."""
        budget = Budget(category_id='groceries', limit=600)
        assert budget.limit == 600

    def test_limit_must_be_positive(self):
        """Test that a zero limit is rejected."""
        with pytest.raises(ValueError, match="limit must be positive"):
            Budget(category_id='groceries', limit=0)


class TestGoal:
    """Tests for Goal domain object."""

    def test_deadline_from_string(self):
        """Test that the deadline is parsed from a string."""
        goal = Goal(id='trip', name='Summer trip', target_amount=2000,
                    category_id='savings', deadline='2025-07-01')
        assert goal.deadline == date(2025, 7, 1)

    def test_invalid_deadline(self):
        """Test that a malformed deadline is rejected."""
        with pytest.raises(ValueError, match="Invalid date format"):
            Goal(id='trip', name='Summer trip', target_amount=2000,
                 category_id='savings', deadline='July')

    def test_target_must_be_positive(self):
        """Test that a negative target is rejected."""
        with pytest.raises(ValueError, match="target must be positive"):
            Goal(id='trip', name='Summer trip', target_amount=-1, category_id='savings')


class TestUtilityFunctions:
    """Tests for domain utility functions."""

    def test_sort_by_date_is_stable(self):
        """Test that same-day records keep their order."""
        a = TransactionRecord(description='A', amount=1, date=date(2025, 1, 2), kind='expense', category_id='x')
        b = TransactionRecord(description='B', amount=1, date=date(2025, 1, 1), kind='expense', category_id='x')
        c = TransactionRecord(description='C', amount=1, date=date(2025, 1, 2), kind='expense', category_id='x')
        assert [r.description for r in sort_by_date([a, b, c])] == ['B', 'A', 'C']

    def test_validate_category_references_ok(self):
        """Test that valid references produce no errors."""
        categories = [
            Category(id='groceries', name='Groceries', type='expense'),
            Category(id='savings', name='Savings', type='income'),
        ]
        budgets = [Budget(category_id='groceries', limit=600)]
        goals = [Goal(id='save', name='Save', target_amount=500, category_id='savings')]
        assert validate_category_references(budgets, goals, categories) == []

    def test_validate_category_references_errors(self):
        """Test each kind of bad reference."""
        categories = [
            Category(id='groceries', name='Groceries', type='expense'),
            Category(id='salary', name='Salary', type='income'),
        ]
        budgets = [
            Budget(category_id='groceries', limit=600),
            Budget(category_id='groceries', limit=700),
            Budget(category_id='salary', limit=100),
            Budget(category_id='travel', limit=100),
        ]
        goals = [Goal(id='trip', name='Trip', target_amount=500, category_id='travel')]

        errors = validate_category_references(budgets, goals, categories)

        assert len(errors) == 4
        assert any("'groceries': defined more than once" in e for e in errors)
        assert any("'salary': budgets apply to expense categories only" in e for e in errors)
        assert any("'travel': category does not exist" in e for e in errors)
        assert any("Goal 'trip'" in e for e in errors)
