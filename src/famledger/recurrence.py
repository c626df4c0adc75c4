"""
Recurring transaction series: generation and scoped deletion.

A recurring transaction is stored as one TransactionRecord per occurrence,
all sharing a series_id. Occurrence i falls on start_date + i months
(offset from the start date, so Jan 31 -> Feb 29 -> Mar 31 rather than
drifting to the 29th).
"""

import uuid
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import date
from typing import Optional

from dateutil.relativedelta import relativedelta

from .domain import (
    TransactionRecord, RecurringIntent, RecurrenceFrequency, DeletionScope,
    sort_by_date,
)
from .errors import LedgerError, ValidationError, EmptySeriesError, StoreUnavailableError


# Series without an explicit end date stop this many years after the start
DEFAULT_HORIZON_YEARS = 5


@dataclass
class SeriesResult:
    """
    Outcome of expanding a recurring intent.

    Attributes:
        series_id: Identifier shared by every occurrence
        representative_id: Store id of the first occurrence
        records: Stored occurrences in date order
    """
    series_id: str
    representative_id: str
    records: list[TransactionRecord]


def series_end_date(start_date: date, recurrence_end_date: Optional[date] = None) -> date:
    """Last date an occurrence may fall on."""
    if recurrence_end_date is not None:
        return recurrence_end_date
    return start_date + relativedelta(years=DEFAULT_HORIZON_YEARS)


def plan_series_dates(start_date: date, recurrence_end_date: Optional[date] = None) -> list[date]:
    """
    Calculate every occurrence date of a monthly series.

    Args:
        start_date: Date of the first occurrence
        recurrence_end_date: Inclusive bound (None = DEFAULT_HORIZON_YEARS after start)

    Returns:
        Dates in increasing order; empty if the end date is before the start
    """
    end_date = series_end_date(start_date, recurrence_end_date)

    dates = []
    offset = 0
    current = start_date
    while current <= end_date:
        dates.append(current)
        offset += 1
        current = start_date + relativedelta(months=offset)

    return dates


def coerce_scope(scope) -> DeletionScope:
    """Turn 'one' / 'future' / 'all' into a DeletionScope."""
    if isinstance(scope, DeletionScope):
        return scope
    try:
        return DeletionScope(str(scope).lower())
    except ValueError:
        raise ValidationError(f"Invalid deletion scope: {scope!r} (use one, future, or all)")


def records_in_scope(target: TransactionRecord, siblings: list[TransactionRecord],
                     scope) -> list[TransactionRecord]:
    """
    Select the records a delete request covers.

    Args:
        target: The occurrence the user selected
        siblings: Every record sharing the target's series_id, as queried
        scope: DeletionScope (or its string value)

    Returns:
        Records to delete, in date order. Always contains the target.
    """
    scope = coerce_scope(scope)

    # A record outside any series is never treated as a group
    if scope == DeletionScope.ONE or not target.series_id:
        return [target]

    # Presumed siblings are missing; the selected record still goes
    if not siblings:
        return [target]

    if scope == DeletionScope.ALL:
        selected = list(siblings)
    else:
        selected = [r for r in siblings if r.date >= target.date]

    if not any(r.id == target.id for r in selected):
        selected.append(target)

    return sort_by_date(selected)


@contextmanager
def store_call(action: str):
    """Surface store failures as StoreUnavailableError."""
    try:
        yield
    except LedgerError:
        raise
    except Exception as e:
        raise StoreUnavailableError(f"Could not {action}: {e}") from e


class RecurrenceManager:
    """
    Expands recurring intents into stored series and deletes them by scope.

    Holds no state besides the store; every call works from its input or a
    fresh store query.
    """

    def __init__(self, store):
        self.store = store

    def build_series(self, intent: RecurringIntent,
                     series_id: Optional[str] = None) -> list[TransactionRecord]:
        """
        Materialize the occurrences of an intent without storing them.

        Raises:
            EmptySeriesError: If the dates produce no occurrence
        """
        dates = plan_series_dates(intent.start_date, intent.recurrence_end_date)
        if not dates:
            raise EmptySeriesError(
                f"No occurrences between {intent.start_date} and {intent.recurrence_end_date}. "
                f"Check the dates."
            )

        series_id = series_id or uuid.uuid4().hex
        return [
            TransactionRecord(
                description=intent.description,
                amount=intent.amount,
                date=occurrence_date,
                kind=intent.kind,
                category_id=intent.category_id,
                is_recurring=True,
                recurrence_frequency=RecurrenceFrequency.MONTHLY,
                recurrence_end_date=intent.recurrence_end_date,
                series_id=series_id,
                merchant=intent.merchant,
            )
            for occurrence_date in dates
        ]

    def expand_series(self, intent: RecurringIntent) -> SeriesResult:
        """
        Generate and store every occurrence of a recurring intent in one batch.

        Raises:
            ValidationError: If the intent is not a RecurringIntent
            EmptySeriesError: If the dates produce no occurrence (nothing written)
            StoreUnavailableError: If the batch write fails (nothing written)
        """
        if not isinstance(intent, RecurringIntent):
            raise ValidationError(f"Expected a RecurringIntent, got {type(intent).__name__}")

        records = self.build_series(intent)

        with store_call("save recurring series"):
            stored = self.store.batch_create(records)

        return SeriesResult(
            series_id=records[0].series_id,
            representative_id=stored[0].id,
            records=sort_by_date(stored),
        )

    def resolve_deletion_scope(self, target: TransactionRecord, scope) -> list[TransactionRecord]:
        """
        Delete the target and, depending on scope, its series siblings.

        Args:
            target: The occurrence the user selected
            scope: DeletionScope.ONE, FUTURE, or ALL (or their string values)

        Returns:
            The records that were deleted, in date order

        Raises:
            ValidationError: If scope is not one of the three values
            StoreUnavailableError: If the query or delete fails (nothing deleted)
        """
        scope = coerce_scope(scope)

        if scope == DeletionScope.ONE or not target.series_id:
            with store_call("delete transaction"):
                self.store.delete_one(target.id)
            return [target]

        with store_call("load recurring series"):
            siblings = self.store.query_by_series_id(target.series_id)

        selected = records_in_scope(target, siblings, scope)

        if len(selected) == 1:
            with store_call("delete transaction"):
                self.store.delete_one(selected[0].id)
        else:
            with store_call("delete recurring series"):
                self.store.batch_delete([r.id for r in selected])

        return selected
