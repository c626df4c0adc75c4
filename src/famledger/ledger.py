"""
Ledger - transaction operations behind the entry forms.

Adds (single or recurring), edits one occurrence, deletes by scope, and
lists transactions. Recurring work is delegated to RecurrenceManager.
"""

import dataclasses
from datetime import date
from typing import Optional, Union

from .domain import (
    TransactionRecord, RecurringIntent, Category, TransactionKind, DeletionScope,
    coerce_kind, parse_date, sort_by_date,
)
from .errors import ValidationError, NotFoundError
from .recurrence import RecurrenceManager, SeriesResult, coerce_scope, store_call


# Fields an edit may replace; recurrence fields always stay as generated
EDITABLE_FIELDS = ('description', 'amount', 'date', 'kind', 'category_id', 'merchant')


class Ledger:
    """
    Family transaction ledger over a TransactionStore.

    Args:
        store: TransactionStore holding the records
        categories: Known categories. When given, every added or edited
            transaction must reference one of them.
    """

    def __init__(self, store, categories: Optional[list[Category]] = None):
        self.store = store
        self.recurrence = RecurrenceManager(store)
        self.categories = {c.id: c for c in categories} if categories is not None else None

    def _check_category(self, category_id: str):
        if self.categories is not None and category_id not in self.categories:
            raise ValidationError(f"Unknown category '{category_id}'")

    def add_transaction(self, entry: Union[TransactionRecord, RecurringIntent]
                        ) -> Union[TransactionRecord, SeriesResult]:
        """
        Store a new transaction.

        A RecurringIntent is expanded into a monthly series (returns a
        SeriesResult); a TransactionRecord is stored as-is (returns the
        stored record).
        """
        if isinstance(entry, RecurringIntent):
            self._check_category(entry.category_id)
            return self.recurrence.expand_series(entry)

        if not isinstance(entry, TransactionRecord):
            raise ValidationError(f"Cannot add {type(entry).__name__}")
        if entry.is_recurring or entry.series_id:
            raise ValidationError("Recurring transactions must be added as a RecurringIntent")

        self._check_category(entry.category_id)
        with store_call("save transaction"):
            return self.store.create(entry)

    def get_transaction(self, record_id: str) -> TransactionRecord:
        with store_call("load transaction"):
            record = self.store.get(record_id)
        if record is None:
            raise NotFoundError(f"Transaction '{record_id}' not found")
        return record

    def update_transaction(self, record_id: str, **fields) -> TransactionRecord:
        """
        Replace fields of one transaction.

        Only the named record changes. Editing an occurrence never touches
        the rest of its series.
        """
        unknown = set(fields) - set(EDITABLE_FIELDS)
        if unknown:
            raise ValidationError(f"Cannot edit field(s): {', '.join(sorted(unknown))}")

        current = self.get_transaction(record_id)
        # replace() re-runs __post_init__, so the edit is validated as a whole
        updated = dataclasses.replace(current, **fields)
        self._check_category(updated.category_id)

        with store_call("update transaction"):
            return self.store.replace(record_id, updated)

    def delete_transaction(self, record_id: str,
                           scope=DeletionScope.ONE) -> list[TransactionRecord]:
        """Delete a transaction (and, by scope, its series). Returns the deleted records."""
        scope = coerce_scope(scope)
        target = self.get_transaction(record_id)
        return self.recurrence.resolve_deletion_scope(target, scope)

    def series(self, series_id: str) -> list[TransactionRecord]:
        """Occurrences of a series in date order."""
        with store_call("load recurring series"):
            return sort_by_date(self.store.query_by_series_id(series_id))

    def transactions(self, start: Optional[date] = None, end: Optional[date] = None,
                     kind: Optional[TransactionKind] = None,
                     category_id: Optional[str] = None) -> list[TransactionRecord]:
        """All transactions matching the filters, in date order."""
        if start is not None:
            start = parse_date(start, 'start date')
        if end is not None:
            end = parse_date(end, 'end date')
        if kind is not None:
            kind = coerce_kind(kind)

        with store_call("load transactions"):
            records = self.store.all()

        result = []
        for record in records:
            if start is not None and record.date < start:
                continue
            if end is not None and record.date > end:
                continue
            if kind is not None and record.kind != kind:
                continue
            if category_id is not None and record.category_id != category_id:
                continue
            result.append(record)

        return sort_by_date(result)
