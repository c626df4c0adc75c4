"""
Tests for transaction stores (in-memory and YAML file).
"""

import os
import pytest
import yaml
from datetime import date

from famledger.domain import TransactionRecord, TransactionKind, RecurrenceFrequency
from famledger.errors import NotFoundError, StoreUnavailableError, ValidationError
from famledger.store import (
    InMemoryTransactionStore, YamlTransactionStore,
    load_transactions, open_store, record_to_dict, record_from_dict,
)


def make_record(**overrides):
    fields = dict(
        description='Groceries',
        amount=82.40,
        date=date(2025, 1, 4),
        kind=TransactionKind.EXPENSE,
        category_id='groceries',
    )
    fields.update(overrides)
    return TransactionRecord(**fields)


def make_occurrence(day, series_id='s1', **overrides):
    return make_record(
        description='Rent', amount=1500, date=day, category_id='housing',
        is_recurring=True, recurrence_frequency='monthly', series_id=series_id,
        **overrides
    )


class TestInMemoryStore:
    """Test the dict-backed store."""

    def test_batch_create_assigns_unique_ids(self):
        """Test that created records get distinct ids and input order is kept."""
        store = InMemoryTransactionStore()
        created = store.batch_create([
            make_record(date=date(2025, 1, 5)),
            make_record(date=date(2025, 1, 1)),
        ])

        assert created[0].id != created[1].id
        assert [r.date for r in created] == [date(2025, 1, 5), date(2025, 1, 1)]
        assert len(store) == 2

    def test_batch_create_does_not_mutate_input(self):
        """Test that the caller's records keep id None."""
        store = InMemoryTransactionStore()
        record = make_record()
        store.create(record)
        assert record.id is None

    def test_get_returns_copy(self):
        """Test that mutating a fetched record does not change the store."""
        store = InMemoryTransactionStore()
        created = store.create(make_record())

        fetched = store.get(created.id)
        fetched.description = 'Changed'

        assert store.get(created.id).description == 'Groceries'

    def test_get_unknown(self):
        """Test that an unknown id returns None."""
        assert InMemoryTransactionStore().get('nope') is None

    def test_query_by_series_id(self):
        """Test that only records of the series are returned."""
        store = InMemoryTransactionStore()
        store.batch_create([
            make_occurrence(date(2025, 1, 1)),
            make_occurrence(date(2025, 2, 1)),
            make_occurrence(date(2025, 1, 1), series_id='s2'),
            make_record(),
        ])

        found = store.query_by_series_id('s1')
        assert len(found) == 2
        assert all(r.series_id == 's1' for r in found)

    def test_batch_delete_ignores_unknown_ids(self):
        """Test that unknown ids in a delete batch are skipped."""
        store = InMemoryTransactionStore()
        created = store.create(make_record())

        store.batch_delete([created.id, 'missing'])

        assert len(store) == 0

    def test_delete_one(self):
        """Test deleting a single record."""
        store = InMemoryTransactionStore()
        first, second = store.batch_create([make_record(), make_record()])

        store.delete_one(first.id)

        assert [r.id for r in store.all()] == [second.id]

    def test_replace(self):
        """Test that replace overwrites fields and keeps the id."""
        store = InMemoryTransactionStore()
        created = store.create(make_record())

        updated = store.replace(created.id, make_record(amount=90))

        assert updated.id == created.id
        assert store.get(created.id).amount == 90

    def test_replace_unknown_raises(self):
        """Test that replacing a missing record fails."""
        with pytest.raises(NotFoundError, match="not found"):
            InMemoryTransactionStore().replace('nope', make_record())

    def test_preloaded_records_need_ids(self):
        """Test that preloading an unsaved record is rejected."""
        with pytest.raises(ValidationError, match="must have an id"):
            InMemoryTransactionStore([make_record()])

    def test_open_store_without_path(self):
        """Test that open_store(None) gives an empty in-memory store."""
        store = open_store()
        assert isinstance(store, InMemoryTransactionStore)
        assert not isinstance(store, YamlTransactionStore)
        assert len(store) == 0


class TestRecordSerialization:
    """Test the YAML document layout of a record."""

    def test_simple_record(self):
        """Test that a one-off record omits recurrence keys."""
        data = record_to_dict(make_record(id='abc', merchant='Trader Joe'))

        assert data == {
            'id': 'abc',
            'description': 'Groceries',
            'amount': 82.40,
            'date': '2025-01-04',
            'type': 'expense',
            'category': 'groceries',
            'merchant': 'Trader Joe',
            'recurring': False,
        }

    def test_recurring_record(self):
        """Test that an occurrence keeps frequency, end date, and series."""
        record = make_occurrence(date(2025, 1, 1), id='r1', recurrence_end_date=date(2025, 6, 1))
        data = record_to_dict(record)

        assert data['recurring'] is True
        assert data['frequency'] == 'monthly'
        assert data['end_date'] == '2025-06-01'
        assert data['series'] == 's1'

        restored = record_from_dict(data)
        assert restored == record

    def test_yaml_dates_are_accepted(self):
        """Test that unquoted YAML dates (already date objects) load."""
        record = record_from_dict({
            'id': 'x', 'description': 'Pay', 'amount': 3000,
            'date': date(2025, 1, 31), 'type': 'income', 'category': 'salary',
        })
        assert record.date == date(2025, 1, 31)
        assert record.kind == TransactionKind.INCOME

    def test_missing_field(self):
        """Test that a missing required field is reported by name."""
        with pytest.raises(ValueError, match="'category' is required"):
            record_from_dict({
                'id': 'x', 'description': 'Pay', 'amount': 3000,
                'date': '2025-01-31', 'type': 'income',
            })


class TestYamlStore:
    """Test the file-backed store."""

    def test_missing_file_is_empty(self, tmp_path):
        """Test that a store over a nonexistent file starts empty."""
        store = YamlTransactionStore(str(tmp_path / 'data' / 'transactions.yaml'))
        assert len(store) == 0
        assert not (tmp_path / 'data').exists()

    def test_round_trip(self, tmp_path):
        """Test that written records load back unchanged."""
        path = str(tmp_path / 'data' / 'transactions.yaml')
        store = YamlTransactionStore(path)
        created = store.batch_create([
            make_record(merchant='Market'),
            make_occurrence(date(2025, 1, 1)),
            make_occurrence(date(2025, 2, 1)),
        ])

        reopened = YamlTransactionStore(path)

        assert len(reopened) == 3
        for record in created:
            assert reopened.get(record.id) == record

    def test_file_is_sorted_by_date(self, tmp_path):
        """Test that the data file lists transactions in date order."""
        path = tmp_path / 'transactions.yaml'
        store = YamlTransactionStore(str(path))
        store.batch_create([
            make_record(date=date(2025, 3, 1)),
            make_record(date=date(2025, 1, 1)),
        ])

        data = yaml.safe_load(path.read_text())
        assert [t['date'] for t in data['transactions']] == ['2025-01-01', '2025-03-01']

    def test_date_time_input_sorts_with_dates(self, tmp_path):
        """Test that records entered with a date-time write and reload as dates."""
        path = tmp_path / 'transactions.yaml'
        store = YamlTransactionStore(str(path))
        store.batch_create([
            make_record(date='2025-01-02T18:45:00'),
            make_record(date=date(2025, 1, 1)),
        ])

        data = yaml.safe_load(path.read_text())
        assert [t['date'] for t in data['transactions']] == ['2025-01-01', '2025-01-02']
        assert all(type(r.date) is date for r in load_transactions(str(path)))

    def test_delete_persists(self, tmp_path):
        """Test that deletions are written to the file."""
        path = str(tmp_path / 'transactions.yaml')
        store = YamlTransactionStore(path)
        first, second = store.batch_create([make_record(), make_record()])

        store.batch_delete([first.id])

        assert [r.id for r in load_transactions(path)] == [second.id]

    def test_write_failure_leaves_memory_and_file_unchanged(self, tmp_path, monkeypatch):
        """Test that a failed file write keeps the previous collection."""
        path = tmp_path / 'transactions.yaml'
        store = YamlTransactionStore(str(path))
        existing = store.create(make_record())
        before = path.read_text()

        def fail_replace(src, dst):
            raise OSError("disk full")

        monkeypatch.setattr(os, 'replace', fail_replace)

        with pytest.raises(StoreUnavailableError, match="disk full"):
            store.batch_create([make_record(), make_record()])

        assert [r.id for r in store.all()] == [existing.id]
        assert path.read_text() == before
        assert [p.name for p in tmp_path.iterdir()] == ['transactions.yaml']

    def test_malformed_file(self, tmp_path):
        """Test that unparseable YAML makes the store unavailable."""
        path = tmp_path / 'transactions.yaml'
        path.write_text("transactions: [unclosed\n")

        with pytest.raises(StoreUnavailableError, match="Could not read"):
            YamlTransactionStore(str(path))

    def test_invalid_entry(self, tmp_path):
        """Test that a bad entry is reported with its position."""
        path = tmp_path / 'transactions.yaml'
        path.write_text("""
transactions:
  - id: a
    description: Rent
    amount: 1500
    date: 2025-01-01
    type: expense
    category: housing
  - id: b
    description: Broken
    amount: -5
    date: 2025-01-02
    type: expense
    category: housing
""")

        with pytest.raises(StoreUnavailableError, match="transaction #2"):
            load_transactions(str(path))

    def test_empty_file(self, tmp_path):
        """Test that an empty data file loads as no transactions."""
        path = tmp_path / 'transactions.yaml'
        path.write_text("")
        assert load_transactions(str(path)) == []

    def test_recurring_fields_survive_reload(self, tmp_path):
        """Test that frequency and series id are restored as enum and string."""
        path = str(tmp_path / 'transactions.yaml')
        YamlTransactionStore(path).create(make_occurrence(date(2025, 1, 1)))

        record = load_transactions(path)[0]
        assert record.recurrence_frequency == RecurrenceFrequency.MONTHLY
        assert record.series_id == 's1'
        assert record.is_recurring is True
