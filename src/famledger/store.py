"""
Transaction stores.

A store is a flat collection of TransactionRecords. Batch writes are
all-or-nothing: every write is applied to a staged copy of the collection
and the copy replaces the live collection only once every record was
applied (and, for the YAML store, once the file was written).
"""

import copy
import os
import tempfile
import uuid
from datetime import date
from typing import Optional

import yaml

from .domain import TransactionRecord, parse_date
from .errors import NotFoundError, StoreUnavailableError, ValidationError


class TransactionStore:
    """
    Contract every transaction store implements.

    Writes are atomic; reads return copies, so callers cannot mutate
    stored records in place.
    """

    def batch_create(self, records: list[TransactionRecord]) -> list[TransactionRecord]:
        """Store all records or none. Returns stored copies with ids, in input order."""
        raise NotImplementedError

    def create(self, record: TransactionRecord) -> TransactionRecord:
        """Store one record. Returns the stored copy with its id."""
        return self.batch_create([record])[0]

    def query_by_series_id(self, series_id: str) -> list[TransactionRecord]:
        """Every record carrying series_id, in no particular order."""
        raise NotImplementedError

    def batch_delete(self, ids: list[str]) -> None:
        """Delete all ids or none. Unknown ids are ignored."""
        raise NotImplementedError

    def delete_one(self, record_id: str) -> None:
        """Delete one record. An unknown id is ignored."""
        self.batch_delete([record_id])

    def get(self, record_id: str) -> Optional[TransactionRecord]:
        raise NotImplementedError

    def replace(self, record_id: str, record: TransactionRecord) -> TransactionRecord:
        """Overwrite every field of an existing record."""
        raise NotImplementedError

    def all(self) -> list[TransactionRecord]:
        raise NotImplementedError


class InMemoryTransactionStore(TransactionStore):
    """Dict-backed store. Ids are random hex tokens."""

    def __init__(self, records: Optional[list[TransactionRecord]] = None):
        self._records: dict[str, TransactionRecord] = {}
        for record in records or []:
            if not record.id:
                raise ValidationError("Preloaded records must have an id")
            self._records[record.id] = copy.copy(record)

    def _new_id(self) -> str:
        return uuid.uuid4().hex

    def _stage_record(self, staged: dict, record: TransactionRecord) -> None:
        staged[record.id] = record

    def _unstage_record(self, staged: dict, record_id: str) -> None:
        staged.pop(record_id, None)

    def _commit(self, staged: dict) -> None:
        self._records = staged

    def batch_create(self, records):
        staged = dict(self._records)
        created = []
        for record in records:
            stored = copy.copy(record)
            stored.id = self._new_id()
            self._stage_record(staged, stored)
            created.append(stored)
        self._commit(staged)
        return [copy.copy(r) for r in created]

    def query_by_series_id(self, series_id):
        return [copy.copy(r) for r in self._records.values() if r.series_id == series_id]

    def batch_delete(self, ids):
        staged = dict(self._records)
        for record_id in ids:
            self._unstage_record(staged, record_id)
        self._commit(staged)

    def get(self, record_id):
        record = self._records.get(record_id)
        return copy.copy(record) if record else None

    def replace(self, record_id, record):
        if record_id not in self._records:
            raise NotFoundError(f"Transaction '{record_id}' not found")
        stored = copy.copy(record)
        stored.id = record_id
        staged = dict(self._records)
        self._stage_record(staged, stored)
        self._commit(staged)
        return copy.copy(stored)

    def all(self):
        return [copy.copy(r) for r in self._records.values()]

    def __len__(self):
        return len(self._records)


# =============================================================================
# YAML FILE STORE
# =============================================================================

def record_to_dict(record: TransactionRecord) -> dict:
    """Serialize a record into the YAML document layout."""
    data = {
        'id': record.id,
        'description': record.description,
        'amount': record.amount,
        'date': record.date.isoformat() if isinstance(record.date, date) else record.date,
        'type': record.kind.value,
        'category': record.category_id,
    }
    if record.merchant:
        data['merchant'] = record.merchant
    data['recurring'] = record.is_recurring
    if record.is_recurring:
        data['frequency'] = record.recurrence_frequency.value
        if record.recurrence_end_date:
            data['end_date'] = record.recurrence_end_date.isoformat()
        data['series'] = record.series_id
    return data


def record_from_dict(data: dict) -> TransactionRecord:
    """
    Build a record from its YAML document.

    Raises:
        ValueError: If a required field is missing or invalid
    """
    required_fields = ['id', 'description', 'amount', 'date', 'type', 'category']
    for field in required_fields:
        if field not in data:
            raise ValueError(f"'{field}' is required")

    return TransactionRecord(
        id=str(data['id']),
        description=data['description'],
        amount=float(data['amount']),
        date=parse_date(data['date']),
        kind=data['type'],
        category_id=str(data['category']),
        is_recurring=bool(data.get('recurring', False)),
        recurrence_frequency=data.get('frequency'),
        recurrence_end_date=data.get('end_date'),
        series_id=data.get('series'),
        merchant=data.get('merchant'),
    )


def load_transactions(path: str) -> list[TransactionRecord]:
    """
    Load transactions from a YAML data file.

    Returns:
        List of records (empty if the file doesn't exist or is empty)

    Raises:
        StoreUnavailableError: If the file can't be read or an entry is invalid
    """
    if not os.path.exists(path):
        return []

    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise StoreUnavailableError(f"Could not read {path}: {e}") from e

    if not data:
        return []

    records = []
    for i, tx_data in enumerate(data.get('transactions') or []):
        try:
            records.append(record_from_dict(tx_data))
        except (ValueError, KeyError, TypeError) as e:
            raise StoreUnavailableError(f"Error loading transaction #{i+1} from {path}: {e}") from e

    return records


class YamlTransactionStore(InMemoryTransactionStore):
    """
    Store persisted to a single YAML file.

    The file is rewritten on every write through a temp file and
    os.replace, so readers see either the old or the new collection.
    """

    def __init__(self, path: str):
        self.path = path
        super().__init__(load_transactions(path))

    def _commit(self, staged: dict) -> None:
        self._write(staged)
        super()._commit(staged)

    def _write(self, records: dict) -> None:
        document = {
            'transactions': [
                record_to_dict(r)
                for r in sorted(records.values(), key=lambda r: (r.date, r.id))
            ]
        }
        directory = os.path.dirname(os.path.abspath(self.path))
        try:
            os.makedirs(directory, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(prefix='.transactions-', suffix='.yaml', dir=directory)
            try:
                with os.fdopen(fd, 'w', encoding='utf-8') as f:
                    yaml.safe_dump(document, f, sort_keys=False, allow_unicode=True)
                os.replace(tmp_path, self.path)
            except BaseException:
                if os.path.exists(tmp_path):
                    os.unlink(tmp_path)
                raise
        except OSError as e:
            raise StoreUnavailableError(f"Could not write {self.path}: {e}") from e


def open_store(path: Optional[str] = None) -> TransactionStore:
    """YAML store for path, or an empty in-memory store when path is None."""
    if path is None:
        return InMemoryTransactionStore()
    return YamlTransactionStore(path)
