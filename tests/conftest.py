"""Shared fixtures for the address migration tests.

No test talks to a real DoltDB: the record store is an in-memory fake and
the pymysql layer is exercised through fake connection/cursor objects.
"""

import sys
from pathlib import Path

import pytest

# Add project root to path so tests can import donor_address and the script
sys.path.insert(0, str(Path(__file__).parent.parent))


class FakeDonationStore:
    """In-memory donations table implementing the runner's store interface.

    rows: {id: {"donor_address": ..., "donor_address_obj": dict | None}}
    """

    def __init__(self, rows: dict, fail_ids=()):
        self.rows = rows
        self.fail_ids = set(fail_ids)
        self.update_calls = []
        self.fetch_calls = 0

    def _needs_migration(self, row: dict) -> bool:
        address = row.get("donor_address")
        if not address:
            return False
        obj = row.get("donor_address_obj")
        return obj is None or not isinstance(obj, dict) or not obj.get("city")

    def fetch_eligible(self, limit=None):
        self.fetch_calls += 1
        found = [
            {
                "record_id": record_id,
                "legacy_address": row.get("donor_address"),
                "structured_address": row.get("donor_address_obj"),
            }
            for record_id, row in sorted(self.rows.items())
            if self._needs_migration(row)
        ]
        return found[:limit] if limit is not None else found

    def set_structured_address(self, record_id, address):
        self.update_calls.append((record_id, address))
        if record_id in self.fail_ids:
            raise RuntimeError("write timeout")
        self.rows[record_id]["donor_address_obj"] = address.model_dump()


class RecordingLogger:
    """Logger collaborator that remembers every call."""

    def __init__(self):
        self.calls = []

    def __getattr__(self, name):
        def record(*args):
            self.calls.append((name, args))

        return record

    def names(self):
        return [name for name, _ in self.calls]


class FakeCursor:
    """Minimal pymysql cursor: records SQL, answers from canned responses.

    responses maps an SQL substring to the rows returned for the first
    execute() whose SQL contains it.
    """

    def __init__(self, responses=None, rowcount=1, error=None):
        self.responses = responses or {}
        self.rowcount = rowcount
        self.error = error
        self.executed = []
        self._last = None

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def execute(self, sql, params=()):
        if self.error is not None:
            raise self.error
        self.executed.append((sql, params))
        self._last = sql
        return self.rowcount

    def _rows(self):
        for fragment, rows in self.responses.items():
            if fragment in self._last:
                return rows
        return []

    def fetchall(self):
        return self._rows()

    def fetchone(self):
        rows = self._rows()
        if isinstance(rows, dict):
            return rows
        return rows[0] if rows else None


class FakeConnection:
    def __init__(self, cursor: FakeCursor):
        self._cursor = cursor
        self.closed = False

    def cursor(self):
        return self._cursor

    def close(self):
        self.closed = True


@pytest.fixture
def sample_rows():
    """Donations covering migrate / skip / ineligible cases."""
    return {
        1: {"donor_address": "12 MG Road, Pune, Maharashtra - 411001", "donor_address_obj": None},
        2: {"donor_address": "Shop 9, Baner, MH", "donor_address_obj": None},
        3: {"donor_address": "somewhere", "donor_address_obj": None},
        4: {"donor_address": "", "donor_address_obj": None},
        5: {
            "donor_address": "7 Park Street, Kolkata, West Bengal",
            "donor_address_obj": {
                "line": "7 Park Street",
                "city": "Kolkata",
                "state": "West Bengal",
                "country": "India",
                "pincode": "",
            },
        },
        6: {"donor_address": "Plot 4, 411038", "donor_address_obj": None},
    }


@pytest.fixture
def store(sample_rows):
    return FakeDonationStore(sample_rows)


@pytest.fixture
def recording_logger():
    return RecordingLogger()


@pytest.fixture
def fake_cursor():
    return FakeCursor()


@pytest.fixture
def fake_connection(fake_cursor):
    return FakeConnection(fake_cursor)
