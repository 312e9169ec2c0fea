"""Tests for the migrate_structured_address.py entry point."""

from contextlib import contextmanager

import migrate_structured_address as cli
import pytest
from conftest import FakeConnection, FakeCursor, FakeDonationStore
from donor_address.config import DATABASE_URL_VARS


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch):
    monkeypatch.setattr(cli, "load_env_file", lambda: None)
    for var in DATABASE_URL_VARS:
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def patched_store(monkeypatch, sample_rows):
    """Route the script to an in-memory store instead of DoltDB."""
    store = FakeDonationStore(sample_rows)
    connection = FakeConnection(FakeCursor())

    @contextmanager
    def fake_open_connection(url):
        try:
            yield connection
        finally:
            connection.close()

    monkeypatch.setattr(cli, "open_connection", fake_open_connection)
    monkeypatch.setattr(cli, "DonationRepository", lambda conn: store)
    monkeypatch.setenv("DOLT_URL", "mysql://localhost/donations")
    return store, connection


class TestExitCodes:
    def test_missing_connection_string(self):
        assert cli.main(["--dry-run"]) == 1

    def test_completed_run(self, patched_store):
        store, connection = patched_store
        assert cli.main([]) == 0
        assert len(store.update_calls) == 3
        assert connection.closed

    def test_record_errors_do_not_fail_process(self, patched_store):
        store, _ = patched_store
        store.fail_ids = {1, 2}
        assert cli.main([]) == 0

    def test_unhandled_exception(self, monkeypatch, patched_store):
        def boom(*args, **kwargs):
            raise RuntimeError("unexpected")

        monkeypatch.setattr(cli, "display_results", boom)
        assert cli.main([]) == 1

    def test_invalid_limit(self, patched_store):
        assert cli.main(["--limit", "0"]) == 1


class TestDryRun:
    def test_no_writes(self, patched_store):
        store, _ = patched_store
        assert cli.main(["--dry-run"]) == 0
        assert store.update_calls == []

    def test_dry_run_skips_commit(self, monkeypatch, patched_store):
        commits = []
        monkeypatch.setattr(cli.DoltVersionControl, "commit", lambda self, message: commits.append(message))
        assert cli.main(["--dry-run", "--commit"]) == 0
        assert commits == []


class TestCommit:
    def test_commit_after_live_run(self, monkeypatch, patched_store):
        commits = []

        def fake_commit(self, message):
            commits.append(message)
            return "0123456789abcdef"

        monkeypatch.setattr(cli.DoltVersionControl, "commit", fake_commit)
        assert cli.main(["--commit"]) == 0
        assert commits == ["Migrate structured donor addresses: 3 donations"]

    def test_limit_passed_through(self, patched_store):
        store, _ = patched_store
        assert cli.main(["--limit", "1"]) == 0
        assert [record_id for record_id, _ in store.update_calls] == [1]
