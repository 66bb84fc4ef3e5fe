"""
Tests for DatabaseDocumentStore call handling.

The `databases` connection is mocked; these cover error classification,
transient-only retries and the per-call timeout.
"""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest
from asyncpg import exceptions as pg_errors

from campushub.exceptions import DocumentExistsError, StoreTimeoutError, StoreUnavailableError
from campushub.services.document_store import DatabaseDocumentStore

from conftest import run_async


def _store(database, **overrides):
    options = {"timeout": 1.0, "retry_attempts": 3, "retry_backoff": 0}
    options.update(overrides)
    return DatabaseDocumentStore(database=database, **options)


class TestErrorClassification:

    def test_unique_violation_becomes_document_exists_without_retry(self):
        database = MagicMock()
        database.execute = AsyncMock(side_effect=pg_errors.UniqueViolationError("duplicate key"))

        with pytest.raises(DocumentExistsError):
            run_async(_store(database).insert("registrations", {"user_id": "u1"}, doc_id="r1"))

        assert database.execute.await_count == 1

    def test_connection_errors_are_retried_then_raised(self):
        database = MagicMock()
        database.fetch_one = AsyncMock(side_effect=ConnectionRefusedError("refused"))

        with pytest.raises(StoreUnavailableError):
            run_async(_store(database).get("registrations", "r1"))

        assert database.fetch_one.await_count == 3

    def test_transient_failure_recovers(self):
        database = MagicMock()
        database.fetch_val = AsyncMock(side_effect=[pg_errors.CannotConnectNowError("starting"), 4])

        assert run_async(_store(database).count("registrations", {"event_id": "E1"})) == 4
        assert database.fetch_val.await_count == 2

    def test_slow_calls_time_out(self):
        async def hang(*args, **kwargs):
            await asyncio.sleep(5)

        database = MagicMock()
        database.fetch_all = AsyncMock(side_effect=hang)

        with pytest.raises(StoreTimeoutError):
            run_async(_store(database, timeout=0.01, retry_attempts=2).find("registrations"))

        assert database.fetch_all.await_count == 2

    def test_programming_errors_propagate_unchanged(self):
        database = MagicMock()
        database.fetch_one = AsyncMock(side_effect=KeyError("boom"))

        with pytest.raises(KeyError):
            run_async(_store(database).get("registrations", "r1"))

        assert database.fetch_one.await_count == 1

    def test_unknown_collection(self):
        with pytest.raises(ValueError):
            run_async(_store(MagicMock()).get("teams", "t1"))


class TestOperations:

    def test_insert_uses_given_id(self):
        database = MagicMock()
        database.execute = AsyncMock(return_value=None)

        doc_id = run_async(_store(database).insert("clubs", {"name": "Coding Club"}, doc_id="club-1"))

        assert doc_id == "club-1"
        database.execute.assert_awaited_once()

    def test_get_returns_plain_dict(self):
        row = MagicMock()
        row._mapping = {"id": "r1", "status": "confirmed"}
        database = MagicMock()
        database.fetch_one = AsyncMock(return_value=row)

        assert run_async(_store(database).get("registrations", "r1")) == {"id": "r1", "status": "confirmed"}

    def test_conditional_update_reports_miss(self):
        database = MagicMock()
        database.fetch_one = AsyncMock(return_value=None)

        changed = run_async(_store(database).update(
            "registrations", "r1", {"status": "confirmed"}, expected={"status": "cancelled"}
        ))

        assert changed is False

    def test_delete_many_runs_in_one_transaction(self):
        database = MagicMock()
        database.fetch_all = AsyncMock(return_value=[{"id": "a"}, {"id": "b"}])

        removed = run_async(_store(database).delete_many("guest_registrations", ["a", "b"]))

        assert removed == 2
        database.transaction.assert_called_once()

    def test_delete_many_with_nothing_to_delete(self):
        database = MagicMock()

        assert run_async(_store(database).delete_many("notifications", [])) == 0
        database.transaction.assert_not_called()


class TestDatabaseWiring:

    def test_default_store_uses_shared_database(self):
        from campushub import database as db

        assert DatabaseDocumentStore().database is db.database
        assert not hasattr(db, "SessionLocal")
        assert not hasattr(db, "get_database")

    def test_model_tables_share_base_metadata(self):
        import campushub.models  # noqa: F401
        from campushub.database import Base, metadata

        assert Base.metadata is metadata
        assert {"registrations", "guest_registrations", "payments", "guest_payments"} <= set(metadata.tables)
