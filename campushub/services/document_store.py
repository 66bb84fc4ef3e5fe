"""
Document Store
Collection-oriented persistence used by the registration lifecycle.
Each collection maps to one PostgreSQL table; documents are plain dicts.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable, Dict, Iterable, List, Optional
from uuid import uuid4

from asyncpg import exceptions as pg_errors
from databases import Database
from sqlalchemy import Table, func, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from tenacity import AsyncRetrying, retry_if_exception_type, stop_after_attempt, wait_exponential

from campushub.config import settings
from campushub.database import database as default_database
from campushub.exceptions import (
    DocumentExistsError,
    StoreTimeoutError,
    StoreUnavailableError,
    TransientStoreError,
)
from campushub.models import (
    Club,
    Event,
    EventPayment,
    GuestEventPayment,
    GuestRegistration,
    Notification,
    Registration,
    VerificationCode,
)

REGISTRATIONS = "registrations"
GUEST_REGISTRATIONS = "guest_registrations"
PAYMENTS = "payments"
GUEST_PAYMENTS = "guest_payments"
NOTIFICATIONS = "notifications"
OTP_VERIFICATIONS = "otp_verifications"
CLUBS = "clubs"
EVENTS = "events"

COLLECTION_TABLES: Dict[str, Table] = {
    REGISTRATIONS: Registration.__table__,
    GUEST_REGISTRATIONS: GuestRegistration.__table__,
    PAYMENTS: EventPayment.__table__,
    GUEST_PAYMENTS: GuestEventPayment.__table__,
    NOTIFICATIONS: Notification.__table__,
    OTP_VERIFICATIONS: VerificationCode.__table__,
    CLUBS: Club.__table__,
    EVENTS: Event.__table__,
}

# asyncpg errors meaning the server could not be reached or the session dropped
CONNECTION_ERRORS = (
    ConnectionError,
    OSError,
    pg_errors.PostgresConnectionError,
    pg_errors.CannotConnectNowError,
    pg_errors.TooManyConnectionsError,
    pg_errors.ConnectionDoesNotExistError,
)

DELETE_CHUNK_SIZE = 500


class DocumentStore(ABC):
    """
    Minimal document database interface.

    Filters are equality matches on top-level fields. `before` maps a field
    to an exclusive upper bound (used for expiry sweeps).
    """

    @abstractmethod
    async def insert(self, collection: str, document: dict, doc_id: Optional[str] = None) -> str:
        """Create a document; raises DocumentExistsError if the id is taken"""

    @abstractmethod
    async def set(self, collection: str, doc_id: str, document: dict) -> None:
        """Create or overwrite a document"""

    @abstractmethod
    async def get(self, collection: str, doc_id: str) -> Optional[dict]:
        """Fetch one document by id"""

    @abstractmethod
    async def find(
        self,
        collection: str,
        filters: Optional[dict] = None,
        before: Optional[dict] = None,
    ) -> List[dict]:
        """Fetch all documents matching the filters"""

    @abstractmethod
    async def update(
        self,
        collection: str,
        doc_id: str,
        fields: dict,
        expected: Optional[dict] = None,
    ) -> bool:
        """
        Update fields of one document in a single write.

        When `expected` is given the write only applies if the stored
        document still has those field values. Returns whether a document
        was changed.
        """

    @abstractmethod
    async def delete(self, collection: str, doc_id: str) -> bool:
        """Delete one document; returns whether it existed"""

    @abstractmethod
    async def delete_many(self, collection: str, doc_ids: Iterable[str]) -> int:
        """Delete a batch of documents atomically; returns how many were removed"""

    @abstractmethod
    async def count(self, collection: str, filters: Optional[dict] = None) -> int:
        """Server-side count of matching documents"""


class DatabaseDocumentStore(DocumentStore):
    """DocumentStore backed by PostgreSQL through `databases`"""

    def __init__(
        self,
        database: Database = None,
        logger: logging.Logger = None,
        timeout: float = None,
        retry_attempts: int = None,
        retry_backoff: float = None,
        tables: Dict[str, Table] = None,
    ):
        self.database = database or default_database
        self.logger = logger or logging.getLogger(__name__)
        self.timeout = timeout if timeout is not None else settings.STORE_TIMEOUT_SECONDS
        self.retry_attempts = retry_attempts or settings.STORE_RETRY_ATTEMPTS
        self.retry_backoff = (
            retry_backoff if retry_backoff is not None else settings.STORE_RETRY_BACKOFF_SECONDS
        )
        self.tables = tables or COLLECTION_TABLES

    # ------------------------------------------------------------------
    # Call plumbing
    # ------------------------------------------------------------------

    def _table(self, collection: str) -> Table:
        try:
            return self.tables[collection]
        except KeyError:
            raise ValueError(f"Unknown collection '{collection}'")

    @staticmethod
    def _where(table: Table, filters: Optional[dict], before: Optional[dict] = None) -> list:
        clauses = [table.c[field] == value for field, value in (filters or {}).items()]
        clauses.extend(table.c[field] < value for field, value in (before or {}).items())
        return clauses

    @staticmethod
    def _to_dict(row) -> dict:
        return dict(row._mapping)

    async def _execute(self, call: Callable[[], Awaitable[Any]]) -> Any:
        """Run one store call under the timeout and map driver errors"""
        try:
            return await asyncio.wait_for(call(), timeout=self.timeout)
        # TimeoutError is an OSError subclass, so timeouts are matched first
        except (asyncio.TimeoutError, pg_errors.QueryCanceledError) as exc:
            raise StoreTimeoutError() from exc
        except pg_errors.UniqueViolationError as exc:
            raise DocumentExistsError() from exc
        except CONNECTION_ERRORS as exc:
            raise StoreUnavailableError() from exc

    def _log_retry(self, retry_state) -> None:
        self.logger.warning(
            "Store call failed (attempt %s/%s), retrying: %s",
            retry_state.attempt_number,
            self.retry_attempts,
            retry_state.outcome.exception(),
        )

    async def _run(self, operation: str, collection: str, call: Callable[[], Awaitable[Any]]) -> Any:
        self.logger.info("store.%s %s", operation, collection)

        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self.retry_attempts),
            wait=wait_exponential(multiplier=self.retry_backoff, max=10),
            retry=retry_if_exception_type(TransientStoreError),
            before_sleep=self._log_retry,
            reraise=True,
        ):
            with attempt:
                return await self._execute(call)

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    async def insert(self, collection: str, document: dict, doc_id: Optional[str] = None) -> str:
        table = self._table(collection)
        doc_id = doc_id or str(uuid4())
        values = {**document, "id": doc_id}

        await self._run("insert", collection, lambda: self.database.execute(table.insert().values(**values)))
        return doc_id

    async def set(self, collection: str, doc_id: str, document: dict) -> None:
        table = self._table(collection)
        values = {**document, "id": doc_id}

        stmt = pg_insert(table).values(**values)
        stmt = stmt.on_conflict_do_update(
            index_elements=[table.c.id],
            set_={field: stmt.excluded[field] for field in values if field != "id"},
        )
        await self._run("set", collection, lambda: self.database.execute(stmt))

    async def get(self, collection: str, doc_id: str) -> Optional[dict]:
        table = self._table(collection)
        query = table.select().where(table.c.id == doc_id)

        row = await self._run("get", collection, lambda: self.database.fetch_one(query))
        return self._to_dict(row) if row else None

    async def find(
        self,
        collection: str,
        filters: Optional[dict] = None,
        before: Optional[dict] = None,
    ) -> List[dict]:
        table = self._table(collection)
        query = table.select().where(*self._where(table, filters, before))

        rows = await self._run("find", collection, lambda: self.database.fetch_all(query))
        return [self._to_dict(row) for row in rows]

    async def update(
        self,
        collection: str,
        doc_id: str,
        fields: dict,
        expected: Optional[dict] = None,
    ) -> bool:
        table = self._table(collection)
        query = (
            table.update()
            .where(table.c.id == doc_id, *self._where(table, expected))
            .values(**fields)
            .returning(table.c.id)
        )

        row = await self._run("update", collection, lambda: self.database.fetch_one(query))
        return row is not None

    async def delete(self, collection: str, doc_id: str) -> bool:
        table = self._table(collection)
        query = table.delete().where(table.c.id == doc_id).returning(table.c.id)

        row = await self._run("delete", collection, lambda: self.database.fetch_one(query))
        return row is not None

    async def delete_many(self, collection: str, doc_ids: Iterable[str]) -> int:
        table = self._table(collection)
        doc_ids = list(doc_ids)
        if not doc_ids:
            return 0

        async def delete_batch() -> int:
            removed = 0
            async with self.database.transaction():
                for start in range(0, len(doc_ids), DELETE_CHUNK_SIZE):
                    chunk = doc_ids[start:start + DELETE_CHUNK_SIZE]
                    rows = await self.database.fetch_all(
                        table.delete().where(table.c.id.in_(chunk)).returning(table.c.id)
                    )
                    removed += len(rows)
            return removed

        return await self._run("delete_many", collection, delete_batch)

    async def count(self, collection: str, filters: Optional[dict] = None) -> int:
        table = self._table(collection)
        query = select(func.count()).select_from(table).where(*self._where(table, filters))

        total = await self._run("count", collection, lambda: self.database.fetch_val(query))
        return int(total or 0)
