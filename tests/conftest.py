# tests/conftest.py

import asyncio
import copy
from collections import defaultdict
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal
from typing import Optional
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest

from campushub.exceptions import DocumentExistsError
from campushub.schemas.event import EventInfo
from campushub.schemas.registration import GuestProfile, RegistrantProfile
from campushub.services.document_store import DocumentStore
from campushub.services.notification_service import NotificationService
from campushub.services.registration_service import RegistrationService


def run_async(coro):
    """Helper to run async coroutines in sync tests."""
    return asyncio.run(coro)


class InMemoryDocumentStore(DocumentStore):
    """Dict-backed DocumentStore with the same conflict and filter semantics as the database one"""

    def __init__(self):
        self.collections = defaultdict(dict)
        self.calls = []

    @staticmethod
    def _matches(doc: dict, filters: Optional[dict], before: Optional[dict]) -> bool:
        for field, value in (filters or {}).items():
            if doc.get(field) != value:
                return False
        for field, value in (before or {}).items():
            if doc.get(field) is None or not doc[field] < value:
                return False
        return True

    async def insert(self, collection, document, doc_id=None):
        self.calls.append(("insert", collection))
        doc_id = doc_id or str(uuid4())
        if doc_id in self.collections[collection]:
            raise DocumentExistsError()
        self.collections[collection][doc_id] = {**copy.deepcopy(document), "id": doc_id}
        return doc_id

    async def set(self, collection, doc_id, document):
        self.calls.append(("set", collection))
        existing = self.collections[collection].get(doc_id, {})
        self.collections[collection][doc_id] = {**existing, **copy.deepcopy(document), "id": doc_id}

    async def get(self, collection, doc_id):
        self.calls.append(("get", collection))
        doc = self.collections[collection].get(doc_id)
        return copy.deepcopy(doc) if doc else None

    async def find(self, collection, filters=None, before=None):
        self.calls.append(("find", collection))
        return [
            copy.deepcopy(doc)
            for doc in self.collections[collection].values()
            if self._matches(doc, filters, before)
        ]

    async def update(self, collection, doc_id, fields, expected=None):
        self.calls.append(("update", collection))
        doc = self.collections[collection].get(doc_id)
        if doc is None or not self._matches(doc, expected, None):
            return False
        doc.update(copy.deepcopy(fields))
        return True

    async def delete(self, collection, doc_id):
        self.calls.append(("delete", collection))
        return self.collections[collection].pop(doc_id, None) is not None

    async def delete_many(self, collection, doc_ids):
        self.calls.append(("delete_many", collection))
        return sum(1 for doc_id in list(doc_ids) if self.collections[collection].pop(doc_id, None) is not None)

    async def count(self, collection, filters=None):
        self.calls.append(("count", collection))
        return sum(1 for doc in self.collections[collection].values() if self._matches(doc, filters, None))

    def writes(self):
        return [call for call in self.calls if call[0] in ("insert", "set", "update", "delete", "delete_many")]


class FixedClock:
    """Callable clock that only moves when told to"""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs):
        self.now = self.now + timedelta(**kwargs)


@pytest.fixture
def store():
    return InMemoryDocumentStore()


@pytest.fixture
def clock():
    return FixedClock(datetime(2026, 10, 1, 6, 30, tzinfo=timezone.utc))


@pytest.fixture
def mailer():
    mock = MagicMock()
    mock.send_registration_confirmation = AsyncMock(return_value=True)
    mock.send_otp_email = AsyncMock(return_value=True)
    return mock


@pytest.fixture
def registration_service(store, clock, mailer):
    return RegistrationService(
        store,
        clock=clock,
        mailer=mailer,
        notifications=NotificationService(store, clock=clock),
    )


@pytest.fixture
def free_event():
    return EventInfo(
        id="E1",
        club_id="C1",
        name="Open Source Day",
        date=date(2026, 11, 20),
        location="Seminar Hall 2",
    )


@pytest.fixture
def paid_event():
    return EventInfo(
        id="E2",
        club_id="C1",
        name="Hack Night",
        date=date(2026, 11, 27),
        location="Main Auditorium",
        registration_fee=Decimal("50.00"),
    )


@pytest.fixture
def member_profile():
    return RegistrantProfile(
        name="Asha Verma",
        email="asha@gcet.edu.in",
        phone="9876543210",
        roll_number="22CS101",
        branch="CSE",
        year="3",
    )


@pytest.fixture
def guest_profile():
    return GuestProfile(
        name="Guest Person",
        email="a@b.com",
        phone="9000000000",
        college="Other Institute of Technology",
    )
