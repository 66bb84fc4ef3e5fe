from datetime import date, datetime, timezone
from decimal import Decimal

import pytest

from campushub.exceptions import ClubNotFoundError, EventNotFoundError
from campushub.schemas.event import CreateEventRequest, UpdateEventRequest
from campushub.services.event_service import EventService, derive_event_status

from conftest import run_async


@pytest.fixture
def event_service(store, clock):
    store.collections["clubs"]["C1"] = {"id": "C1", "name": "Coding Club", "slug": "coding-club"}
    return EventService(store, clock=clock)


class TestDeriveStatus:

    @pytest.mark.parametrize("event_date, expected", [
        (date(2026, 10, 2), "Upcoming"),
        (date(2026, 10, 1), "Ongoing"),
        (date(2026, 9, 30), "Past"),
    ])
    def test_status_from_date(self, event_date, expected):
        assert derive_event_status(event_date, date(2026, 10, 1)) == expected

    def test_today_uses_campus_timezone(self, store):
        # 20:00 UTC on 1 Oct is already 2 Oct in India
        service = EventService(store, clock=lambda: datetime(2026, 10, 1, 20, 0, tzinfo=timezone.utc))

        assert service.today() == date(2026, 10, 2)


class TestEventCrud:

    def test_create_sets_status(self, event_service, store):
        event = run_async(event_service.create_event("C1", CreateEventRequest(
            name="Rust Workshop", date=date(2026, 10, 20), registration_fee=Decimal("25")
        )))

        assert event["status"] == "Upcoming"
        assert store.collections["events"][event["id"]]["club_id"] == "C1"

    def test_create_requires_club(self, event_service):
        with pytest.raises(ClubNotFoundError):
            run_async(event_service.create_event("NOPE", CreateEventRequest(name="X", date=date(2026, 10, 20))))

    def test_status_is_recomputed_on_read(self, event_service, store, clock):
        event = run_async(event_service.create_event("C1", CreateEventRequest(name="Talk", date=date(2026, 10, 3))))

        clock.advance(days=2)
        assert run_async(event_service.get_event(event["id"]))["status"] == "Ongoing"

        clock.advance(days=1)
        assert run_async(event_service.get_event(event["id"]))["status"] == "Past"
        # Stored value is stale on purpose
        assert store.collections["events"][event["id"]]["status"] == "Upcoming"

    def test_update_moves_status_with_date(self, event_service, store):
        event = run_async(event_service.create_event("C1", CreateEventRequest(name="Talk", date=date(2026, 10, 3))))

        updated = run_async(event_service.update_event("C1", event["id"], UpdateEventRequest(date=date(2026, 9, 1))))

        assert updated["status"] == "Past"
        assert store.collections["events"][event["id"]]["status"] == "Past"
        assert store.collections["events"][event["id"]]["name"] == "Talk"

    def test_event_scoped_to_club(self, event_service):
        event = run_async(event_service.create_event("C1", CreateEventRequest(name="Talk", date=date(2026, 10, 3))))

        with pytest.raises(EventNotFoundError):
            run_async(event_service.get_event(event["id"], club_id="C2"))

    def test_event_info_carries_fee(self, event_service):
        event = run_async(event_service.create_event("C1", CreateEventRequest(
            name="Hack Night", date=date(2026, 10, 3), registration_fee=Decimal("50")
        )))

        info = run_async(event_service.get_event_info(event["id"]))

        assert info.id == event["id"]
        assert info.club_id == "C1"
        assert info.is_paid is True

    def test_list_filters_by_status(self, event_service):
        for name, day in (("Past", date(2026, 9, 1)), ("Today", date(2026, 10, 1)), ("Soon", date(2026, 10, 9))):
            run_async(event_service.create_event("C1", CreateEventRequest(name=name, date=day)))

        assert [e["name"] for e in run_async(event_service.list_events())] == ["Past", "Today", "Soon"]
        assert [e["name"] for e in run_async(event_service.list_events(status="Upcoming"))] == ["Soon"]
