"""
Event Service
Business logic for club events
"""

from datetime import date
from typing import List, Optional
from zoneinfo import ZoneInfo

from campushub.config import settings
from campushub.exceptions import ClubNotFoundError, EventNotFoundError
from campushub.schemas.event import CreateEventRequest, EventInfo, EventStatus, UpdateEventRequest
from campushub.services.actors import utcnow
from campushub.services.document_store import CLUBS, EVENTS, DocumentStore


def derive_event_status(event_date: date, today: date) -> str:
    if event_date > today:
        return EventStatus.UPCOMING
    if event_date == today:
        return EventStatus.ONGOING
    return EventStatus.PAST


class EventService:
    """Service for event management operations"""

    def __init__(self, store: DocumentStore, clock=utcnow):
        self.store = store
        self.clock = clock

    def today(self) -> date:
        return self.clock().astimezone(ZoneInfo(settings.EVENT_TIMEZONE)).date()

    def _with_status(self, event: dict) -> dict:
        """Status is always recomputed from the date, never trusted as stored"""
        event = dict(event)
        if isinstance(event.get("date"), str):
            event["date"] = date.fromisoformat(event["date"])
        event["status"] = derive_event_status(event["date"], self.today())
        return event

    async def create_event(self, club_id: str, data: CreateEventRequest) -> dict:
        """Create an event under an existing club"""

        if not await self.store.get(CLUBS, club_id):
            raise ClubNotFoundError()

        now = self.clock()
        document = {
            **data.model_dump(),
            "club_id": club_id,
            "status": derive_event_status(data.date, self.today()),
            "created_at": now,
            "updated_at": now,
        }

        event_id = await self.store.insert(EVENTS, document)
        return self._with_status({**document, "id": event_id})

    async def update_event(self, club_id: str, event_id: str, data: UpdateEventRequest) -> dict:
        """Apply a partial update; the status follows the (possibly new) date"""

        existing = await self.get_event(event_id, club_id=club_id)

        fields = data.model_dump(exclude_unset=True)
        event_date = fields.get("date") or existing["date"]
        fields["status"] = derive_event_status(event_date, self.today())
        fields["updated_at"] = self.clock()

        if not await self.store.update(EVENTS, event_id, fields, expected={"club_id": club_id}):
            raise EventNotFoundError()

        return self._with_status({**existing, **fields})

    async def get_event(self, event_id: str, club_id: Optional[str] = None) -> dict:
        """Get event by ID, optionally scoped to a club"""

        event = await self.store.get(EVENTS, event_id)
        if not event or (club_id and event.get("club_id") != club_id):
            raise EventNotFoundError()

        return self._with_status(event)

    async def get_event_info(self, event_id: str, club_id: Optional[str] = None) -> EventInfo:
        return EventInfo(**await self.get_event(event_id, club_id=club_id))

    async def list_events(self, club_id: Optional[str] = None, status: Optional[str] = None) -> List[dict]:
        """List events (soonest first), optionally filtered by club and derived status"""

        filters = {"club_id": club_id} if club_id else None
        events = [self._with_status(event) for event in await self.store.find(EVENTS, filters)]

        if status:
            events = [event for event in events if event["status"] == status]

        events.sort(key=lambda event: event["date"])
        return events
