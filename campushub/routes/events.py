"""
Event Endpoints
Club managers publish events; listings show a lightweight registration count
"""

from typing import Optional
from fastapi import APIRouter, Depends, Query, status

from campushub.auth import get_club_manager
from campushub.deps import get_event_service, get_registration_service
from campushub.schemas.event import (
    CreateEventRequest,
    UpdateEventRequest,
    EventResponse,
    EventListResponse,
)
from campushub.schemas.registration import RegistrationCountResponse
from campushub.services.event_service import EventService
from campushub.services.registration_service import RegistrationService

router = APIRouter()


@router.get("/events", response_model=EventListResponse)
async def list_events(
    status_filter: Optional[str] = Query(None, alias="status", description="Upcoming, Ongoing or Past"),
    event_service: EventService = Depends(get_event_service)
):
    """List events across all clubs (public)"""
    events = await event_service.list_events(status=status_filter)
    return {"total": len(events), "events": events}


@router.get("/events/{event_id}", response_model=EventResponse)
async def get_event(event_id: str, event_service: EventService = Depends(get_event_service)):
    """Get event details (public)"""
    return await event_service.get_event(event_id)


@router.get("/clubs/{club_id}/events", response_model=EventListResponse)
async def list_club_events(
    club_id: str,
    status_filter: Optional[str] = Query(None, alias="status"),
    event_service: EventService = Depends(get_event_service)
):
    """List one club's events (public)"""
    events = await event_service.list_events(club_id=club_id, status=status_filter)
    return {"total": len(events), "events": events}


@router.post("/clubs/{club_id}/events", response_model=EventResponse, status_code=status.HTTP_201_CREATED)
async def create_event(
    club_id: str,
    request: CreateEventRequest,
    current_user: dict = Depends(get_club_manager),
    event_service: EventService = Depends(get_event_service)
):
    """
    Create an event (Club Manager only)

    - **registration_fee**: 0 for free events; anything above requires checkout before registering
    - **capacity**: informational, registrations are not capped
    """
    return await event_service.create_event(club_id, request)


@router.patch("/clubs/{club_id}/events/{event_id}", response_model=EventResponse)
async def update_event(
    club_id: str,
    event_id: str,
    request: UpdateEventRequest,
    current_user: dict = Depends(get_club_manager),
    event_service: EventService = Depends(get_event_service)
):
    """Update an event (Club Manager only)"""
    return await event_service.update_event(club_id, event_id, request)


@router.get("/clubs/{club_id}/events/{event_id}/registrations/count", response_model=RegistrationCountResponse)
async def get_registration_count(
    club_id: str,
    event_id: str,
    registration_service: RegistrationService = Depends(get_registration_service)
):
    """
    Member registration count for event cards (public)

    Guests are not counted here; the full breakdown is in the stats endpoint.
    """
    count = await registration_service.get_event_registration_count(event_id, club_id)
    return {"event_id": event_id, "count": count}
