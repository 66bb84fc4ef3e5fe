"""
Seed a demo club with one free and one paid event for local testing
"""

import sys
import asyncio
from datetime import date, timedelta
from decimal import Decimal
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from campushub.database import connect_db, disconnect_db
from campushub.deps import get_store
from campushub.exceptions import ConflictError
from campushub.schemas.club import CreateClubRequest
from campushub.schemas.event import CreateEventRequest
from campushub.services.club_service import ClubService
from campushub.services.event_service import EventService

DEFAULTS = {
    "club_name": "Demo Club",
    "club_slug": "demo-club",
    "contact_email": "democlub@gcet.edu.in",
}


async def seed_demo_club():
    await connect_db()

    try:
        store = get_store()
        club_service = ClubService(store)
        event_service = EventService(store)

        try:
            club = await club_service.create_club(CreateClubRequest(
                name=DEFAULTS["club_name"],
                slug=DEFAULTS["club_slug"],
                contact_email=DEFAULTS["contact_email"],
            ))
        except ConflictError:
            clubs = await store.find("clubs", {"slug": DEFAULTS["club_slug"]})
            club = clubs[0]
            print(f"Club already exists: {club['id']}")
        else:
            print(f"Created club: {club['id']}")

        next_week = date.today() + timedelta(days=7)
        for name, fee in (("Open Mic Night", Decimal("0")), ("Hack Day", Decimal("99"))):
            event = await event_service.create_event(club["id"], CreateEventRequest(
                name=name,
                date=next_week,
                location="Main Auditorium",
                registration_fee=fee,
            ))
            print(f"Created event: {event['name']} ({event['id']}) fee={fee}")

    finally:
        await disconnect_db()


if __name__ == "__main__":
    asyncio.run(seed_demo_club())
