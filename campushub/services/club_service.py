"""
Club Service
Business logic for club management
"""

from campushub.exceptions import ClubNotFoundError, ConflictError
from campushub.schemas.club import CreateClubRequest
from campushub.services.actors import utcnow
from campushub.services.document_store import CLUBS, DocumentStore


class ClubService:
    """Service for club management operations"""

    def __init__(self, store: DocumentStore, clock=utcnow):
        self.store = store
        self.clock = clock

    async def create_club(self, data: CreateClubRequest) -> dict:
        """Create a new club"""

        slug = data.slug.lower()

        # Check if slug already exists
        if await self.store.count(CLUBS, {"slug": slug}):
            raise ConflictError(f"Club with slug '{data.slug}' already exists")

        # Check if contact email is already used
        if await self.store.count(CLUBS, {"contact_email": str(data.contact_email)}):
            raise ConflictError(f"Club with email '{data.contact_email}' already exists")

        now = self.clock()
        document = {
            "name": data.name,
            "slug": slug,
            "tagline": data.tagline,
            "contact_email": str(data.contact_email),
            "logo_url": data.logo_url,
            "is_active": True,
            "created_at": now,
            "updated_at": now,
        }

        club_id = await self.store.insert(CLUBS, document)
        return {**document, "id": club_id}

    async def get_club_by_id(self, club_id: str) -> dict:
        """Get club by ID"""

        club = await self.store.get(CLUBS, club_id)
        if not club:
            raise ClubNotFoundError()

        return club

    async def list_clubs(self, active_only: bool = True) -> dict:
        """List clubs, newest first"""

        filters = {"is_active": True} if active_only else None
        clubs = await self.store.find(CLUBS, filters)
        clubs.sort(key=lambda club: club.get("created_at") or self.clock(), reverse=True)

        return {"total": len(clubs), "clubs": clubs}
