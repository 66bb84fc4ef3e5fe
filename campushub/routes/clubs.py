"""
Club Endpoints
Platform admins create clubs; anyone can browse them
"""

from fastapi import APIRouter, Depends, status

from campushub.auth import get_platform_admin
from campushub.deps import get_club_service
from campushub.schemas.club import CreateClubRequest, ClubResponse, ClubListResponse
from campushub.services.club_service import ClubService

router = APIRouter()


@router.post("", response_model=ClubResponse, status_code=status.HTTP_201_CREATED)
async def create_club(
    request: CreateClubRequest,
    current_admin: dict = Depends(get_platform_admin),
    club_service: ClubService = Depends(get_club_service)
):
    """
    Create a new club (Platform Admin only)

    - **slug**: must be unique, stored lowercase
    - **contact_email**: must not be used by another club
    """
    return await club_service.create_club(request)


@router.get("", response_model=ClubListResponse)
async def list_clubs(club_service: ClubService = Depends(get_club_service)):
    """List active clubs (public)"""
    return await club_service.list_clubs()


@router.get("/{club_id}", response_model=ClubResponse)
async def get_club(club_id: str, club_service: ClubService = Depends(get_club_service)):
    """Get club details (public)"""
    return await club_service.get_club_by_id(club_id)
