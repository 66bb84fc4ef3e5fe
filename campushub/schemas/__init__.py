"""
Pydantic schemas for request/response validation
"""

from campushub.schemas.club import CreateClubRequest, ClubResponse, ClubListResponse
from campushub.schemas.event import (
    EventStatus,
    CreateEventRequest,
    UpdateEventRequest,
    EventResponse,
    EventListResponse,
    EventInfo
)
from campushub.schemas.registration import (
    RegistrantProfile,
    GuestProfile,
    RegistrationResult,
    RegistrationResponse,
    RegistrationStats
)
from campushub.schemas.payment import PaymentRecord

__all__ = [
    "CreateClubRequest",
    "ClubResponse",
    "ClubListResponse",
    "EventStatus",
    "CreateEventRequest",
    "UpdateEventRequest",
    "EventResponse",
    "EventListResponse",
    "EventInfo",
    "RegistrantProfile",
    "GuestProfile",
    "RegistrationResult",
    "RegistrationResponse",
    "RegistrationStats",
    "PaymentRecord",
]
