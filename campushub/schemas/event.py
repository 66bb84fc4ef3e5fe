"""
Event Request/Response Models
"""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import date as Date, datetime
from decimal import Decimal


class EventStatus:
    UPCOMING = "Upcoming"
    ONGOING = "Ongoing"
    PAST = "Past"


class CreateEventRequest(BaseModel):
    """Request to create an event under a club"""
    name: str = Field(..., min_length=1, max_length=200, description="Event name")
    description: Optional[str] = Field(None, description="Event description")
    category: Optional[str] = Field(None, max_length=50, description="Workshop, Hackathon, Talk, ...")
    date: Date = Field(..., description="Event date")
    time: Optional[str] = Field(None, max_length=20, description="Start time, e.g. 10:00 AM")
    location: Optional[str] = Field(None, max_length=200, description="Venue")
    capacity: Optional[int] = Field(None, ge=0, description="Expected capacity (informational)")
    registration_fee: Decimal = Field(Decimal("0"), ge=0, description="Registration fee in rupees (0 = free)")

    class Config:
        json_schema_extra = {
            "example": {
                "name": "Intro to Rust",
                "category": "Workshop",
                "date": "2026-11-20",
                "time": "10:00 AM",
                "location": "Seminar Hall 2",
                "capacity": 120,
                "registration_fee": "50.00"
            }
        }


class UpdateEventRequest(BaseModel):
    """Request to update event details"""
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    category: Optional[str] = Field(None, max_length=50)
    date: Optional[Date] = None
    time: Optional[str] = Field(None, max_length=20)
    location: Optional[str] = Field(None, max_length=200)
    capacity: Optional[int] = Field(None, ge=0)
    registration_fee: Optional[Decimal] = Field(None, ge=0)


class EventResponse(BaseModel):
    """Event details response"""
    id: str
    club_id: str
    name: str
    description: Optional[str] = None
    category: Optional[str] = None
    date: Date
    time: Optional[str] = None
    location: Optional[str] = None
    capacity: Optional[int] = None
    registration_fee: Decimal = Decimal("0")
    status: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class EventListResponse(BaseModel):
    total: int
    events: list[EventResponse]


class EventInfo(BaseModel):
    """The slice of an event the registration lifecycle needs"""
    id: str
    club_id: str
    name: str = ""
    date: Optional[Date] = None
    location: Optional[str] = None
    registration_fee: Decimal = Decimal("0")

    class Config:
        extra = "ignore"

    @property
    def is_paid(self) -> bool:
        return self.registration_fee > 0
