"""
Registration Request/Response Models
"""

from pydantic import BaseModel, EmailStr, Field
from typing import Literal, Optional
from datetime import datetime
from decimal import Decimal


RegistrationStatus = Literal["pending", "confirmed", "cancelled"]
PaymentStatus = Literal["pending", "paid", "refunded"]


class RegistrantProfile(BaseModel):
    """Contact details copied onto the registration record"""
    name: str = Field(..., min_length=1, max_length=200)
    email: EmailStr
    phone: Optional[str] = Field(None, max_length=30)
    roll_number: Optional[str] = Field(None, max_length=50)
    branch: Optional[str] = Field(None, max_length=100)
    year: Optional[str] = Field(None, max_length=20)


class GuestProfile(RegistrantProfile):
    """Guest registrant from outside the college"""
    college: Optional[str] = Field(None, max_length=200, description="Guest's home institution")


class MemberRegistrationRequest(BaseModel):
    """Member registration; name and email default to the token claims"""
    name: Optional[str] = Field(None, max_length=200)
    phone: Optional[str] = Field(None, max_length=30)
    roll_number: Optional[str] = Field(None, max_length=50)
    branch: Optional[str] = Field(None, max_length=100)
    year: Optional[str] = Field(None, max_length=20)
    additional_info: str = Field("", max_length=2000)


class GuestRegistrationRequest(GuestProfile):
    additional_info: str = Field("", max_length=2000)


class PaidRegistrationRequest(BaseModel):
    """
    Registration after checkout. Members authenticate with a bearer token;
    guests send their profile instead.
    """
    order_id: str = Field(..., min_length=1, description="Gateway order id from checkout")
    additional_info: str = Field("", max_length=2000)
    member: Optional[MemberRegistrationRequest] = None
    guest: Optional[GuestProfile] = None


class RegistrationStatusUpdate(BaseModel):
    status: RegistrationStatus


class PaymentStatusUpdate(BaseModel):
    payment_status: PaymentStatus
    payment_id: str = Field(..., min_length=1)


class RegistrationResult(BaseModel):
    success: bool = True
    message: str
    registration_id: Optional[str] = None


class RegistrationResponse(BaseModel):
    """Stored registration record"""
    id: str
    event_id: str
    club_id: str
    user_id: str
    user_name: str
    user_email: str
    user_phone: Optional[str] = None
    user_roll_number: Optional[str] = None
    user_branch: Optional[str] = None
    user_year: Optional[str] = None
    status: str
    payment_status: Optional[str] = None
    payment_id: Optional[str] = None
    registration_fee: Decimal = Decimal("0")
    check_in_status: str
    check_in_time: Optional[datetime] = None
    additional_info: Optional[str] = None
    event_name: Optional[str] = None
    event_date: Optional[str] = None
    event_location: Optional[str] = None
    is_guest: bool = False
    guest_college: Optional[str] = None
    expires_at: Optional[datetime] = None
    registration_date: Optional[datetime] = None

    class Config:
        from_attributes = True


class RegistrationStats(BaseModel):
    total: int = 0
    confirmed: int = 0
    pending: int = 0
    cancelled: int = 0
    checked_in: int = 0


class RegistrationCountResponse(BaseModel):
    event_id: str
    count: int


class EventRef(BaseModel):
    id: str
    club_id: str


class BatchCheckRequest(BaseModel):
    events: list[EventRef] = Field(..., max_length=200)


class BatchCheckResponse(BaseModel):
    registered_event_ids: list[str]
