"""
Database Models
Import all models here for Alembic migrations
"""

from campushub.models.club import Club
from campushub.models.event import Event
from campushub.models.registration import Registration, GuestRegistration
from campushub.models.payment import EventPayment, GuestEventPayment
from campushub.models.notification import Notification
from campushub.models.verification_code import VerificationCode

__all__ = [
    "Club",
    "Event",
    "Registration",
    "GuestRegistration",
    "EventPayment",
    "GuestEventPayment",
    "Notification",
    "VerificationCode",
]
