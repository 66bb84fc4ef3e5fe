"""
Registration Actors
Who is registering: a signed-in member or an email-identified guest
"""

import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional, Union

from campushub.config import settings
from campushub.exceptions import ValidationError

GUEST_PREFIX = "guest_"

_NON_ALNUM = re.compile(r"[^a-z0-9]")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def guest_id_for_email(email: str) -> str:
    """Deterministic guest identifier: `a.b@x.com` -> `guest_a_b_x_com`"""
    if not email or not email.strip():
        raise ValidationError("Guest email is required")
    return GUEST_PREFIX + _NON_ALNUM.sub("_", email.strip().lower())


@dataclass(frozen=True)
class MemberActor:
    """Signed-in user; `user_id` is the identity provider subject"""
    user_id: str

    is_guest = False
    registrations_collection = "registrations"

    @property
    def actor_id(self) -> str:
        return self.user_id


@dataclass(frozen=True)
class GuestActor:
    """Anonymous registrant identified by email; data expires after the retention window"""
    email: str

    is_guest = True
    registrations_collection = "guest_registrations"

    @property
    def actor_id(self) -> str:
        return guest_id_for_email(self.email)

    def expires_at(self, now: Optional[datetime] = None) -> datetime:
        return (now or utcnow()) + timedelta(days=settings.GUEST_RETENTION_DAYS)


ActorRef = Union[MemberActor, GuestActor]


def actor_from_identifier(identifier: str, email: Optional[str] = None) -> ActorRef:
    """
    Build an actor from a raw identifier received over HTTP.

    Guest identifiers cannot be reversed into an email, so guests must
    supply their email alongside the identifier.
    """
    if not identifier:
        raise ValidationError("User identifier is required")

    if identifier.startswith(GUEST_PREFIX):
        if not email or guest_id_for_email(email) != identifier:
            raise ValidationError("Guest identifier does not match the supplied email")
        return GuestActor(email=email.strip().lower())

    return MemberActor(user_id=identifier)
