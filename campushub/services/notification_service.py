"""
Notification Service
In-app notifications tied to registrations
"""

import logging
from typing import List

from campushub.services.actors import utcnow
from campushub.services.document_store import DocumentStore, NOTIFICATIONS

logger = logging.getLogger(__name__)


class NotificationService:
    """Writes and lists per-user notification records"""

    def __init__(self, store: DocumentStore, clock=utcnow):
        self.store = store
        self.clock = clock

    async def notify_registration(self, registration: dict) -> str:
        """Record a 'registration confirmed' notification; guest rows carry the registration's expiry"""
        document = {
            "user_id": registration["user_id"],
            "is_guest": bool(registration.get("is_guest")),
            "title": "Registration confirmed",
            "message": f"You are registered for {registration.get('event_name') or 'the event'}.",
            "event_id": registration.get("event_id"),
            "registration_id": registration.get("id"),
            "is_read": False,
            "created_at": self.clock(),
            "expires_at": registration.get("expires_at") if registration.get("is_guest") else None,
        }
        return await self.store.insert(NOTIFICATIONS, document)

    async def list_for_user(self, user_id: str, unread_only: bool = False) -> List[dict]:
        filters = {"user_id": user_id}
        if unread_only:
            filters["is_read"] = False

        notifications = await self.store.find(NOTIFICATIONS, filters)
        notifications.sort(key=lambda n: n.get("created_at") or self.clock(), reverse=True)
        return notifications

    async def mark_read(self, notification_id: str, user_id: str) -> bool:
        return await self.store.update(
            NOTIFICATIONS,
            notification_id,
            {"is_read": True},
            expected={"user_id": user_id},
        )
