"""
Retention Service
Removes guest data once its retention window has passed
"""

import logging

from campushub.services.actors import utcnow
from campushub.services.document_store import DocumentStore, GUEST_REGISTRATIONS, NOTIFICATIONS

logger = logging.getLogger(__name__)


class RetentionService:
    """Guest-data sweep: expired guest registrations and guest notifications"""

    def __init__(self, store: DocumentStore, clock=utcnow):
        self.store = store
        self.clock = clock

    async def sweep(self) -> dict:
        """
        Delete every expired guest record, one atomic batch per collection.

        Returns:
            Count of deleted documents per collection
        """
        now = self.clock()

        expired_registrations = await self.store.find(
            GUEST_REGISTRATIONS, before={"expires_at": now}
        )
        expired_notifications = await self.store.find(
            NOTIFICATIONS, {"is_guest": True}, before={"expires_at": now}
        )

        deleted = {
            GUEST_REGISTRATIONS: await self.store.delete_many(
                GUEST_REGISTRATIONS, [doc["id"] for doc in expired_registrations]
            ),
            NOTIFICATIONS: await self.store.delete_many(
                NOTIFICATIONS, [doc["id"] for doc in expired_notifications]
            ),
        }

        logger.info(
            "Guest data cleanup: %s registrations, %s notifications deleted",
            deleted[GUEST_REGISTRATIONS],
            deleted[NOTIFICATIONS],
        )
        return deleted
