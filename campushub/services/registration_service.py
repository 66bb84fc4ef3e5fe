"""
Registration Service
Event registration lifecycle for members and guests: eligibility, creation,
status/payment transitions and per-event aggregation
"""

import asyncio
import logging
from typing import List, Optional, Sequence
from uuid import NAMESPACE_URL, uuid5

from campushub.config import settings
from campushub.exceptions import (
    AlreadyRegisteredError,
    ConflictError,
    DocumentExistsError,
    PaymentAlreadyUsedError,
    PaymentRequiredError,
    RegistrationNotFoundError,
    ValidationError,
)
from campushub.schemas.event import EventInfo
from campushub.schemas.payment import PaymentRecord
from campushub.schemas.registration import GuestProfile, RegistrantProfile, RegistrationStats
from campushub.services.actors import ActorRef, GuestActor, utcnow
from campushub.services.document_store import (
    DocumentStore,
    GUEST_PAYMENTS,
    GUEST_REGISTRATIONS,
    PAYMENTS,
    REGISTRATIONS,
)
from campushub.services.email_service import email_service
from campushub.services.notification_service import NotificationService
from campushub.services.post_commit import PostCommitActions

REGISTRATION_STATUSES = ("pending", "confirmed", "cancelled")
PAYMENT_STATUSES = ("pending", "paid", "refunded")


def registration_key(event_id: str, actor_id: str) -> str:
    """Document id shared by every registration of one actor for one event"""
    return str(uuid5(NAMESPACE_URL, f"campushub:registration:{event_id}:{actor_id}"))


class RegistrationService:
    """
    Registration lifecycle manager.

    Each (event, actor) pair owns one deterministic document id, so creation
    is create-if-absent and a concurrent duplicate is rejected by the store
    instead of by a read-then-write check. A cancelled record is replaced in
    place when the actor registers again.
    """

    def __init__(
        self,
        store: DocumentStore,
        logger: logging.Logger = None,
        clock=utcnow,
        mailer=None,
        notifications: NotificationService = None,
        batch_size: int = None,
    ):
        self.store = store
        self.logger = logger or logging.getLogger(__name__)
        self.clock = clock
        self.mailer = mailer or email_service
        self.notifications = notifications or NotificationService(store, clock=clock)
        self.batch_size = batch_size or settings.REGISTRATION_CHECK_BATCH_SIZE

    # ------------------------------------------------------------------
    # Eligibility
    # ------------------------------------------------------------------

    async def is_registered(self, event_id: str, actor: ActorRef, club_id: Optional[str]) -> bool:
        """
        True iff the actor holds a non-cancelled registration for the event.

        Without a club id the lookup cannot be scoped, so the answer is False.
        Store failures propagate; they are never reported as "not registered".
        """
        if not club_id:
            self.logger.warning("is_registered called without club id for event %s", event_id)
            return False

        records = await self.store.find(
            actor.registrations_collection,
            {"club_id": club_id, "event_id": event_id, "user_id": actor.actor_id},
        )
        return any(record.get("status") != "cancelled" for record in records)

    # ------------------------------------------------------------------
    # Creation
    # ------------------------------------------------------------------

    async def register_for_event(
        self,
        event: EventInfo,
        actor: ActorRef,
        profile: RegistrantProfile,
        additional_info: str = "",
    ) -> str:
        """Register for a free event; fee-bearing events must use register_for_paid_event"""
        if event.is_paid:
            raise PaymentRequiredError()

        record = self._build_record(event, actor, profile, additional_info)
        return await self._create(event, actor, record)

    async def register_for_paid_event(
        self,
        event: EventInfo,
        actor: ActorRef,
        profile: RegistrantProfile,
        payment_id: str,
        additional_info: str = "",
        payment_method: str = None,
        transaction_id: str = None,
    ) -> str:
        """
        Register after the gateway confirmed the payment.

        The payment itself is not verified here; `payment_id` must come from
        a confirmed gateway response for this event. A payment id already
        booked against another registration is refused.
        """
        if not event.is_paid:
            raise ValidationError("This event is free, register directly")
        if not payment_id or not payment_id.strip():
            raise ValidationError("A confirmed payment id is required")

        await self._ensure_payment_unused(payment_id, registration_key(event.id, actor.actor_id))

        record = self._build_record(
            event,
            actor,
            profile,
            additional_info,
            payment_status="paid",
            payment_id=payment_id,
        )

        payment = PaymentRecord(
            payment_id=payment_id,
            event_id=event.id,
            club_id=event.club_id,
            user_id=actor.actor_id,
            user_name=profile.name,
            user_email=str(profile.email),
            amount=event.registration_fee,
            payment_method=payment_method,
            transaction_id=transaction_id,
            is_guest=actor.is_guest,
        )

        return await self._create(event, actor, record, payment=payment)

    async def register_guest_for_event(
        self,
        event: EventInfo,
        guest_profile: GuestProfile,
        additional_info: str = "",
    ) -> str:
        """Register a guest (identified by email) for a free event"""
        if event.is_paid:
            raise PaymentRequiredError()

        actor = GuestActor(email=str(guest_profile.email).strip().lower())

        if await self.is_registered(event.id, actor, event.club_id):
            raise AlreadyRegisteredError()

        record = self._build_record(event, actor, guest_profile, additional_info)
        return await self._create(event, actor, record)

    def _build_record(
        self,
        event: EventInfo,
        actor: ActorRef,
        profile: RegistrantProfile,
        additional_info: str,
        payment_status: str = None,
        payment_id: str = None,
    ) -> dict:
        now = self.clock()
        record = {
            "event_id": event.id,
            "club_id": event.club_id,
            "user_id": actor.actor_id,
            "user_name": profile.name,
            "user_email": str(profile.email),
            "user_phone": profile.phone,
            "user_roll_number": profile.roll_number,
            "user_branch": profile.branch,
            "user_year": profile.year,
            "status": "confirmed",
            "payment_status": payment_status,
            "payment_id": payment_id,
            "registration_fee": event.registration_fee,
            "check_in_status": "not_checked_in",
            "check_in_time": None,
            "additional_info": additional_info or "",
            "event_name": event.name,
            "event_date": event.date.isoformat() if event.date else None,
            "event_location": event.location,
            "is_guest": actor.is_guest,
            "registration_date": now,
        }

        if isinstance(actor, GuestActor):
            record["guest_college"] = getattr(profile, "college", None)
            record["expires_at"] = actor.expires_at(now)

        return record

    async def _create(
        self,
        event: EventInfo,
        actor: ActorRef,
        record: dict,
        payment: PaymentRecord = None,
    ) -> str:
        collection = actor.registrations_collection
        doc_id = registration_key(event.id, actor.actor_id)

        try:
            await self.store.insert(collection, record, doc_id=doc_id)
        except DocumentExistsError:
            existing = await self.store.get(collection, doc_id)
            if existing is not None and existing.get("status") != "cancelled":
                raise AlreadyRegisteredError()

            if existing is None:
                # Removed between the two calls; a second collision means someone else won
                try:
                    await self.store.insert(collection, record, doc_id=doc_id)
                except DocumentExistsError:
                    raise AlreadyRegisteredError()
            elif not await self.store.update(collection, doc_id, record, expected={"status": "cancelled"}):
                raise AlreadyRegisteredError()

        self.logger.info(
            "Registration %s created for event %s (%s %s)",
            doc_id, event.id, "guest" if actor.is_guest else "member", actor.actor_id,
        )

        created = {**record, "id": doc_id}
        actions = PostCommitActions(self.logger)
        if payment is not None:
            actions.add(
                "store_event_payment",
                self._store_payment_or_raise,
                payment.model_copy(update={"registration_id": doc_id}),
            )
        actions.add("confirmation_email", self._send_confirmation, created)
        actions.add("registration_notification", self.notifications.notify_registration, created)
        await actions.run()

        return doc_id

    async def _ensure_payment_unused(self, payment_id: str, registration_id: str) -> None:
        for collection in (PAYMENTS, GUEST_PAYMENTS):
            booked = await self.store.get(collection, payment_id)
            if booked and booked.get("registration_id") != registration_id:
                self.logger.warning(
                    "Payment %s already booked for registration %s", payment_id, booked.get("registration_id")
                )
                raise PaymentAlreadyUsedError()

    async def _send_confirmation(self, registration: dict) -> None:
        if not await self.mailer.send_registration_confirmation(registration):
            raise RuntimeError(f"confirmation email to {registration['user_email']} was not sent")

    async def _store_payment_or_raise(self, payment: PaymentRecord) -> None:
        if not await self.store_event_payment(payment):
            raise RuntimeError(f"payment record {payment.payment_id} was not stored")

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    async def _locate(self, event_id: str, club_id: str, registration_id: str):
        """Find a registration in either partition, scoped to its club and event"""
        for collection in (REGISTRATIONS, GUEST_REGISTRATIONS):
            record = await self.store.get(collection, registration_id)
            if record and record.get("event_id") == event_id and record.get("club_id") == club_id:
                return collection, record

        raise RegistrationNotFoundError()

    async def get_registration(self, event_id: str, club_id: str, registration_id: str) -> dict:
        _, record = await self._locate(event_id, club_id, registration_id)
        return record

    async def update_payment_status(
        self,
        event_id: str,
        club_id: str,
        registration_id: str,
        status: str,
        payment_id: str,
    ) -> None:
        """Set the payment status; `paid` also confirms the registration in the same write"""
        if status not in PAYMENT_STATUSES:
            raise ValidationError(f"Invalid payment status '{status}'")

        collection, _ = await self._locate(event_id, club_id, registration_id)

        fields = {"payment_status": status, "payment_id": payment_id}
        if status == "paid":
            fields["status"] = "confirmed"

        if not await self.store.update(collection, registration_id, fields):
            raise RegistrationNotFoundError()

    async def check_in_user(self, event_id: str, club_id: str, registration_id: str) -> dict:
        collection, record = await self._locate(event_id, club_id, registration_id)

        fields = {"check_in_status": "checked_in", "check_in_time": self.clock()}
        checked_in = await self.store.update(
            collection, registration_id, fields, expected={"status": "confirmed"}
        )
        if not checked_in:
            raise ConflictError("Only confirmed registrations can be checked in")

        return {**record, **fields}

    async def cancel_registration(self, event_id: str, club_id: str, registration_id: str) -> None:
        """Cancel a registration; cancelling twice is a no-op"""
        collection, record = await self._locate(event_id, club_id, registration_id)
        if record.get("status") == "cancelled":
            return

        await self.store.update(collection, registration_id, {"status": "cancelled"})
        self.logger.info("Registration %s cancelled", registration_id)

    async def update_registration_status(
        self,
        event_id: str,
        club_id: str,
        registration_id: str,
        status: str,
    ) -> None:
        if status not in REGISTRATION_STATUSES:
            raise ValidationError(f"Invalid registration status '{status}'")

        collection, record = await self._locate(event_id, club_id, registration_id)
        current = record.get("status")
        if current == status:
            return
        if current == "cancelled":
            raise ConflictError("Cancelled registrations cannot be reopened; register again instead")

        changed = await self.store.update(
            collection, registration_id, {"status": status}, expected={"status": current}
        )
        if not changed:
            raise ConflictError("Registration changed while updating, please retry")

    async def delete_registration(self, event_id: str, club_id: str, registration_id: str) -> None:
        collection, _ = await self._locate(event_id, club_id, registration_id)
        if not await self.store.delete(collection, registration_id):
            raise RegistrationNotFoundError()
        self.logger.info("Registration %s deleted", registration_id)

    async def store_event_payment(self, payment: PaymentRecord) -> bool:
        """
        Write the payment bookkeeping record, keyed by payment id.

        Re-storing the same confirmation refreshes the record; a record that
        belongs to another registration is never replaced. Best effort: every
        failure is logged and reported as False.
        """
        try:
            if not (payment.registration_id and payment.event_id and payment.club_id):
                self.logger.warning(
                    "Payment %s missing registration/event/club id, not stored", payment.payment_id
                )
                return False

            document = payment.model_dump(exclude={"payment_id", "is_guest"})
            document["payment_status"] = "paid"
            document["timestamp"] = self.clock()

            collection = GUEST_PAYMENTS if payment.is_guest else PAYMENTS
            try:
                await self.store.insert(collection, document, doc_id=payment.payment_id)
                return True
            except DocumentExistsError:
                pass

            refreshed = await self.store.update(
                collection,
                payment.payment_id,
                document,
                expected={"registration_id": payment.registration_id},
            )
            if not refreshed:
                self.logger.warning(
                    "Payment %s belongs to another registration, not stored for %s",
                    payment.payment_id, payment.registration_id,
                )
            return refreshed

        except Exception:
            self.logger.exception("Failed to store payment record %s", payment.payment_id)
            return False

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    async def get_event_registrations(self, event_id: str, club_id: str) -> List[dict]:
        """Member and guest registrations for one event"""
        filters = {"club_id": club_id, "event_id": event_id}
        try:
            members = await self.store.find(REGISTRATIONS, filters)
            guests = await self.store.find(GUEST_REGISTRATIONS, filters)
        except Exception:
            self.logger.exception("Failed to load registrations for event %s", event_id)
            return []

        return members + guests

    async def get_event_registration_stats(self, event_id: str, club_id: str) -> RegistrationStats:
        registrations = await self.get_event_registrations(event_id, club_id)

        return RegistrationStats(
            total=len(registrations),
            confirmed=sum(1 for r in registrations if r.get("status") == "confirmed"),
            pending=sum(1 for r in registrations if r.get("status") == "pending"),
            cancelled=sum(1 for r in registrations if r.get("status") == "cancelled"),
            checked_in=sum(1 for r in registrations if r.get("check_in_status") == "checked_in"),
        )

    async def get_event_registration_count(self, event_id: str, club_id: str) -> int:
        """Listing-page count: member partition only, guests are not included"""
        try:
            return await self.store.count(REGISTRATIONS, {"club_id": club_id, "event_id": event_id})
        except Exception:
            self.logger.exception("Failed to count registrations for event %s", event_id)
            return 0

    async def get_user_registrations(self, actor: ActorRef, club_id: str, event_id: str) -> List[dict]:
        try:
            records = await self.store.find(
                actor.registrations_collection,
                {"club_id": club_id, "event_id": event_id, "user_id": actor.actor_id},
            )
        except Exception:
            self.logger.exception("Failed to load registrations of %s for event %s", actor.actor_id, event_id)
            return []

        records.sort(key=lambda r: r.get("registration_date") or self.clock(), reverse=True)
        return records

    async def batch_check_user_registrations(self, actor: ActorRef, events: Sequence) -> List[str]:
        """
        Ids of the given events the actor is registered for, in input order.

        Events are checked concurrently in batches; a failed check counts as
        not registered.
        """
        registered = []

        for start in range(0, len(events), self.batch_size):
            batch = events[start:start + self.batch_size]
            results = await asyncio.gather(
                *(self.is_registered(event.id, actor, event.club_id) for event in batch),
                return_exceptions=True,
            )

            for event, result in zip(batch, results):
                if isinstance(result, BaseException):
                    self.logger.warning("Registration check failed for event %s: %s", event.id, result)
                elif result:
                    registered.append(event.id)

        return registered
