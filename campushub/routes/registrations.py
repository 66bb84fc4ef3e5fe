"""
Registration Endpoints
Member, guest and paid registration; club manager administration
"""

from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status

from campushub.auth import get_club_manager, get_current_user, get_optional_user
from campushub.deps import get_event_service, get_payment_gateway, get_registration_service
from campushub.exceptions import PaymentNotConfirmedError, ValidationError
from campushub.schemas.registration import (
    BatchCheckRequest,
    BatchCheckResponse,
    GuestRegistrationRequest,
    MemberRegistrationRequest,
    PaidRegistrationRequest,
    PaymentStatusUpdate,
    RegistrantProfile,
    RegistrationResponse,
    RegistrationResult,
    RegistrationStats,
    RegistrationStatusUpdate,
)
from campushub.services.actors import GuestActor, MemberActor, actor_from_identifier
from campushub.services.event_service import EventService
from campushub.services.payment_service import RazorpayGateway
from campushub.services.registration_service import RegistrationService

router = APIRouter()


def _member_profile(user: dict, request: Optional[MemberRegistrationRequest]) -> RegistrantProfile:
    request = request or MemberRegistrationRequest()
    return RegistrantProfile(
        name=request.name or user["name"],
        email=user["email"],
        phone=request.phone,
        roll_number=request.roll_number,
        branch=request.branch,
        year=request.year,
    )


# ----------------------------------------------------------------------
# Self-service
# ----------------------------------------------------------------------

@router.post("/events/{event_id}/register", response_model=RegistrationResult, status_code=status.HTTP_201_CREATED)
async def register_for_event(
    event_id: str,
    request: MemberRegistrationRequest,
    current_user: dict = Depends(get_current_user),
    event_service: EventService = Depends(get_event_service),
    registration_service: RegistrationService = Depends(get_registration_service)
):
    """
    Register the signed-in member for a free event

    Fee-bearing events answer 409 and must go through checkout + `/register/paid`.
    """
    event = await event_service.get_event_info(event_id)
    registration_id = await registration_service.register_for_event(
        event,
        MemberActor(user_id=current_user["user_id"]),
        _member_profile(current_user, request),
        request.additional_info,
    )
    return {"success": True, "message": "Registration successful!", "registration_id": registration_id}


@router.post("/events/{event_id}/register/guest", response_model=RegistrationResult, status_code=status.HTTP_201_CREATED)
async def register_guest_for_event(
    event_id: str,
    request: GuestRegistrationRequest,
    event_service: EventService = Depends(get_event_service),
    registration_service: RegistrationService = Depends(get_registration_service)
):
    """
    Register a guest (no account) for a free event

    Guests are identified by email; their data is removed after the retention window.
    """
    event = await event_service.get_event_info(event_id)
    registration_id = await registration_service.register_guest_for_event(
        event,
        request,
        request.additional_info,
    )
    return {"success": True, "message": "Registration successful!", "registration_id": registration_id}


@router.post("/events/{event_id}/register/paid", response_model=RegistrationResult, status_code=status.HTTP_201_CREATED)
async def register_for_paid_event(
    event_id: str,
    request: PaidRegistrationRequest,
    current_user: Optional[dict] = Depends(get_optional_user),
    event_service: EventService = Depends(get_event_service),
    gateway: RazorpayGateway = Depends(get_payment_gateway),
    registration_service: RegistrationService = Depends(get_registration_service)
):
    """
    Register after checkout

    The order is looked up at the gateway first; nothing is written unless
    it was created for this event and a payment of the full fee was captured.
    Members send a bearer token, guests a `guest` profile.
    """
    event = await event_service.get_event_info(event_id)
    if not event.is_paid:
        raise ValidationError("This event is free, register directly")

    if current_user:
        actor = MemberActor(user_id=current_user["user_id"])
        profile = _member_profile(current_user, request.member)
    elif request.guest:
        actor = GuestActor(email=str(request.guest.email).strip().lower())
        profile = request.guest
    else:
        raise ValidationError("Sign in or provide guest details to register")

    order = await gateway.fetch_order(request.order_id)
    if order.get("event_id") != event.id:
        raise ValidationError("This order was not created for this event")

    payment = await gateway.fetch_payment_status(request.order_id)
    if payment["status"] != "captured" or not payment.get("payment_id"):
        raise PaymentNotConfirmedError(
            f"Payment for order {request.order_id} is {payment['status']}; registration not created"
        )
    if payment.get("amount") != event.registration_fee:
        raise ValidationError("Paid amount does not match the event registration fee")

    registration_id = await registration_service.register_for_paid_event(
        event,
        actor,
        profile,
        payment["payment_id"],
        additional_info=request.additional_info,
        payment_method=payment.get("method"),
        transaction_id=payment.get("transaction_id"),
    )
    return {"success": True, "message": "Payment received, registration confirmed!", "registration_id": registration_id}


@router.get("/events/{event_id}/registered")
async def check_registration(
    event_id: str,
    user_id: Optional[str] = Query(None, description="Guest identifier (guest_...) when not signed in"),
    email: Optional[str] = Query(None, description="Guest email matching the identifier"),
    current_user: Optional[dict] = Depends(get_optional_user),
    event_service: EventService = Depends(get_event_service),
    registration_service: RegistrationService = Depends(get_registration_service)
):
    """Whether the signed-in member (or the given guest) holds an active registration"""
    event = await event_service.get_event_info(event_id)

    if current_user:
        actor = MemberActor(user_id=current_user["user_id"])
    else:
        actor = actor_from_identifier(user_id, email)
        if not isinstance(actor, GuestActor):
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Sign in to check member registrations"
            )

    registered = await registration_service.is_registered(event.id, actor, event.club_id)
    return {"event_id": event.id, "user_id": actor.actor_id, "registered": registered}


@router.post("/me/registrations/check", response_model=BatchCheckResponse)
async def batch_check_registrations(
    request: BatchCheckRequest,
    current_user: dict = Depends(get_current_user),
    registration_service: RegistrationService = Depends(get_registration_service)
):
    """Which of the given events the signed-in member is registered for (profile page)"""
    registered = await registration_service.batch_check_user_registrations(
        MemberActor(user_id=current_user["user_id"]),
        request.events,
    )
    return {"registered_event_ids": registered}


@router.get("/events/{event_id}/my-registrations", response_model=list[RegistrationResponse])
async def my_registrations(
    event_id: str,
    current_user: dict = Depends(get_current_user),
    event_service: EventService = Depends(get_event_service),
    registration_service: RegistrationService = Depends(get_registration_service)
):
    """The signed-in member's registrations for one event, newest first"""
    event = await event_service.get_event_info(event_id)
    return await registration_service.get_user_registrations(
        MemberActor(user_id=current_user["user_id"]),
        event.club_id,
        event.id,
    )


@router.post("/events/{event_id}/registrations/{registration_id}/cancel", response_model=RegistrationResult)
async def cancel_own_registration(
    event_id: str,
    registration_id: str,
    current_user: dict = Depends(get_current_user),
    event_service: EventService = Depends(get_event_service),
    registration_service: RegistrationService = Depends(get_registration_service)
):
    """Cancel a registration; members may cancel their own, club managers any in their club"""
    event = await event_service.get_event_info(event_id)
    registration = await registration_service.get_registration(event.id, event.club_id, registration_id)

    is_owner = registration["user_id"] == current_user["user_id"]
    is_manager = current_user["role"] == "admin" or (
        current_user["role"] == "contributor" and event.club_id in current_user["managed_club_ids"]
    )
    if not (is_owner or is_manager):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not authorized to cancel this registration"
        )

    await registration_service.cancel_registration(event.id, event.club_id, registration_id)
    return {"success": True, "message": "Registration cancelled", "registration_id": registration_id}


# ----------------------------------------------------------------------
# Club manager administration
# ----------------------------------------------------------------------

@router.get("/clubs/{club_id}/events/{event_id}/registrations", response_model=list[RegistrationResponse])
async def list_event_registrations(
    club_id: str,
    event_id: str,
    current_user: dict = Depends(get_club_manager),
    registration_service: RegistrationService = Depends(get_registration_service)
):
    """All member and guest registrations for an event (Club Manager only)"""
    return await registration_service.get_event_registrations(event_id, club_id)


@router.get("/clubs/{club_id}/events/{event_id}/registrations/stats", response_model=RegistrationStats)
async def get_registration_stats(
    club_id: str,
    event_id: str,
    current_user: dict = Depends(get_club_manager),
    registration_service: RegistrationService = Depends(get_registration_service)
):
    """Totals by status and check-in, members and guests combined (Club Manager only)"""
    return await registration_service.get_event_registration_stats(event_id, club_id)


@router.get("/clubs/{club_id}/events/{event_id}/registrations/{registration_id}", response_model=RegistrationResponse)
async def get_registration(
    club_id: str,
    event_id: str,
    registration_id: str,
    current_user: dict = Depends(get_club_manager),
    registration_service: RegistrationService = Depends(get_registration_service)
):
    """Get one registration (Club Manager only)"""
    return await registration_service.get_registration(event_id, club_id, registration_id)


@router.post("/clubs/{club_id}/events/{event_id}/registrations/{registration_id}/check-in", response_model=RegistrationResponse)
async def check_in(
    club_id: str,
    event_id: str,
    registration_id: str,
    current_user: dict = Depends(get_club_manager),
    registration_service: RegistrationService = Depends(get_registration_service)
):
    """Check in a confirmed registration at the venue (Club Manager only)"""
    return await registration_service.check_in_user(event_id, club_id, registration_id)


@router.patch("/clubs/{club_id}/events/{event_id}/registrations/{registration_id}/status", response_model=RegistrationResult)
async def update_registration_status(
    club_id: str,
    event_id: str,
    registration_id: str,
    request: RegistrationStatusUpdate,
    current_user: dict = Depends(get_club_manager),
    registration_service: RegistrationService = Depends(get_registration_service)
):
    """Change registration status (Club Manager only); cancelled is final"""
    await registration_service.update_registration_status(event_id, club_id, registration_id, request.status)
    return {"success": True, "message": f"Registration {request.status}", "registration_id": registration_id}


@router.patch("/clubs/{club_id}/events/{event_id}/registrations/{registration_id}/payment", response_model=RegistrationResult)
async def update_payment_status(
    club_id: str,
    event_id: str,
    registration_id: str,
    request: PaymentStatusUpdate,
    current_user: dict = Depends(get_club_manager),
    registration_service: RegistrationService = Depends(get_registration_service)
):
    """Record a payment status change; marking paid also confirms the registration (Club Manager only)"""
    await registration_service.update_payment_status(
        event_id, club_id, registration_id, request.payment_status, request.payment_id
    )
    return {"success": True, "message": f"Payment {request.payment_status}", "registration_id": registration_id}


@router.delete("/clubs/{club_id}/events/{event_id}/registrations/{registration_id}", response_model=RegistrationResult)
async def delete_registration(
    club_id: str,
    event_id: str,
    registration_id: str,
    current_user: dict = Depends(get_club_manager),
    registration_service: RegistrationService = Depends(get_registration_service)
):
    """Delete a registration permanently (Club Manager only)"""
    await registration_service.delete_registration(event_id, club_id, registration_id)
    return {"success": True, "message": "Registration deleted", "registration_id": registration_id}
