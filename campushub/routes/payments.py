"""
Payment Endpoints
Checkout orders and payment status for fee-bearing events
"""

from fastapi import APIRouter, Depends

from campushub.deps import get_event_service, get_payment_gateway
from campushub.exceptions import ValidationError
from campushub.schemas.payment import CreateOrderRequest, OrderResponse, PaymentStatusResponse
from campushub.services.event_service import EventService
from campushub.services.payment_service import RazorpayGateway

router = APIRouter()


@router.post("/orders", response_model=OrderResponse)
async def create_order(
    request: CreateOrderRequest,
    event_service: EventService = Depends(get_event_service),
    gateway: RazorpayGateway = Depends(get_payment_gateway)
):
    """
    Create a checkout order for an event's registration fee

    The amount must match the event fee. Without gateway credentials a mock
    order id (`order_<receipt>_test`) is returned in the same shape.
    """
    event = await event_service.get_event_info(request.event_id, club_id=request.club_id)
    if not event.is_paid:
        raise ValidationError("This event is free, register directly")
    if request.amount != event.registration_fee:
        raise ValidationError("Amount does not match the event registration fee")

    return await gateway.create_order(request)


@router.get("/orders/{order_id}/status", response_model=PaymentStatusResponse)
async def get_payment_status(
    order_id: str,
    gateway: RazorpayGateway = Depends(get_payment_gateway)
):
    """Latest payment attempt for an order (`pending` until the customer pays)"""
    return await gateway.fetch_payment_status(order_id)
