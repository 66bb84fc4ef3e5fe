"""
Payment Service
Razorpay order creation and payment status lookups.
Without a key secret the gateway answers with mock responses of the same shape.
"""

import logging
from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional

import httpx

from campushub.config import settings
from campushub.exceptions import NotFoundError, PaymentGatewayError, ValidationError
from campushub.schemas.payment import CreateOrderRequest

logger = logging.getLogger(__name__)

ACCOUNT_ID_LENGTH = 18


def to_minor_units(amount: Decimal) -> int:
    """Rupees -> paise"""
    return int((Decimal(amount) * 100).to_integral_value())


def from_minor_units(amount) -> Decimal:
    return Decimal(amount or 0) / 100


def normalize_account_id(account_id: str) -> str:
    """Linked account ids are exactly 18 characters: pad with zeros or truncate"""
    return account_id.ljust(ACCOUNT_ID_LENGTH, "0")[:ACCOUNT_ID_LENGTH]


class RazorpayGateway:
    """Thin client over the Razorpay orders API"""

    def __init__(
        self,
        key_id: Optional[str] = None,
        key_secret: Optional[str] = None,
        api_url: str = None,
        transport: httpx.AsyncBaseTransport = None,
        timeout: float = 15.0,
    ):
        self.key_id = key_id
        self.key_secret = key_secret
        self.api_url = (api_url or settings.RAZORPAY_API_URL).rstrip("/")
        self.transport = transport
        self.timeout = timeout
        self._mock_orders = {}

    @property
    def is_mock(self) -> bool:
        return not self.key_secret

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.api_url,
            auth=(self.key_id or "", self.key_secret or ""),
            timeout=self.timeout,
            transport=self.transport,
        )

    async def _request(self, method: str, path: str, **kwargs) -> dict:
        try:
            async with self._client() as client:
                response = await client.request(method, path, **kwargs)
                response.raise_for_status()
                return response.json()
        except httpx.HTTPStatusError as e:
            logger.error("Razorpay %s %s returned %s: %s", method, path, e.response.status_code, e.response.text)
            raise PaymentGatewayError(f"Payment gateway rejected the request ({e.response.status_code})")
        except httpx.HTTPError as e:
            logger.error("Razorpay %s %s failed: %s", method, path, e)
            raise PaymentGatewayError()

    async def create_order(self, request: CreateOrderRequest) -> dict:
        """
        Create a checkout order

        Args:
            request: Amount (rupees), receipt, event/club ids, customer and optional sub-merchant account

        Returns:
            Order id plus the prefill/notes the checkout widget needs
        """
        if request.amount is None or request.amount <= 0:
            raise ValidationError("Invalid amount")
        if request.currency != settings.PAYMENT_CURRENCY:
            raise ValidationError(f"Only {settings.PAYMENT_CURRENCY} payments are supported")
        if not request.event_id or not request.receipt:
            raise ValidationError("Missing required fields: event id and receipt")

        receipt = request.receipt
        amount_minor = to_minor_units(request.amount)

        notes = {
            "event_id": request.event_id,
            "club_id": request.club_id,
            "customer_email": str(request.customer.email),
            "sub_merchant_account_id": request.sub_merchant_account_id or "none",
        }
        order_request = {
            "amount": amount_minor,
            "currency": request.currency,
            "receipt": receipt,
            "notes": notes,
        }

        transfer = None
        if request.sub_merchant_account_id and request.sub_merchant_account_id != "none":
            transfer = {
                "account": normalize_account_id(request.sub_merchant_account_id),
                "amount": amount_minor,  # Full amount goes to the club's account
                "currency": request.currency,
            }
            order_request["transfers"] = [transfer]

        response = {
            "success": True,
            "amount": request.amount,
            "currency": request.currency,
            "key_id": self.key_id,
            "prefill": {
                "name": request.customer.name,
                "email": str(request.customer.email),
                "contact": request.customer.phone,
            },
            "notes": notes,
        }

        if self.is_mock:
            response["order_id"] = f"order_{receipt}_test"
            self._mock_orders[response["order_id"]] = {
                "amount": request.amount,
                "currency": request.currency,
                "event_id": request.event_id,
                "club_id": request.club_id,
            }
            if transfer:
                response["notes"] = {**notes, "transfer_account": transfer["account"]}
            logger.info("Mock order %s created (no Razorpay secret configured)", response["order_id"])
            return response

        order = await self._request("POST", "/orders", json=order_request)
        if not order.get("id"):
            raise PaymentGatewayError("Failed to create payment order: no order id received")

        response["order_id"] = order["id"]
        response["amount"] = from_minor_units(order.get("amount", amount_minor))
        response["currency"] = order.get("currency", request.currency)
        return response

    async def fetch_order(self, order_id: str) -> dict:
        """Order amount and the event/club it was created for (from the order notes)"""
        if not order_id:
            raise ValidationError("Order ID is required")

        if self.is_mock:
            order = self._mock_orders.get(order_id)
            if order is None:
                raise NotFoundError(f"Order {order_id} not found")
            return {"order_id": order_id, **order}

        order = await self._request("GET", f"/orders/{order_id}")
        notes = order.get("notes") or {}
        return {
            "order_id": order.get("id", order_id),
            "amount": from_minor_units(order.get("amount")),
            "currency": order.get("currency"),
            "event_id": notes.get("event_id"),
            "club_id": notes.get("club_id"),
        }

    async def fetch_payment_status(self, order_id: str) -> dict:
        """Latest payment attempt for an order; `pending` when nothing was paid yet"""
        if not order_id:
            raise ValidationError("Order ID is required")

        if self.is_mock:
            order = self._mock_orders.get(order_id) or {}
            return {
                "success": True,
                "order_id": order_id,
                "status": "captured",
                "amount": order.get("amount", Decimal("100")),
                "payment_id": f"mock_payment_{order_id}",
                "currency": settings.PAYMENT_CURRENCY,
                "transaction_id": f"mock_payment_{order_id}",
                "method": "test",
                "timestamp": datetime.now(timezone.utc),
            }

        payments = await self._request("GET", f"/orders/{order_id}/payments")
        items = payments.get("items") or []

        if not items:
            return {
                "success": True,
                "order_id": order_id,
                "status": "pending",
                "amount": Decimal("0"),
                "payment_id": None,
                "currency": settings.PAYMENT_CURRENCY,
                "timestamp": datetime.now(timezone.utc),
            }

        payment = items[0]
        created_at = payment.get("created_at")
        return {
            "success": True,
            "order_id": order_id,
            "status": payment.get("status"),
            "amount": from_minor_units(payment.get("amount")),
            "payment_id": payment.get("id"),
            "currency": payment.get("currency"),
            "transaction_id": payment.get("id"),
            "method": payment.get("method"),
            "timestamp": datetime.fromtimestamp(created_at, tz=timezone.utc) if created_at else None,
        }


payment_gateway = RazorpayGateway(
    key_id=settings.RAZORPAY_KEY_ID,
    key_secret=settings.RAZORPAY_KEY_SECRET,
)
