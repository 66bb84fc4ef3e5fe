"""
Payment Request/Response Models
"""

from pydantic import BaseModel, EmailStr, Field
from typing import Optional
from datetime import datetime
from decimal import Decimal


class CustomerInfo(BaseModel):
    name: str = Field(..., min_length=1)
    email: EmailStr
    phone: Optional[str] = None


class CreateOrderRequest(BaseModel):
    """Checkout order for a fee-bearing event"""
    amount: Decimal = Field(..., description="Amount in rupees")
    currency: str = Field("INR")
    receipt: str = Field(..., max_length=40, description="Merchant receipt reference, usually the client order id")
    event_id: str = Field(..., min_length=1)
    club_id: str = Field(..., min_length=1)
    customer: CustomerInfo
    sub_merchant_account_id: Optional[str] = Field(None, description="Club's linked account for routed payouts")


class OrderResponse(BaseModel):
    success: bool = True
    order_id: str
    amount: Decimal
    currency: str
    key_id: Optional[str] = None
    prefill: dict = {}
    notes: dict = {}


class PaymentStatusResponse(BaseModel):
    success: bool = True
    order_id: str
    status: str
    amount: Optional[Decimal] = None
    payment_id: Optional[str] = None
    currency: Optional[str] = None
    transaction_id: Optional[str] = None
    method: Optional[str] = None
    timestamp: Optional[datetime] = None


class PaymentRecord(BaseModel):
    """Bookkeeping entry written after a confirmed payment"""
    payment_id: str
    registration_id: Optional[str] = None
    event_id: Optional[str] = None
    club_id: Optional[str] = None
    user_id: Optional[str] = None
    user_name: Optional[str] = None
    user_email: Optional[str] = None
    amount: Decimal = Decimal("0")
    payment_method: Optional[str] = None
    transaction_id: Optional[str] = None
    is_guest: bool = False
