"""
Payment Record Models
Bookkeeping rows written after an external payment is confirmed,
keyed by the gateway payment id
"""

from sqlalchemy import Column, String, Numeric, DateTime, func
from campushub.database import Base


class PaymentColumns:

    id = Column(String(100), primary_key=True)  # gateway payment id
    registration_id = Column(String(64), nullable=False, index=True)
    event_id = Column(String(64), nullable=False, index=True)
    club_id = Column(String(64), nullable=False)
    user_id = Column(String(255), nullable=False)
    user_name = Column(String(200), nullable=True)
    user_email = Column(String(255), nullable=True)
    amount = Column(Numeric(10, 2), nullable=False)
    payment_status = Column(String(20), nullable=False, default="paid")
    payment_method = Column(String(50), nullable=True)
    transaction_id = Column(String(100), nullable=True)
    timestamp = Column(DateTime(timezone=True), server_default=func.now())


class EventPayment(PaymentColumns, Base):
    __tablename__ = "payments"


class GuestEventPayment(PaymentColumns, Base):
    __tablename__ = "guest_payments"
