"""
Registration Models
Member and guest registrations live in separate tables (partitions)
because their access and retention rules differ
"""

from sqlalchemy import Column, String, Boolean, Numeric, Text, DateTime, ForeignKey, func
from campushub.database import Base


class RegistrationColumns:
    """Columns shared by both registration partitions"""

    id = Column(String(64), primary_key=True)
    event_id = Column(String(64), ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True)
    club_id = Column(String(64), nullable=False, index=True)
    user_id = Column(String(255), nullable=False, index=True)

    # Actor contact info
    user_name = Column(String(200), nullable=False)
    user_email = Column(String(255), nullable=False)
    user_phone = Column(String(30), nullable=True)
    user_roll_number = Column(String(50), nullable=True)
    user_branch = Column(String(100), nullable=True)
    user_year = Column(String(20), nullable=True)

    # pending | confirmed | cancelled
    status = Column(String(20), nullable=False, default="confirmed")
    # pending | paid | refunded, only for fee-bearing events
    payment_status = Column(String(20), nullable=True)
    payment_id = Column(String(100), nullable=True)
    registration_fee = Column(Numeric(10, 2), nullable=False, default=0)

    # not_checked_in | checked_in
    check_in_status = Column(String(20), nullable=False, default="not_checked_in")
    check_in_time = Column(DateTime(timezone=True), nullable=True)

    additional_info = Column(Text, nullable=True)
    event_name = Column(String(200), nullable=True)
    event_date = Column(String(40), nullable=True)
    event_location = Column(String(200), nullable=True)

    is_guest = Column(Boolean, nullable=False, default=False)
    registration_date = Column(DateTime(timezone=True), server_default=func.now())


class Registration(RegistrationColumns, Base):
    __tablename__ = "registrations"


class GuestRegistration(RegistrationColumns, Base):
    __tablename__ = "guest_registrations"

    guest_college = Column(String(200), nullable=True)
    expires_at = Column(DateTime(timezone=True), nullable=False, index=True)
