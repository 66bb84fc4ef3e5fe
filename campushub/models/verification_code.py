"""
Verification Code Model
One active sign-up code per email address
"""

from sqlalchemy import Column, String, JSON, DateTime
from campushub.database import Base


class VerificationCode(Base):
    __tablename__ = "otp_verifications"

    id = Column(String(64), primary_key=True)  # derived from the email
    email = Column(String(255), nullable=False, unique=True)
    code_hash = Column(String(255), nullable=False)
    user_data = Column(JSON, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False)
    expires_at = Column(DateTime(timezone=True), nullable=False)
