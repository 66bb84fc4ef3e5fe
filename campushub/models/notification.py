"""
Notification Model
In-app notifications; guest rows expire with the rest of the guest's data
"""

from sqlalchemy import Column, String, Boolean, Text, DateTime, func
from campushub.database import Base


class Notification(Base):
    __tablename__ = "notifications"

    id = Column(String(64), primary_key=True)
    user_id = Column(String(255), nullable=False, index=True)
    is_guest = Column(Boolean, nullable=False, default=False)
    title = Column(String(200), nullable=False)
    message = Column(Text, nullable=False)
    event_id = Column(String(64), nullable=True)
    registration_id = Column(String(64), nullable=True)
    is_read = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    expires_at = Column(DateTime(timezone=True), nullable=True, index=True)
