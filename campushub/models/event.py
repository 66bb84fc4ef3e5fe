"""
Event Model
Club activities that members and guests register for
"""

from sqlalchemy import Column, String, Integer, Numeric, Text, Date, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from campushub.database import Base


class Event(Base):
    __tablename__ = "events"

    id = Column(String(64), primary_key=True)
    club_id = Column(String(64), ForeignKey("clubs.id", ondelete="CASCADE"), nullable=False, index=True)

    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    category = Column(String(50), nullable=True)
    date = Column(Date, nullable=False)
    time = Column(String(20), nullable=True)
    location = Column(String(200), nullable=True)
    capacity = Column(Integer, nullable=True)
    registration_fee = Column(Numeric(10, 2), nullable=False, default=0)

    # Derived from `date` on every write: Upcoming / Ongoing / Past
    status = Column(String(20), nullable=False, default="Upcoming")

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    club = relationship("Club", backref="events")
