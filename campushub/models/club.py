"""
Club Model
Represents student clubs that organise events
"""

from sqlalchemy import Column, String, Boolean, DateTime, func
from campushub.database import Base


class Club(Base):
    __tablename__ = "clubs"

    id = Column(String(64), primary_key=True)
    name = Column(String(100), nullable=False)
    slug = Column(String(50), unique=True, nullable=False, index=True)
    tagline = Column(String(200), nullable=True)
    contact_email = Column(String(255), nullable=False)
    logo_url = Column(String, nullable=True)

    # Status
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
