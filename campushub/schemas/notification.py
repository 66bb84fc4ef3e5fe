"""
Notification Response Models
"""

from pydantic import BaseModel
from typing import Optional
from datetime import datetime


class NotificationResponse(BaseModel):
    id: str
    user_id: str
    is_guest: bool = False
    title: str
    message: str
    event_id: Optional[str] = None
    registration_id: Optional[str] = None
    is_read: bool = False
    created_at: Optional[datetime] = None
    expires_at: Optional[datetime] = None

    class Config:
        from_attributes = True
