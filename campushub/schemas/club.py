"""
Club Request/Response Models
For platform admin club management
"""

from pydantic import BaseModel, EmailStr, Field
from typing import Optional
from datetime import datetime


class CreateClubRequest(BaseModel):
    """Request to create a new club"""
    name: str = Field(..., min_length=1, max_length=100, description="Club name")
    slug: str = Field(..., min_length=1, max_length=50, description="URL-friendly slug (lowercase, no spaces)")
    tagline: Optional[str] = Field(None, max_length=200, description="Short club description")
    contact_email: EmailStr = Field(..., description="Club contact email")
    logo_url: Optional[str] = Field(None, description="URL to club logo")

    class Config:
        json_schema_extra = {
            "example": {
                "name": "Coding Club",
                "slug": "coding-club",
                "tagline": "Build, break, repeat",
                "contact_email": "coding@gcet.edu.in",
                "logo_url": "https://cdn.example.com/logos/coding.png"
            }
        }


class ClubResponse(BaseModel):
    """Club details response"""
    id: str
    name: str
    slug: str
    tagline: Optional[str] = None
    contact_email: str
    logo_url: Optional[str] = None
    is_active: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ClubListResponse(BaseModel):
    """List of clubs response"""
    total: int
    clubs: list[ClubResponse]
