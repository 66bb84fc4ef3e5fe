"""
Verification Code Request/Response Models
"""

from pydantic import BaseModel, EmailStr, Field
from typing import Optional


class SendOTPRequest(BaseModel):
    email: EmailStr
    user_data: Optional[dict] = Field(None, description="Sign-up details returned after verification")


class ResendOTPRequest(BaseModel):
    email: EmailStr


class VerifyOTPRequest(BaseModel):
    email: EmailStr
    otp: str = Field(..., min_length=4, max_length=10)


class OTPResponse(BaseModel):
    success: bool
    message: str
    otp_id: Optional[str] = None
    email_sent: Optional[bool] = None
    user_data: Optional[dict] = None
