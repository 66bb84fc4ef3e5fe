"""
Verification Code Endpoints
Email OTP for college sign-ups
"""

from fastapi import APIRouter, Depends

from campushub.deps import get_otp_service
from campushub.schemas.otp import OTPResponse, ResendOTPRequest, SendOTPRequest, VerifyOTPRequest
from campushub.services.otp_service import OTPService

router = APIRouter()


@router.post("/send", response_model=OTPResponse)
async def send_otp(request: SendOTPRequest, otp_service: OTPService = Depends(get_otp_service)):
    """Send a verification code to a college email (one per minute)"""
    return await otp_service.generate_otp(request.email, request.user_data)


@router.post("/resend", response_model=OTPResponse)
async def resend_otp(request: ResendOTPRequest, otp_service: OTPService = Depends(get_otp_service)):
    """Replace the current code with a new one (one per minute)"""
    return await otp_service.resend_otp(request.email)


@router.post("/verify", response_model=OTPResponse)
async def verify_otp(request: VerifyOTPRequest, otp_service: OTPService = Depends(get_otp_service)):
    """Check a code; returns the sign-up data stored with it on success"""
    return await otp_service.verify_otp(request.email, request.otp)
