"""
OTP Service
Email verification codes for college sign-ups
"""

import logging
import re
from datetime import timedelta
from typing import Optional
from uuid import NAMESPACE_URL, uuid5

from campushub.auth.codes import generate_numeric_code, hash_code, verify_code
from campushub.config import settings
from campushub.exceptions import RateLimitedError, ValidationError
from campushub.services.actors import utcnow
from campushub.services.document_store import OTP_VERIFICATIONS, DocumentStore
from campushub.services.email_service import email_service

logger = logging.getLogger(__name__)


def otp_key(email: str) -> str:
    """One verification document per email address"""
    return str(uuid5(NAMESPACE_URL, f"campushub:otp:{email}"))


class OTPService:
    """Issues, re-issues and verifies single-use email codes"""

    def __init__(self, store: DocumentStore, mailer=None, clock=utcnow):
        self.store = store
        self.mailer = mailer or email_service
        self.clock = clock
        self.email_pattern = re.compile(
            r"^[a-z0-9._%+-]+@" + re.escape(settings.COLLEGE_EMAIL_DOMAIN) + r"$",
            re.IGNORECASE,
        )
        self.code_pattern = re.compile(r"^\d{%d}$" % settings.OTP_LENGTH)

    def _normalize_email(self, email: str) -> str:
        email = (email or "").strip().lower()
        if not email:
            raise ValidationError("Email is required")
        if not self.email_pattern.match(email):
            raise ValidationError(f"Only @{settings.COLLEGE_EMAIL_DOMAIN} email addresses are allowed")
        return email

    async def _issue(self, email: str, user_data: Optional[dict], sent_message: str) -> dict:
        doc_id = otp_key(email)
        now = self.clock()

        existing = await self.store.get(OTP_VERIFICATIONS, doc_id)
        if existing:
            elapsed = (now - existing["created_at"]).total_seconds()
            if elapsed < settings.OTP_RESEND_INTERVAL_SECONDS:
                wait = int(settings.OTP_RESEND_INTERVAL_SECONDS - elapsed) + 1
                raise RateLimitedError(f"Please wait {wait} seconds before requesting another code")
            if user_data is None:
                user_data = existing.get("user_data")

        code = generate_numeric_code(settings.OTP_LENGTH)
        await self.store.set(
            OTP_VERIFICATIONS,
            doc_id,
            {
                "email": email,
                "code_hash": hash_code(code),
                "user_data": user_data,
                "created_at": now,
                "expires_at": now + timedelta(minutes=settings.OTP_EXPIRY_MINUTES),
            },
        )

        email_sent = await self.mailer.send_otp_email(email, code)
        if not email_sent:
            logger.warning("Verification code issued for %s but the email was not delivered", email)

        return {
            "success": True,
            "message": sent_message if email_sent else "OTP generated but email sending failed. Please try resending.",
            "otp_id": doc_id,
            "email_sent": email_sent,
        }

    async def generate_otp(self, email: str, user_data: Optional[dict] = None) -> dict:
        """Issue a new code; at most one per email per resend interval"""
        email = self._normalize_email(email)
        return await self._issue(email, user_data, "OTP generated and sent to email")

    async def resend_otp(self, email: str, user_data: Optional[dict] = None) -> dict:
        """Replace the current code; keeps the stored sign-up data unless new data is given"""
        email = self._normalize_email(email)
        return await self._issue(email, user_data, "OTP resent successfully")

    async def verify_otp(self, email: str, otp: str) -> dict:
        """Check a code; a matching or expired code is consumed"""
        email = self._normalize_email(email)
        otp = (otp or "").strip()
        if not self.code_pattern.match(otp):
            raise ValidationError("Invalid OTP format")

        doc_id = otp_key(email)
        record = await self.store.get(OTP_VERIFICATIONS, doc_id)

        if not record or not verify_code(otp, record["code_hash"]):
            return {"success": False, "message": "Invalid OTP"}

        await self.store.delete(OTP_VERIFICATIONS, doc_id)

        if self.clock() > record["expires_at"]:
            return {"success": False, "message": "OTP has expired"}

        return {
            "success": True,
            "message": "OTP verified successfully",
            "user_data": record.get("user_data"),
        }
