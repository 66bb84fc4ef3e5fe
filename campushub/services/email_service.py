"""
Email Service
Registration confirmations and verification codes
"""

import html
import logging

import aiosmtplib
from email.mime.text import MIMEText
from email.mime.multipart import MIMEMultipart
from campushub.config import settings

logger = logging.getLogger(__name__)


class EmailService:
    """Service for sending emails"""

    async def send(self, to: str, subject: str, html_body: str, text_body: str = None) -> bool:
        """
        Send one email

        Args:
            to: Recipient email
            subject: Subject line
            html_body: HTML body
            text_body: Plain text fallback

        Returns:
            True if the email was sent (or logged in development mode), False otherwise
        """
        try:
            message = MIMEMultipart("alternative")
            message["Subject"] = subject
            message["From"] = settings.EMAIL_FROM
            message["To"] = to

            if text_body:
                message.attach(MIMEText(text_body, "plain"))
            message.attach(MIMEText(html_body, "html"))

            if settings.SMTP_HOST and settings.SMTP_USER and settings.SMTP_PASSWORD:
                async with aiosmtplib.SMTP(hostname=settings.SMTP_HOST, port=settings.SMTP_PORT) as smtp:
                    await smtp.login(settings.SMTP_USER, settings.SMTP_PASSWORD)
                    await smtp.sendmail(settings.EMAIL_FROM, to, message.as_string())
                return True

            # Development mode - no SMTP configured
            logger.info("EMAIL (development mode) to=%s subject=%s\n%s", to, subject, text_body or html_body)
            return True

        except Exception as e:
            logger.warning("Email to %s failed: %s", to, e)
            return False

    async def send_registration_confirmation(self, registration: dict) -> bool:
        """Confirmation sent after a registration is created"""
        name = registration.get("user_name") or "there"
        event_name = registration.get("event_name") or "the event"
        event_date = registration.get("event_date") or "TBA"
        location = registration.get("event_location") or "TBA"

        registration_id = registration.get("id")

        # Registrant-supplied values are escaped for the HTML part only
        safe = {
            "name": html.escape(str(name)),
            "event_name": html.escape(str(event_name)),
            "event_date": html.escape(str(event_date)),
            "location": html.escape(str(location)),
            "registration_id": html.escape(str(registration_id)),
        }

        payment_line = ""
        if registration.get("payment_status") == "paid":
            fee = html.escape(str(registration.get("registration_fee")))
            payment_id = html.escape(str(registration.get("payment_id")))
            payment_line = f"<p>Payment received: <strong>₹{fee}</strong> (ID: <code>{payment_id}</code>)</p>"

        html_body = f"""
        <html>
          <body style="font-family: Arial, sans-serif; color: #333;">
            <div style="max-width: 600px; margin: 0 auto; padding: 20px;">
              <h2 style="color: #2c3e50;">You're registered!</h2>
              <p>Hi {safe['name']},</p>
              <p>Your registration for <strong>{safe['event_name']}</strong> is confirmed.</p>
              <div style="background-color: #f8f9fa; padding: 15px; border-left: 4px solid #007bff; margin: 20px 0;">
                <p>Date: {safe['event_date']}</p>
                <p>Venue: {safe['location']}</p>
                <p>Registration ID: <code>{safe['registration_id']}</code></p>
              </div>
              {payment_line}
              <p>Show your registration ID at the venue to check in.</p>
              <p>See you there,<br><strong>{settings.APP_NAME} Team</strong></p>
            </div>
          </body>
        </html>
        """

        text_body = f"""
Hi {name},

Your registration for {event_name} is confirmed.

Date: {event_date}
Venue: {location}
Registration ID: {registration_id}

Show your registration ID at the venue to check in.

{settings.APP_NAME} Team
        """

        return await self.send(
            registration["user_email"],
            f"Registration confirmed - {event_name}",
            html_body,
            text_body,
        )

    async def send_otp_email(self, email: str, otp: str) -> bool:
        """Verification code email"""
        html_body = f"""
        <html>
          <body style="font-family: Arial, sans-serif; color: #333;">
            <div style="max-width: 600px; margin: 0 auto; padding: 20px;">
              <h2 style="color: #2c3e50;">Verify your email</h2>
              <p>Your {settings.APP_NAME} verification code is:</p>
              <p style="font-size: 28px; letter-spacing: 6px;"><strong>{otp}</strong></p>
              <p>This code expires in {settings.OTP_EXPIRY_MINUTES} minutes. If you didn't request it, ignore this email.</p>
            </div>
          </body>
        </html>
        """

        text_body = (
            f"Your {settings.APP_NAME} verification code is {otp}. "
            f"It expires in {settings.OTP_EXPIRY_MINUTES} minutes."
        )

        return await self.send(email, f"{settings.APP_NAME} verification code", html_body, text_body)


# Create singleton instance
email_service = EmailService()
