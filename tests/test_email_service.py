"""
Tests for the registration confirmation email body.
"""

from unittest.mock import AsyncMock

from campushub.services.email_service import EmailService

from conftest import run_async


def _registration(**overrides):
    registration = {
        "id": "R1",
        "user_name": "Asha Verma",
        "user_email": "asha@gcet.edu.in",
        "event_name": "Hack Night",
        "event_date": "2026-11-27",
        "event_location": "Main Auditorium",
        "payment_status": "paid",
        "payment_id": "pay_123",
        "registration_fee": "50.00",
    }
    registration.update(overrides)
    return registration


class TestRegistrationConfirmation:

    def _sent(self, registration):
        service = EmailService()
        service.send = AsyncMock(return_value=True)

        assert run_async(service.send_registration_confirmation(registration)) is True

        return service.send.await_args.args

    def test_markup_in_registrant_values_is_escaped(self):
        to, subject, html_body, text_body = self._sent(_registration(
            user_name='<a href="https://evil.example">claim prize</a>',
            event_location="<img src=x onerror=alert(1)>",
            payment_id="<b>pay</b>",
        ))

        assert to == "asha@gcet.edu.in"
        assert "<a href" not in html_body
        assert "&lt;a href=&quot;https://evil.example&quot;&gt;claim prize&lt;/a&gt;" in html_body
        assert "<img" not in html_body
        assert "<b>pay</b>" not in html_body
        assert '<a href="https://evil.example">claim prize</a>' in text_body

    def test_plain_values_unchanged(self):
        _, subject, html_body, _ = self._sent(_registration())

        assert subject == "Registration confirmed - Hack Night"
        assert "Hi Asha Verma," in html_body
        assert "<code>pay_123</code>" in html_body
        assert "Venue: Main Auditorium" in html_body

    def test_free_registration_has_no_payment_line(self):
        _, _, html_body, _ = self._sent(_registration(payment_status=None))

        assert "Payment received" not in html_body
