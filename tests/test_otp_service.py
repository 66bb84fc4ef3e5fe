"""
Tests for OTPService: college domain check, rate limiting, expiry and single use.
"""

from unittest.mock import AsyncMock

import pytest

from campushub.exceptions import RateLimitedError, ValidationError
from campushub.services.otp_service import OTPService, otp_key

from conftest import run_async

EMAIL = "student@gcet.edu.in"


@pytest.fixture
def otp_service(store, mailer, clock):
    return OTPService(store, mailer=mailer, clock=clock)


def _sent_code(mailer):
    return mailer.send_otp_email.await_args.args[1]


class TestGenerate:

    def test_issues_hashed_six_digit_code(self, otp_service, store, mailer, clock):
        result = run_async(otp_service.generate_otp(EMAIL, {"name": "Student"}))

        code = _sent_code(mailer)
        record = store.collections["otp_verifications"][otp_key(EMAIL)]
        assert result["success"] is True
        assert result["email_sent"] is True
        assert result["otp_id"] == otp_key(EMAIL)
        assert len(code) == 6 and code.isdigit()
        assert record["code_hash"] != code
        assert (record["expires_at"] - clock()).total_seconds() == 600

    @pytest.mark.parametrize("email", ["student@gmail.com", "student@gcet.edu.in.evil.com", ""])
    def test_non_college_email_rejected(self, otp_service, store, email):
        with pytest.raises(ValidationError):
            run_async(otp_service.generate_otp(email))

        assert store.writes() == []

    def test_second_request_within_a_minute_is_rate_limited(self, otp_service, clock):
        run_async(otp_service.generate_otp(EMAIL))
        clock.advance(seconds=30)

        with pytest.raises(RateLimitedError):
            run_async(otp_service.generate_otp(EMAIL))

    def test_new_code_replaces_old_after_a_minute(self, otp_service, store, mailer, clock):
        run_async(otp_service.generate_otp(EMAIL))
        clock.advance(seconds=61)

        run_async(otp_service.resend_otp(EMAIL))

        record = store.collections["otp_verifications"][otp_key(EMAIL)]
        assert len(store.collections["otp_verifications"]) == 1
        assert record["created_at"] == clock()
        assert run_async(otp_service.verify_otp(EMAIL, _sent_code(mailer)))["success"] is True

    def test_email_failure_still_issues_code(self, otp_service, store, mailer):
        mailer.send_otp_email = AsyncMock(return_value=False)

        result = run_async(otp_service.generate_otp(EMAIL))

        assert result["success"] is True
        assert result["email_sent"] is False
        assert otp_key(EMAIL) in store.collections["otp_verifications"]

    def test_resend_keeps_user_data(self, otp_service, mailer, clock):
        run_async(otp_service.generate_otp(EMAIL, {"name": "Student"}))
        clock.advance(minutes=2)
        run_async(otp_service.resend_otp(EMAIL))

        result = run_async(otp_service.verify_otp(EMAIL, _sent_code(mailer)))

        assert result["user_data"] == {"name": "Student"}


class TestVerify:

    def test_correct_code_is_single_use(self, otp_service, store, mailer):
        run_async(otp_service.generate_otp(EMAIL, {"name": "Student"}))
        code = _sent_code(mailer)

        first = run_async(otp_service.verify_otp(EMAIL, code))
        second = run_async(otp_service.verify_otp(EMAIL, code))

        assert first == {"success": True, "message": "OTP verified successfully", "user_data": {"name": "Student"}}
        assert second == {"success": False, "message": "Invalid OTP"}
        assert store.collections["otp_verifications"] == {}

    def test_wrong_code_keeps_record(self, otp_service, store, mailer):
        run_async(otp_service.generate_otp(EMAIL))
        code = _sent_code(mailer)
        wrong = "000000" if code != "000000" else "111111"

        assert run_async(otp_service.verify_otp(EMAIL, wrong)) == {"success": False, "message": "Invalid OTP"}
        assert otp_key(EMAIL) in store.collections["otp_verifications"]

    def test_expired_code_is_deleted(self, otp_service, store, mailer, clock):
        run_async(otp_service.generate_otp(EMAIL))
        clock.advance(minutes=11)

        result = run_async(otp_service.verify_otp(EMAIL, _sent_code(mailer)))

        assert result == {"success": False, "message": "OTP has expired"}
        assert store.collections["otp_verifications"] == {}

    @pytest.mark.parametrize("otp", ["12345", "abcdef", "1234567"])
    def test_malformed_code(self, otp_service, otp):
        with pytest.raises(ValidationError):
            run_async(otp_service.verify_otp(EMAIL, otp))
