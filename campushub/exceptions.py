"""
Application Errors
Domain exceptions raised by services and rendered at the HTTP boundary
"""

from fastapi import status


class CampusHubError(Exception):
    """Base class for errors surfaced to API callers"""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Something went wrong"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


# Validation
class ValidationError(CampusHubError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


# Conflicts (user-actionable)
class ConflictError(CampusHubError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Request conflicts with the current state"


class AlreadyRegisteredError(ConflictError):
    default_message = "You are already registered for this event!"


class PaymentRequiredError(ConflictError):
    default_message = (
        "This event requires a registration fee. "
        "Registration is created after the payment is successful."
    )


class PaymentNotConfirmedError(ConflictError):
    default_message = "Payment has not been confirmed yet"


class PaymentAlreadyUsedError(ConflictError):
    default_message = "This payment has already been used for another registration"


# Lookups
class NotFoundError(CampusHubError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class ClubNotFoundError(NotFoundError):
    default_message = "Club not found"


class EventNotFoundError(NotFoundError):
    default_message = "Event not found"


class RegistrationNotFoundError(NotFoundError):
    default_message = "Registration not found"


class RateLimitedError(CampusHubError):
    status_code = status.HTTP_429_TOO_MANY_REQUESTS
    default_message = "Too many requests, please wait and try again"


class PaymentGatewayError(CampusHubError):
    status_code = status.HTTP_502_BAD_GATEWAY
    default_message = "Payment gateway request failed"


# Document store
class StoreError(CampusHubError):
    default_message = "Data store request failed"


class DocumentExistsError(StoreError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Document already exists"


class TransientStoreError(StoreError):
    """Failures worth retrying: the store was unreachable or too slow"""
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_message = "Data store is temporarily unavailable, please retry"


class StoreUnavailableError(TransientStoreError):
    pass


class StoreTimeoutError(TransientStoreError):
    default_message = "Data store request timed out, please retry"
