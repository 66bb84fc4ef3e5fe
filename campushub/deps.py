"""
Service Wiring
FastAPI dependencies that build services around the shared document store
"""

from fastapi import Depends

from campushub.logging_config import store_trace_logger
from campushub.services.club_service import ClubService
from campushub.services.document_store import DatabaseDocumentStore, DocumentStore
from campushub.services.event_service import EventService
from campushub.services.notification_service import NotificationService
from campushub.services.otp_service import OTPService
from campushub.services.payment_service import RazorpayGateway, payment_gateway
from campushub.services.registration_service import RegistrationService
from campushub.services.retention_service import RetentionService

document_store = DatabaseDocumentStore(logger=store_trace_logger())


def get_store() -> DocumentStore:
    return document_store


def get_club_service(store: DocumentStore = Depends(get_store)) -> ClubService:
    return ClubService(store)


def get_event_service(store: DocumentStore = Depends(get_store)) -> EventService:
    return EventService(store)


def get_registration_service(store: DocumentStore = Depends(get_store)) -> RegistrationService:
    return RegistrationService(store, logger=store_trace_logger())


def get_notification_service(store: DocumentStore = Depends(get_store)) -> NotificationService:
    return NotificationService(store)


def get_otp_service(store: DocumentStore = Depends(get_store)) -> OTPService:
    return OTPService(store)


def get_retention_service(store: DocumentStore = Depends(get_store)) -> RetentionService:
    return RetentionService(store)


def get_payment_gateway() -> RazorpayGateway:
    return payment_gateway
