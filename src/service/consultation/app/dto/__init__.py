"""Application layer DTOs"""

from src.service.consultation.app.dto.admin_dashboard import AdminDashboard
from src.service.consultation.app.dto.booking_result import BookingResult
from src.service.consultation.app.dto.email_message import EmailKind, EmailMessage
from src.service.consultation.app.dto.review_views import (
    PublishedReview,
    PublishedReviewPage,
    SubmittedReview,
)
from src.service.consultation.app.dto.slot_state import SlotState

__all__ = [
    'AdminDashboard',
    'BookingResult',
    'EmailKind',
    'EmailMessage',
    'PublishedReview',
    'PublishedReviewPage',
    'SlotState',
    'SubmittedReview',
]
