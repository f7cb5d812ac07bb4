"""Consultation Domain Enums"""

from src.service.consultation.domain.enum.booking_status import BookingStatus
from src.service.consultation.domain.enum.review_status import ReviewStatus

__all__ = ['BookingStatus', 'ReviewStatus']
