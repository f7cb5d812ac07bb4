"""
Database Models

Import all models here to ensure they are registered with SQLAlchemy
"""

from src.service.consultation.driven_adapter.model.booking_model import BookingModel
from src.service.consultation.driven_adapter.model.review_model import ReviewModel
from src.service.consultation.driven_adapter.model.slot_counter_model import SlotCounterModel

__all__ = [
    'BookingModel',
    'ReviewModel',
    'SlotCounterModel',
]
