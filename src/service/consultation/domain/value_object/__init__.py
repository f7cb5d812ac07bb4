from src.service.consultation.domain.value_object.rating_summary import RatingSummary
from src.service.consultation.domain.value_object.slot_month import SlotMonth

__all__ = ['RatingSummary', 'SlotMonth']
