from typing import List

import attrs

from src.service.consultation.domain.entity.booking_entity import Booking
from src.service.consultation.domain.entity.review_entity import Review


@attrs.define(frozen=True)
class AdminDashboard:
    pending_reviews: List[Review]  # verified, waiting for publication
    upcoming_bookings: List[Booking]
