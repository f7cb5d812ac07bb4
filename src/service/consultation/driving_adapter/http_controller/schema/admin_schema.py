from typing import List

from pydantic import BaseModel, ConfigDict, Field

from src.service.consultation.driving_adapter.http_controller.schema.booking_schema import (
    UpcomingBookingResponse,
)
from src.service.consultation.driving_adapter.http_controller.schema.review_schema import (
    PendingReviewResponse,
)


class AdminDashboardResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    pending_reviews: List[PendingReviewResponse] = Field(alias='pendingReviews')
    upcoming_bookings: List[UpcomingBookingResponse] = Field(alias='upcomingBookings')
