from datetime import datetime
from typing import List, Optional
from uuid import UUID

import attrs

from src.service.consultation.domain.entity.review_entity import Review
from src.service.consultation.domain.value_object.rating_summary import RatingSummary


@attrs.define(frozen=True)
class SubmittedReview:
    review_id: UUID
    code: str
    notified: bool


@attrs.define(frozen=True)
class PublishedReview:
    """Public projection of a review; never carries the email address"""

    id: UUID
    display_name: str
    rating: int
    title: Optional[str]
    body: str
    published_at: datetime

    @classmethod
    def from_entity(cls, review: Review) -> 'PublishedReview':
        assert review.published_at is not None, 'only published reviews are projected'
        return cls(
            id=review.id,
            display_name=review.display_name,
            rating=review.rating,
            title=review.title,
            body=review.body,
            published_at=review.published_at,
        )


@attrs.define(frozen=True)
class PublishedReviewPage:
    items: List[PublishedReview]
    total: int  # matching the star filter, ignoring limit/offset
    summary: RatingSummary
