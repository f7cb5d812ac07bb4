from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import ValidationError
from src.platform.logging.loguru_io import Logger
from src.service.consultation.app.dto.review_views import PublishedReview, PublishedReviewPage
from src.service.consultation.app.interface.i_review_query_repo import IReviewQueryRepo
from src.service.consultation.domain.value_object.rating_summary import RatingSummary


MAX_PAGE_SIZE = 100


class ListPublishedReviewsUseCase:
    """Public read path: only published reviews, never an email address"""

    def __init__(self, *, review_query_repo: IReviewQueryRepo) -> None:
        self.review_query_repo = review_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        review_query_repo: IReviewQueryRepo = Depends(Provide[Container.review_query_repo]),
    ) -> Self:
        return cls(review_query_repo=review_query_repo)

    @Logger.io(truncate_content=True)
    async def list_published_reviews(
        self, *, limit: int = 10, offset: int = 0, rating: Optional[int] = None
    ) -> PublishedReviewPage:
        if not 1 <= limit <= MAX_PAGE_SIZE:
            raise ValidationError(f'limit must be between 1 and {MAX_PAGE_SIZE}')
        if offset < 0:
            raise ValidationError('offset must not be negative')
        if rating is not None and not 1 <= rating <= 5:
            raise ValidationError('rating filter must be between 1 and 5')

        reviews = await self.review_query_repo.list_published(
            limit=limit, offset=offset, rating=rating
        )
        total = await self.review_query_repo.count_published(rating=rating)
        return PublishedReviewPage(
            items=[PublishedReview.from_entity(review) for review in reviews],
            total=total,
            summary=await self.aggregate_rating(),
        )

    @Logger.io
    async def aggregate_rating(self) -> RatingSummary:
        """Count and half-up rounded mean over ALL published reviews (ignores filters)"""
        count, rating_sum = await self.review_query_repo.rating_totals()
        return RatingSummary.from_totals(count=count, rating_sum=rating_sum)
