from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from src.platform.logging.loguru_io import Logger
from src.service.consultation.app.command.publish_review_use_case import PublishReviewUseCase
from src.service.consultation.app.command.submit_review_use_case import SubmitReviewUseCase
from src.service.consultation.app.command.verify_review_use_case import VerifyReviewUseCase
from src.service.consultation.app.query.list_published_reviews_use_case import (
    MAX_PAGE_SIZE,
    ListPublishedReviewsUseCase,
)
from src.service.consultation.driving_adapter.http_controller.schema.review_schema import (
    PublishedReviewResponse,
    RatingSummaryResponse,
    ReviewCreateRequest,
    ReviewCreateResponse,
    ReviewListResponse,
    ReviewPublishRequest,
    ReviewPublishResponse,
    ReviewVerifyRequest,
    SuccessResponse,
)


router = APIRouter()


@router.get('')
@Logger.io(truncate_content=True)
async def list_reviews(
    limit: int = Query(default=10, ge=1, le=MAX_PAGE_SIZE),
    offset: int = Query(default=0, ge=0),
    rating: Optional[int] = Query(default=None, ge=1, le=5),
    use_case: ListPublishedReviewsUseCase = Depends(ListPublishedReviewsUseCase.depends),
) -> ReviewListResponse:
    """Published reviews, newest first, with the overall rating summary."""
    page = await use_case.list_published_reviews(limit=limit, offset=offset, rating=rating)
    return ReviewListResponse(
        items=[
            PublishedReviewResponse(
                id=item.id,
                display_name=item.display_name,
                rating=item.rating,
                title=item.title,
                body=item.body,
                published_at=item.published_at,
            )
            for item in page.items
        ],
        total=page.total,
        count=page.summary.count,
        average=page.summary.average,
    )


@router.get('/summary')
@Logger.io
async def get_review_summary(
    use_case: ListPublishedReviewsUseCase = Depends(ListPublishedReviewsUseCase.depends),
) -> RatingSummaryResponse:
    summary = await use_case.aggregate_rating()
    return RatingSummaryResponse(count=summary.count, average=summary.average)


@router.post('/create', status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_review(
    request: ReviewCreateRequest,
    use_case: SubmitReviewUseCase = Depends(SubmitReviewUseCase.depends),
) -> ReviewCreateResponse:
    submitted = await use_case.submit_review(
        name=request.name,
        email=request.email,
        rating=request.rating,
        title=request.title,
        body=request.body,
    )
    return ReviewCreateResponse(
        review_id=submitted.review_id, code=submitted.code, notified=submitted.notified
    )


@router.post('/verify')
@Logger.io
async def verify_review(
    request: ReviewVerifyRequest,
    use_case: VerifyReviewUseCase = Depends(VerifyReviewUseCase.depends),
) -> SuccessResponse:
    await use_case.verify_review(review_id=request.review_id, code=request.code)
    return SuccessResponse(success=True)


@router.post('/publish')
@Logger.io
async def publish_review(
    request: ReviewPublishRequest,
    use_case: PublishReviewUseCase = Depends(PublishReviewUseCase.depends),
) -> ReviewPublishResponse:
    published_at = await use_case.publish_review(
        review_id=request.review_id, admin_secret=request.admin_password
    )
    return ReviewPublishResponse(
        success=True, review_id=request.review_id, published_at=published_at
    )
