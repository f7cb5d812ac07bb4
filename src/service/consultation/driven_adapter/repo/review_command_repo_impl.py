from contextlib import asynccontextmanager
from datetime import datetime
from typing import AsyncContextManager, AsyncIterator, Callable, Optional
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.consultation.app.interface.i_review_command_repo import IReviewCommandRepo
from src.service.consultation.domain.entity.review_entity import Review
from src.service.consultation.domain.enum.review_status import ReviewStatus
from src.service.consultation.driven_adapter.model.review_model import ReviewModel


def review_model_to_entity(db_review: ReviewModel) -> Review:
    return Review(
        id=db_review.id,
        name=db_review.name,
        email=db_review.email,
        rating=db_review.rating,
        title=db_review.title,
        body=db_review.body,
        status=ReviewStatus(db_review.status),
        verification_code_hash=db_review.verification_code_hash,
        verification_expires_at=db_review.verification_expires_at,
        created_at=db_review.created_at,
        verified_at=db_review.verified_at,
        published_at=db_review.published_at,
    )


class ReviewCommandRepoImpl(IReviewCommandRepo):
    def __init__(
        self, session_factory: Callable[..., AsyncContextManager[AsyncSession]] | None = None
    ):
        self.session_factory = session_factory
        self.session: AsyncSession | None = None

    @asynccontextmanager
    async def _get_session(self) -> AsyncIterator[AsyncSession]:
        if self.session is not None:
            yield self.session
        elif self.session_factory is not None:
            async with self.session_factory() as session:
                yield session
        else:
            raise RuntimeError('No session or session_factory available')

    @Logger.io
    async def create(self, *, review: Review) -> Review:
        async with self._get_session() as session:
            session.add(
                ReviewModel(
                    id=review.id,
                    name=review.name,
                    email=review.email,
                    rating=review.rating,
                    title=review.title,
                    body=review.body,
                    status=review.status.value,
                    verification_code_hash=review.verification_code_hash,
                    verification_expires_at=review.verification_expires_at,
                    created_at=review.created_at,
                )
            )
            await session.flush()
            return review

    @Logger.io
    async def get_by_id(self, *, review_id: UUID) -> Optional[Review]:
        async with self._get_session() as session:
            result = await session.execute(select(ReviewModel).where(ReviewModel.id == review_id))
            db_review = result.scalar_one_or_none()
            return review_model_to_entity(db_review) if db_review else None

    @Logger.io
    async def mark_verified(
        self, *, review_id: UUID, code_hash: str, verified_at: datetime
    ) -> bool:
        async with self._get_session() as session:
            result = await session.execute(
                update(ReviewModel)
                .where(
                    ReviewModel.id == review_id,
                    ReviewModel.status == ReviewStatus.PENDING.value,
                    ReviewModel.verification_code_hash == code_hash,
                )
                .values(
                    status=ReviewStatus.VERIFIED.value,
                    verified_at=verified_at,
                    verification_code_hash=None,
                )
                .execution_options(synchronize_session=False)
            )
            return result.rowcount == 1  # type: ignore[attr-defined]

    @Logger.io
    async def mark_published(self, *, review_id: UUID, published_at: datetime) -> bool:
        async with self._get_session() as session:
            result = await session.execute(
                update(ReviewModel)
                .where(
                    ReviewModel.id == review_id,
                    ReviewModel.status == ReviewStatus.VERIFIED.value,
                )
                .values(status=ReviewStatus.PUBLISHED.value, published_at=published_at)
                .execution_options(synchronize_session=False)
            )
            return result.rowcount == 1  # type: ignore[attr-defined]
