from contextlib import asynccontextmanager
from typing import AsyncContextManager, AsyncIterator, Callable, List, Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.consultation.app.interface.i_review_query_repo import IReviewQueryRepo
from src.service.consultation.domain.entity.review_entity import Review
from src.service.consultation.domain.enum.review_status import ReviewStatus
from src.service.consultation.driven_adapter.model.review_model import ReviewModel
from src.service.consultation.driven_adapter.repo.review_command_repo_impl import (
    review_model_to_entity,
)


class ReviewQueryRepoImpl(IReviewQueryRepo):
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

    @staticmethod
    def _published(rating: Optional[int] = None):
        criteria = [ReviewModel.status == ReviewStatus.PUBLISHED.value]
        if rating is not None:
            criteria.append(ReviewModel.rating == rating)
        return criteria

    @Logger.io(truncate_content=True)
    async def list_published(
        self, *, limit: int, offset: int, rating: Optional[int] = None
    ) -> List[Review]:
        async with self._get_session() as session:
            result = await session.execute(
                select(ReviewModel)
                .where(*self._published(rating))
                .order_by(ReviewModel.published_at.desc(), ReviewModel.id.desc())
                .limit(limit)
                .offset(offset)
            )
            return [review_model_to_entity(row) for row in result.scalars().all()]

    @Logger.io
    async def count_published(self, *, rating: Optional[int] = None) -> int:
        async with self._get_session() as session:
            result = await session.execute(
                select(func.count(ReviewModel.id)).where(*self._published(rating))
            )
            return result.scalar_one()

    @Logger.io
    async def rating_totals(self) -> tuple[int, int]:
        async with self._get_session() as session:
            result = await session.execute(
                select(
                    func.count(ReviewModel.id), func.coalesce(func.sum(ReviewModel.rating), 0)
                ).where(*self._published())
            )
            count, rating_sum = result.one()
            return int(count), int(rating_sum)

    @Logger.io(truncate_content=True)
    async def list_awaiting_publication(self, *, limit: int) -> List[Review]:
        async with self._get_session() as session:
            result = await session.execute(
                select(ReviewModel)
                .where(ReviewModel.status == ReviewStatus.VERIFIED.value)
                .order_by(ReviewModel.verified_at.asc(), ReviewModel.id.asc())
                .limit(limit)
            )
            return [review_model_to_entity(row) for row in result.scalars().all()]
