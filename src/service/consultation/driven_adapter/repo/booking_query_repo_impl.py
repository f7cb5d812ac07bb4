from contextlib import asynccontextmanager
from datetime import datetime
from typing import AsyncContextManager, AsyncIterator, Callable, List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.consultation.app.interface.i_booking_query_repo import IBookingQueryRepo
from src.service.consultation.domain.entity.booking_entity import Booking
from src.service.consultation.domain.enum.booking_status import BookingStatus
from src.service.consultation.driven_adapter.model.booking_model import BookingModel
from src.service.consultation.driven_adapter.repo.booking_command_repo_impl import (
    booking_model_to_entity,
)


class BookingQueryRepoImpl(IBookingQueryRepo):
    def __init__(
        self, session_factory: Callable[..., AsyncContextManager[AsyncSession]] | None = None
    ):
        self.session_factory = session_factory
        self.session: AsyncSession | None = None

    @asynccontextmanager
    async def _get_session(self) -> AsyncIterator[AsyncSession]:
        """
        Get session for query execution.

        If session is injected (from UoW), yield it directly without context management.
        Otherwise, use session_factory context manager.
        """
        if self.session is not None:
            yield self.session
        elif self.session_factory is not None:
            async with self.session_factory() as session:
                yield session
        else:
            raise RuntimeError('No session or session_factory available')

    @Logger.io
    async def get_by_id(self, *, booking_id: UUID) -> Optional[Booking]:
        async with self._get_session() as session:
            result = await session.execute(
                select(BookingModel).where(BookingModel.id == booking_id)
            )
            db_booking = result.scalar_one_or_none()
            return booking_model_to_entity(db_booking) if db_booking else None

    @Logger.io
    async def list_upcoming(self, *, since: datetime, limit: int) -> List[Booking]:
        async with self._get_session() as session:
            result = await session.execute(
                select(BookingModel)
                .where(
                    BookingModel.status.in_(
                        [BookingStatus.NEW.value, BookingStatus.CONFIRMED.value]
                    ),
                    BookingModel.starts_at >= since,
                )
                .order_by(BookingModel.starts_at.asc(), BookingModel.id.asc())
                .limit(limit)
            )
            return [booking_model_to_entity(row) for row in result.scalars().all()]
