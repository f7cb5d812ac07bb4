from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncContextManager, AsyncIterator, Callable, Optional
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.consultation.app.interface.i_booking_command_repo import IBookingCommandRepo
from src.service.consultation.domain.entity.booking_entity import Booking
from src.service.consultation.domain.enum.booking_status import BookingStatus
from src.service.consultation.driven_adapter.model.booking_model import BookingModel


def booking_model_to_entity(db_booking: BookingModel) -> Booking:
    return Booking(
        id=db_booking.id,
        name=db_booking.name,
        email=db_booking.email,
        discord_name=db_booking.discord_name,
        note=db_booking.note,
        starts_at=db_booking.starts_at,
        duration_minutes=db_booking.duration_minutes,
        status=BookingStatus(db_booking.status),
        created_at=db_booking.created_at,
        updated_at=db_booking.updated_at,
    )


class BookingCommandRepoImpl(IBookingCommandRepo):
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
    async def create(self, *, booking: Booking) -> Booking:
        async with self._get_session() as session:
            session.add(
                BookingModel(
                    id=booking.id,
                    name=booking.name,
                    email=booking.email,
                    discord_name=booking.discord_name,
                    note=booking.note,
                    starts_at=booking.starts_at,
                    duration_minutes=booking.duration_minutes,
                    status=booking.status.value,
                    created_at=booking.created_at,
                    updated_at=booking.updated_at,
                )
            )
            await session.flush()
            return booking

    @Logger.io
    async def decide_if_new(
        self, *, booking_id: UUID, status: BookingStatus
    ) -> Optional[Booking]:
        async with self._get_session() as session:
            result = await session.execute(
                update(BookingModel)
                .where(
                    BookingModel.id == booking_id,
                    BookingModel.status == BookingStatus.NEW.value,
                )
                .values(status=status.value, updated_at=datetime.now(timezone.utc))
                .execution_options(synchronize_session=False)
            )
            if result.rowcount != 1:  # type: ignore[attr-defined]
                return None

            db_booking = (
                await session.execute(
                    select(BookingModel)
                    .where(BookingModel.id == booking_id)
                    .execution_options(populate_existing=True)
                )
            ).scalar_one()
            return booking_model_to_entity(db_booking)

    @Logger.io
    async def exists(self, *, booking_id: UUID) -> bool:
        async with self._get_session() as session:
            result = await session.execute(
                select(BookingModel.id).where(BookingModel.id == booking_id)
            )
            return result.scalar_one_or_none() is not None
