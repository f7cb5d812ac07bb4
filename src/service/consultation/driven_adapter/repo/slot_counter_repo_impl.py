from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncContextManager, AsyncIterator, Callable

from sqlalchemy import select, update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.consultation.app.interface.i_slot_counter_repo import ISlotCounterRepo
from src.service.consultation.domain.value_object.slot_month import SlotMonth
from src.service.consultation.driven_adapter.model.slot_counter_model import SlotCounterModel


class SlotCounterRepoImpl(ISlotCounterRepo):
    """
    Capacity store on the `slot_counter` table.

    Writes are meant to run on a session injected by the unit of work, which
    owns the commit.
    """

    def __init__(
        self, session_factory: Callable[..., AsyncContextManager[AsyncSession]] | None = None
    ):
        self.session_factory = session_factory
        self.session: AsyncSession | None = None

    @asynccontextmanager
    async def _get_session(self) -> AsyncIterator[AsyncSession]:
        if self.session is not None:
            # Session injected by UoW - use directly (no context manager needed)
            yield self.session
        elif self.session_factory is not None:
            async with self.session_factory() as session:
                yield session
        else:
            raise RuntimeError('No session or session_factory available')

    @staticmethod
    async def _ensure_row(session: AsyncSession, slot_month: SlotMonth) -> None:
        """INSERT ... ON CONFLICT DO NOTHING, so racing creators never fail"""
        dialect = session.get_bind().dialect.name
        insert = pg_insert if dialect == 'postgresql' else sqlite_insert
        stmt = (
            insert(SlotCounterModel)
            .values(
                year=slot_month.year,
                month=slot_month.month,
                used=0,
                updated_at=datetime.now(timezone.utc),
            )
            .on_conflict_do_nothing(index_elements=['year', 'month'])
        )
        await session.execute(stmt)

    @Logger.io
    async def get_used(self, *, slot_month: SlotMonth) -> int:
        async with self._get_session() as session:
            result = await session.execute(
                select(SlotCounterModel.used).where(
                    SlotCounterModel.year == slot_month.year,
                    SlotCounterModel.month == slot_month.month,
                )
            )
            return result.scalar_one_or_none() or 0

    @Logger.io
    async def consume(self, *, slot_month: SlotMonth, max_slots: int) -> bool:
        async with self._get_session() as session:
            await self._ensure_row(session, slot_month)
            result = await session.execute(
                update(SlotCounterModel)
                .where(
                    SlotCounterModel.year == slot_month.year,
                    SlotCounterModel.month == slot_month.month,
                    SlotCounterModel.used < max_slots,
                )
                .values(used=SlotCounterModel.used + 1, updated_at=datetime.now(timezone.utc))
                .execution_options(synchronize_session=False)
            )
            return result.rowcount == 1  # type: ignore[attr-defined]

    @Logger.io
    async def reset(self, *, slot_month: SlotMonth) -> None:
        async with self._get_session() as session:
            await self._ensure_row(session, slot_month)
            await session.execute(
                update(SlotCounterModel)
                .where(
                    SlotCounterModel.year == slot_month.year,
                    SlotCounterModel.month == slot_month.month,
                )
                .values(used=0, updated_at=datetime.now(timezone.utc))
                .execution_options(synchronize_session=False)
            )
