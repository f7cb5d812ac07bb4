"""
Unit of Work Pattern - owns the database session shared by command repositories

Architecture:
- UoW opens the session on enter and closes it on exit
- UoW is responsible for commit; anything not committed is rolled back on exit
- Command repositories are bound to the shared session, so a booking insert and
  the slot consumption it depends on land (or vanish) together
"""

from __future__ import annotations

import abc
from contextlib import AbstractAsyncContextManager
from typing import TYPE_CHECKING, Callable, Optional

from sqlalchemy.ext.asyncio import AsyncSession


if TYPE_CHECKING:
    from src.service.consultation.app.interface.i_booking_command_repo import (
        IBookingCommandRepo,
    )
    from src.service.consultation.app.interface.i_review_command_repo import (
        IReviewCommandRepo,
    )
    from src.service.consultation.app.interface.i_slot_counter_repo import ISlotCounterRepo


class AbstractUnitOfWork(abc.ABC):
    """
    Abstract Unit of Work for the consultation service

    Usage:
        async with uow:
            await uow.booking_command_repo.create(booking=...)
            await uow.slot_counter_repo.consume(month=...)
            await uow.commit()
    """

    slot_counter_repo: ISlotCounterRepo
    booking_command_repo: IBookingCommandRepo
    review_command_repo: IReviewCommandRepo

    async def __aenter__(self) -> AbstractUnitOfWork:
        return self

    async def __aexit__(self, *args) -> None:
        await self.rollback()

    async def commit(self) -> None:
        """Commit the transaction"""
        await self._commit()

    @abc.abstractmethod
    async def _commit(self) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    async def rollback(self) -> None:
        raise NotImplementedError


class SqlAlchemyUnitOfWork(AbstractUnitOfWork):
    """
    SQLAlchemy implementation of Unit of Work

    A fresh instance is provided per use case call (providers.Factory), and each
    `async with` block runs exactly one transaction.
    """

    def __init__(
        self, session_factory: Callable[..., AbstractAsyncContextManager[AsyncSession]]
    ) -> None:
        self.session_factory = session_factory
        self.session: Optional[AsyncSession] = None
        self._session_cm: Optional[AbstractAsyncContextManager[AsyncSession]] = None

    async def __aenter__(self) -> SqlAlchemyUnitOfWork:
        from src.service.consultation.driven_adapter.repo.booking_command_repo_impl import (
            BookingCommandRepoImpl,
        )
        from src.service.consultation.driven_adapter.repo.review_command_repo_impl import (
            ReviewCommandRepoImpl,
        )
        from src.service.consultation.driven_adapter.repo.slot_counter_repo_impl import (
            SlotCounterRepoImpl,
        )

        self._session_cm = self.session_factory()
        self.session = await self._session_cm.__aenter__()

        # Create repositories with shared session
        self.slot_counter_repo = SlotCounterRepoImpl(session_factory=None)
        self.slot_counter_repo.session = self.session
        self.booking_command_repo = BookingCommandRepoImpl(session_factory=None)
        self.booking_command_repo.session = self.session
        self.review_command_repo = ReviewCommandRepoImpl(session_factory=None)
        self.review_command_repo.session = self.session

        await super().__aenter__()
        return self

    async def __aexit__(self, *args) -> None:
        try:
            await super().__aexit__(*args)
        finally:
            if self._session_cm is not None:
                await self._session_cm.__aexit__(*args)
            self._session_cm = None
            self.session = None

    async def _commit(self) -> None:
        assert self.session is not None, 'commit() called outside of `async with uow`'
        await self.session.commit()

    async def rollback(self) -> None:
        if self.session is not None:
            await self.session.rollback()
