"""
Conftest for pure unit tests - no external dependencies.

Use cases are built directly with fakes for the unit of work, the admin gate
and the email notifier; nothing here opens a database connection.
"""

from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from typing import Optional
from unittest.mock import AsyncMock, MagicMock
from uuid import UUID

import pytest
import uuid_utils

from src.platform.config.core_setting import Settings, settings
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.service.consultation.app.interface.i_admin_gate import IAdminGate
from src.service.consultation.app.interface.i_booking_command_repo import IBookingCommandRepo
from src.service.consultation.app.interface.i_review_command_repo import IReviewCommandRepo
from src.service.consultation.app.interface.i_slot_counter_repo import ISlotCounterRepo
from src.service.consultation.app.service.notification_dispatcher import NotificationDispatcher
from src.service.consultation.app.service.slot_allocator import SlotAllocator
from src.service.consultation.domain.entity.booking_entity import Booking
from src.service.consultation.domain.entity.review_entity import Review
from src.service.consultation.domain.enum.booking_status import BookingStatus
from src.service.consultation.domain.enum.review_status import ReviewStatus
from src.service.consultation.domain.value_object.slot_month import SlotMonth
from src.service.consultation.driven_adapter.notification.console_email_notifier import (
    ConsoleEmailNotifier,
)


class InMemorySlotCounterRepo(ISlotCounterRepo):
    """Dict-backed counter with the same contract as the SQL repo"""

    def __init__(self, used: Optional[dict[SlotMonth, int]] = None) -> None:
        self.used: dict[SlotMonth, int] = dict(used or {})

    async def get_used(self, *, slot_month: SlotMonth) -> int:
        return self.used.get(slot_month, 0)

    async def consume(self, *, slot_month: SlotMonth, max_slots: int) -> bool:
        current = self.used.setdefault(slot_month, 0)
        if current >= max_slots:
            return False
        self.used[slot_month] = current + 1
        return True

    async def reset(self, *, slot_month: SlotMonth) -> None:
        self.used[slot_month] = 0


class FakeUnitOfWork(AbstractUnitOfWork):
    def __init__(self, slot_counter_repo: Optional[ISlotCounterRepo] = None) -> None:
        self.slot_counter_repo = slot_counter_repo or InMemorySlotCounterRepo()
        self.booking_command_repo = AsyncMock(spec=IBookingCommandRepo)
        self.review_command_repo = AsyncMock(spec=IReviewCommandRepo)
        self.commits = 0
        self.rollbacks = 0

    async def _commit(self) -> None:
        self.commits += 1

    async def rollback(self) -> None:
        self.rollbacks += 1


@pytest.fixture
def config() -> Settings:
    return settings


@pytest.fixture
def slot_counter_repo() -> InMemorySlotCounterRepo:
    return InMemorySlotCounterRepo()


@pytest.fixture
def uow(slot_counter_repo: InMemorySlotCounterRepo) -> FakeUnitOfWork:
    return FakeUnitOfWork(slot_counter_repo=slot_counter_repo)


@pytest.fixture
def slot_allocator(slot_counter_repo: InMemorySlotCounterRepo) -> SlotAllocator:
    return SlotAllocator(slot_counter_repo=slot_counter_repo, max_slots=5)


@pytest.fixture
def admin_gate() -> MagicMock:
    gate = MagicMock(spec=IAdminGate)
    gate.authorize.return_value = True
    return gate


@pytest.fixture
def email_notifier() -> ConsoleEmailNotifier:
    return ConsoleEmailNotifier()


@pytest.fixture
def notification_dispatcher(email_notifier: ConsoleEmailNotifier) -> NotificationDispatcher:
    return NotificationDispatcher(email_notifier=email_notifier, timeout_seconds=1.0)


@pytest.fixture
def make_booking() -> Callable[..., Booking]:
    def _make(
        *,
        status: BookingStatus = BookingStatus.NEW,
        starts_at: Optional[datetime] = None,
        booking_id: Optional[UUID] = None,
    ) -> Booking:
        now = datetime.now(timezone.utc)
        return Booking(
            id=booking_id or UUID(str(uuid_utils.uuid7())),
            name='Anna Schmidt',
            email='anna@example.com',
            starts_at=starts_at or datetime(2031, 3, 14, 14, 0, tzinfo=timezone.utc),
            duration_minutes=45,
            status=status,
            created_at=now,
            updated_at=now,
        )

    return _make


@pytest.fixture
def make_review() -> Callable[..., Review]:
    def _make(
        *,
        status: ReviewStatus = ReviewStatus.PENDING,
        code_hash: Optional[str] = None,
        expires_in: timedelta = timedelta(hours=72),
        rating: int = 5,
        name: str = 'Anna Maria Schmidt',
        published_at: Optional[datetime] = None,
    ) -> Review:
        now = datetime.now(timezone.utc)
        return Review(
            id=UUID(str(uuid_utils.uuid7())),
            name=name,
            email='anna@example.com',
            rating=rating,
            title='Helpful',
            body='Clear advice and concrete next steps.',
            status=status,
            verification_code_hash=code_hash,
            verification_expires_at=now + expires_in,
            created_at=now,
            published_at=published_at,
        )

    return _make
