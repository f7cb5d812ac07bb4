"""
Integration tests for the booking workflow on a real database

Use cases are resolved from the container exactly as the HTTP layer does.
"""

import asyncio
from datetime import datetime, timedelta, timezone
from uuid import uuid4
from zoneinfo import ZoneInfo

from pydantic import SecretStr
import pytest
from sqlalchemy import func, select

from src.platform.config.core_setting import settings
from src.platform.config.di import container
from src.platform.database.db_setting import get_session_maker
from src.platform.exception.exceptions import (
    CapacityExhaustedError,
    InvalidStateError,
    NotFoundError,
)
from src.service.consultation.app.command.create_booking_use_case import CreateBookingUseCase
from src.service.consultation.app.command.update_booking_status_use_case import (
    UpdateBookingStatusUseCase,
)
from src.service.consultation.domain.enum.booking_status import BookingStatus
from src.service.consultation.domain.value_object.slot_month import SlotMonth
from src.service.consultation.driven_adapter.model.booking_model import BookingModel


BERLIN = ZoneInfo('Europe/Berlin')
MARCH = SlotMonth(year=2031, month=3)
SECRET = SecretStr('test-admin-secret')


def _create_use_case() -> CreateBookingUseCase:
    return CreateBookingUseCase(
        uow=container.unit_of_work(),
        slot_allocator=container.slot_allocator(),
        notification_dispatcher=container.notification_dispatcher(),
        config=settings,
    )


def _decision_use_case() -> UpdateBookingStatusUseCase:
    return UpdateBookingStatusUseCase(
        uow=container.unit_of_work(),
        admin_gate=container.admin_gate(),
        notification_dispatcher=container.notification_dispatcher(),
        config=settings,
    )


async def _book(n: int = 0, starts_at: datetime | None = None):
    return await _create_use_case().create_booking(
        name=f'Client {n}',
        email=f'client{n}@example.com',
        starts_at=starts_at or datetime(2031, 3, 14, 15, 0, tzinfo=BERLIN),
        duration_minutes=30,
    )


async def _booking_count() -> int:
    async with get_session_maker()() as session:
        return (await session.execute(select(func.count(BookingModel.id)))).scalar_one()


@pytest.mark.usefixtures('database')
class TestBookingWorkflow:
    async def test_booking_is_persisted_and_consumes_a_slot(self, email_outbox):
        result = await _book()

        stored = await container.booking_query_repo().get_by_id(booking_id=result.booking.id)
        assert stored is not None
        assert stored.status == BookingStatus.NEW
        assert stored.starts_at == datetime(2031, 3, 14, 14, 0, tzinfo=timezone.utc)
        assert await container.slot_allocator().remaining(slot_month=MARCH) == 4
        assert result.notified is True
        assert len(email_outbox.sent_emails) == 2

    async def test_no_phantom_bookings_under_contention(self):
        """Given 3 of 5 slots used, 10 concurrent requests: 2 bookings, 8 refusals"""
        for n in range(3):
            await _book(n)

        results = await asyncio.gather(
            *(_book(n) for n in range(10, 20)), return_exceptions=True
        )

        created = [r for r in results if not isinstance(r, BaseException)]
        refused = [r for r in results if isinstance(r, CapacityExhaustedError)]
        assert len(created) == 2
        assert len(refused) == 8
        assert await _booking_count() == 5
        assert await container.slot_allocator().remaining(slot_month=MARCH) == 0

    async def test_exhausted_month_leaves_no_booking(self):
        for n in range(5):
            await _book(n)

        with pytest.raises(CapacityExhaustedError):
            await _book(99)

        assert await _booking_count() == 5

    async def test_month_is_derived_in_business_time_zone(self):
        # 22:30 UTC on March 31st is April 1st in Berlin
        await _book(starts_at=datetime(2031, 3, 31, 22, 30, tzinfo=timezone.utc))

        assert await container.slot_allocator().remaining(slot_month=MARCH) == 5
        april = SlotMonth(year=2031, month=4)
        assert await container.slot_allocator().remaining(slot_month=april) == 4

    async def test_approve_then_second_decision_conflicts(self, email_outbox):
        booking = (await _book()).booking

        approved = await _decision_use_case().approve(booking_id=booking.id, admin_secret=SECRET)

        assert approved.booking.status == BookingStatus.CONFIRMED
        with pytest.raises(InvalidStateError):
            await _decision_use_case().reject(booking_id=booking.id, admin_secret=SECRET)
        stored = await container.booking_query_repo().get_by_id(booking_id=booking.id)
        assert stored.status == BookingStatus.CONFIRMED

    async def test_rejection_keeps_the_slot_consumed(self):
        booking = (await _book()).booking

        await _decision_use_case().reject(booking_id=booking.id, admin_secret=SECRET)

        assert await container.slot_allocator().remaining(slot_month=MARCH) == 4

    async def test_concurrent_decisions_have_one_winner(self):
        booking = (await _book()).booking

        results = await asyncio.gather(
            _decision_use_case().approve(booking_id=booking.id, admin_secret=SECRET),
            _decision_use_case().reject(booking_id=booking.id, admin_secret=SECRET),
            return_exceptions=True,
        )

        assert sum(isinstance(r, InvalidStateError) for r in results) == 1
        assert sum(not isinstance(r, BaseException) for r in results) == 1

    async def test_unknown_booking(self):
        with pytest.raises(NotFoundError):
            await _decision_use_case().approve(booking_id=uuid4(), admin_secret=SECRET)

    async def test_upcoming_bookings_skip_past_and_rejected(self):
        now = datetime.now(timezone.utc)
        past = (await _book(1, starts_at=now - timedelta(days=1))).booking
        later = (await _book(2, starts_at=now + timedelta(days=10))).booking
        sooner = (await _book(3, starts_at=now + timedelta(days=2))).booking
        rejected = (await _book(4, starts_at=now + timedelta(days=3))).booking
        await _decision_use_case().reject(booking_id=rejected.id, admin_secret=SECRET)

        upcoming = await container.booking_query_repo().list_upcoming(since=now, limit=10)

        assert [b.id for b in upcoming] == [sooner.id, later.id]
        assert past.id not in {b.id for b in upcoming}
