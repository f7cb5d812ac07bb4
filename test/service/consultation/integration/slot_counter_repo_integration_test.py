"""
Integration tests for SlotCounterRepoImpl against SQLite (aiosqlite)

The conditional UPDATE is the only thing standing between N concurrent
requests and an overbooked month, so these run it for real.
"""

import asyncio

import pytest

from src.platform.config.di import container
from src.service.consultation.domain.value_object.slot_month import SlotMonth


MARCH = SlotMonth(year=2031, month=3)
MAX_SLOTS = 5


async def _consume_once(slot_month: SlotMonth = MARCH) -> bool:
    async with container.unit_of_work() as uow:
        consumed = await uow.slot_counter_repo.consume(slot_month=slot_month, max_slots=MAX_SLOTS)
        await uow.commit()
        return consumed


async def _used(slot_month: SlotMonth = MARCH) -> int:
    return await container.slot_counter_repo().get_used(slot_month=slot_month)


@pytest.mark.usefixtures('database')
class TestSlotCounterRepo:
    async def test_missing_row_reads_as_zero(self):
        assert await _used() == 0

    async def test_consume_creates_row_lazily(self):
        assert await _consume_once() is True
        assert await _used() == 1

    async def test_last_slot_goes_to_exactly_one_of_ten(self):
        """Given used=4 of 5, ten concurrent consumes: one wins, nine see exhaustion"""
        for _ in range(4):
            assert await _consume_once()

        results = await asyncio.gather(*(_consume_once() for _ in range(10)))

        assert results.count(True) == 1
        assert results.count(False) == 9
        assert await _used() == MAX_SLOTS

    async def test_concurrent_consumes_never_exceed_max(self):
        results = await asyncio.gather(*(_consume_once() for _ in range(12)))

        assert results.count(True) == MAX_SLOTS
        assert await _used() == MAX_SLOTS

    async def test_uncommitted_consume_is_rolled_back(self):
        async with container.unit_of_work() as uow:
            assert await uow.slot_counter_repo.consume(slot_month=MARCH, max_slots=MAX_SLOTS)
            # leaving without commit

        assert await _used() == 0

    async def test_reset_brings_counter_back_to_zero(self):
        for _ in range(MAX_SLOTS):
            await _consume_once()

        async with container.unit_of_work() as uow:
            await uow.slot_counter_repo.reset(slot_month=MARCH)
            await uow.commit()

        assert await _used() == 0
        assert await _consume_once() is True

    async def test_reset_of_untouched_month_creates_row(self):
        async with container.unit_of_work() as uow:
            await uow.slot_counter_repo.reset(slot_month=SlotMonth(year=2031, month=9))
            await uow.commit()

        assert await _used(SlotMonth(year=2031, month=9)) == 0

    async def test_months_do_not_share_capacity(self):
        for _ in range(MAX_SLOTS):
            await _consume_once()

        assert await _consume_once(SlotMonth(year=2031, month=4)) is True
