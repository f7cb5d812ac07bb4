"""
Monthly slot admission control.

Correctness rests entirely on the counter repository's conditional UPDATE;
no in-process lock is taken, so any number of workers may call `consume`
for the same month concurrently.
"""

from typing import Self

from src.platform.exception.exceptions import CapacityExhaustedError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.consultation_metrics import metrics
from src.service.consultation.app.interface.i_slot_counter_repo import ISlotCounterRepo
from src.service.consultation.domain.value_object.slot_month import SlotMonth


class SlotAllocator:
    def __init__(self, *, slot_counter_repo: ISlotCounterRepo, max_slots: int) -> None:
        self.slot_counter_repo = slot_counter_repo
        self.max_slots = max_slots

    def bind(self, slot_counter_repo: ISlotCounterRepo) -> Self:
        """Same allocator working on another repo (e.g. the one of a unit of work)"""
        return type(self)(slot_counter_repo=slot_counter_repo, max_slots=self.max_slots)

    @Logger.io
    async def remaining(self, *, slot_month: SlotMonth) -> int:
        used = await self.slot_counter_repo.get_used(slot_month=slot_month)
        return max(0, self.max_slots - used)

    @Logger.io
    async def consume(self, *, slot_month: SlotMonth) -> None:
        """
        Take one slot of the month.

        Raises:
            CapacityExhaustedError: the counter already reached max_slots
        """
        consumed = await self.slot_counter_repo.consume(
            slot_month=slot_month, max_slots=self.max_slots
        )
        metrics.record_slot_consumption(consumed=consumed)
        if not consumed:
            Logger.base.info(f'🈵 [SLOT] {slot_month} exhausted ({self.max_slots} max)')
            raise CapacityExhaustedError()

    @Logger.io
    async def reset(self, *, slot_month: SlotMonth) -> int:
        await self.slot_counter_repo.reset(slot_month=slot_month)
        metrics.record_slot_reset()
        Logger.base.warning(f'♻️ [SLOT] {slot_month} counter reset to 0')
        return self.max_slots
