from typing import Optional, Self
import zoneinfo

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.core_setting import Settings
from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.consultation.app.dto.slot_state import SlotState
from src.service.consultation.app.service.slot_allocator import SlotAllocator
from src.service.consultation.domain.value_object.slot_month import SlotMonth


class GetSlotStateUseCase:
    def __init__(self, *, slot_allocator: SlotAllocator, config: Settings) -> None:
        self.slot_allocator = slot_allocator
        self.config = config

    @classmethod
    @inject
    def depends(
        cls,
        slot_allocator: SlotAllocator = Depends(Provide[Container.slot_allocator]),
        config: Settings = Depends(Provide[Container.config_service]),
    ) -> Self:
        return cls(slot_allocator=slot_allocator, config=config)

    @Logger.io
    async def get_slot_state(
        self, *, year: Optional[int] = None, month: Optional[int] = None
    ) -> SlotState:
        slot_month = SlotMonth.resolve(
            year=year, month=month, tz=zoneinfo.ZoneInfo(self.config.BUSINESS_TIMEZONE)
        )
        return SlotState(
            year=slot_month.year,
            month=slot_month.month,
            remaining=await self.slot_allocator.remaining(slot_month=slot_month),
            max_slots=self.slot_allocator.max_slots,
        )
