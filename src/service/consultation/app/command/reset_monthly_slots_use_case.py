from typing import Optional, Self
import zoneinfo

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from pydantic import SecretStr

from src.platform.config.core_setting import Settings
from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import UnauthorizedError
from src.platform.logging.loguru_io import Logger
from src.service.consultation.app.dto.slot_state import SlotState
from src.service.consultation.app.interface.i_admin_gate import IAdminGate
from src.service.consultation.app.service.slot_allocator import SlotAllocator
from src.service.consultation.domain.value_object.slot_month import SlotMonth


class ResetMonthlySlotsUseCase:
    def __init__(
        self,
        *,
        uow: AbstractUnitOfWork,
        slot_allocator: SlotAllocator,
        admin_gate: IAdminGate,
        config: Settings,
    ) -> None:
        self.uow = uow
        self.slot_allocator = slot_allocator
        self.admin_gate = admin_gate
        self.config = config

    @classmethod
    @inject
    def depends(
        cls,
        uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work]),
        slot_allocator: SlotAllocator = Depends(Provide[Container.slot_allocator]),
        admin_gate: IAdminGate = Depends(Provide[Container.admin_gate]),
        config: Settings = Depends(Provide[Container.config_service]),
    ) -> Self:
        return cls(uow=uow, slot_allocator=slot_allocator, admin_gate=admin_gate, config=config)

    @Logger.io
    async def execute(
        self,
        *,
        admin_secret: Optional[SecretStr],
        year: Optional[int] = None,
        month: Optional[int] = None,
    ) -> SlotState:
        """
        Set the month's used count back to 0 (current month by default).

        Existing bookings are untouched; `remaining` becomes MAX_SLOTS again.
        """
        if not self.admin_gate.authorize(supplied_secret=admin_secret, action='slots.reset'):
            raise UnauthorizedError()

        slot_month = SlotMonth.resolve(
            year=year, month=month, tz=zoneinfo.ZoneInfo(self.config.BUSINESS_TIMEZONE)
        )
        async with self.uow:
            remaining = await self.slot_allocator.bind(self.uow.slot_counter_repo).reset(
                slot_month=slot_month
            )
            await self.uow.commit()

        return SlotState(
            year=slot_month.year,
            month=slot_month.month,
            remaining=remaining,
            max_slots=self.slot_allocator.max_slots,
        )
