from typing import Optional, Self
from uuid import UUID
import zoneinfo

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace
from pydantic import SecretStr

from src.platform.config.core_setting import Settings
from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import (
    InvalidStateError,
    NotFoundError,
    UnauthorizedError,
)
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.consultation_metrics import metrics
from src.service.consultation.app.dto.booking_result import BookingResult
from src.service.consultation.app.interface.i_admin_gate import IAdminGate
from src.service.consultation.app.service import email_composer
from src.service.consultation.app.service.notification_dispatcher import NotificationDispatcher
from src.service.consultation.domain.enum.booking_status import BookingStatus


class UpdateBookingStatusUseCase:
    """
    Admin decision on a booking: new -> confirmed or new -> rejected.

    The transition is a conditional UPDATE on status='new', so two admins
    deciding concurrently cannot both win. The consumed slot is kept either way.
    """

    def __init__(
        self,
        *,
        uow: AbstractUnitOfWork,
        admin_gate: IAdminGate,
        notification_dispatcher: NotificationDispatcher,
        config: Settings,
    ) -> None:
        self.uow = uow
        self.admin_gate = admin_gate
        self.notification_dispatcher = notification_dispatcher
        self.config = config
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work]),
        admin_gate: IAdminGate = Depends(Provide[Container.admin_gate]),
        notification_dispatcher: NotificationDispatcher = Depends(
            Provide[Container.notification_dispatcher]
        ),
        config: Settings = Depends(Provide[Container.config_service]),
    ) -> Self:
        return cls(
            uow=uow,
            admin_gate=admin_gate,
            notification_dispatcher=notification_dispatcher,
            config=config,
        )

    @Logger.io
    async def approve(
        self, *, booking_id: UUID, admin_secret: Optional[SecretStr]
    ) -> BookingResult:
        return await self._decide(
            booking_id=booking_id, status=BookingStatus.CONFIRMED, admin_secret=admin_secret
        )

    @Logger.io
    async def reject(self, *, booking_id: UUID, admin_secret: Optional[SecretStr]) -> BookingResult:
        return await self._decide(
            booking_id=booking_id, status=BookingStatus.REJECTED, admin_secret=admin_secret
        )

    async def _decide(
        self, *, booking_id: UUID, status: BookingStatus, admin_secret: Optional[SecretStr]
    ) -> BookingResult:
        with self.tracer.start_as_current_span(
            'use_case.decide_booking',
            attributes={'booking.id': str(booking_id), 'booking.decision': status.value},
        ):
            if not self.admin_gate.authorize(
                supplied_secret=admin_secret, action=f'booking.{status.value}'
            ):
                raise UnauthorizedError()

            async with self.uow:
                booking = await self.uow.booking_command_repo.decide_if_new(
                    booking_id=booking_id, status=status
                )
                if booking is None:
                    if not await self.uow.booking_command_repo.exists(booking_id=booking_id):
                        raise NotFoundError('Booking not found')
                    raise InvalidStateError('Booking has already been decided')
                await self.uow.commit()

            metrics.record_booking_decision(decision=status.value)
            Logger.base.info(f'🗂️ [BOOKING] {booking_id} -> {status.value}')

            notified = await self.notification_dispatcher.dispatch(
                email_composer.booking_decided(
                    booking=booking, business_tz=zoneinfo.ZoneInfo(self.config.BUSINESS_TIMEZONE)
                )
            )
            return BookingResult(booking=booking, notified=notified)
