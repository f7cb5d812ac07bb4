from datetime import datetime
from typing import Optional, Self
import zoneinfo

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace
from sqlalchemy.exc import SQLAlchemyError

from src.platform.config.core_setting import Settings
from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import (
    CapacityExhaustedError,
    StoreError,
    ValidationError,
)
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.consultation_metrics import metrics
from src.service.consultation.app.dto.booking_result import BookingResult
from src.service.consultation.app.service import email_composer
from src.service.consultation.app.service.notification_dispatcher import NotificationDispatcher
from src.service.consultation.app.service.slot_allocator import SlotAllocator
from src.service.consultation.domain.entity.booking_entity import Booking


class CreateBookingUseCase:
    """
    Book a free consultation slot.

    Flow:
    1. Validate input and derive the slot month in the business time zone
    2. Fast pre-check of the remaining capacity (advisory only)
    3. In ONE transaction: insert booking (status=new) + consume a slot
       - consume fails -> CapacityExhaustedError, transaction rolls back
       - commit fails  -> StoreError, neither booking nor consumption persist
    4. After commit: requester confirmation + operator alert (best-effort)
    """

    def __init__(
        self,
        *,
        uow: AbstractUnitOfWork,
        slot_allocator: SlotAllocator,
        notification_dispatcher: NotificationDispatcher,
        config: Settings,
    ) -> None:
        self.uow = uow
        self.slot_allocator = slot_allocator
        self.notification_dispatcher = notification_dispatcher
        self.config = config
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work]),
        slot_allocator: SlotAllocator = Depends(Provide[Container.slot_allocator]),
        notification_dispatcher: NotificationDispatcher = Depends(
            Provide[Container.notification_dispatcher]
        ),
        config: Settings = Depends(Provide[Container.config_service]),
    ) -> Self:
        return cls(
            uow=uow,
            slot_allocator=slot_allocator,
            notification_dispatcher=notification_dispatcher,
            config=config,
        )

    @Logger.io
    async def create_booking(
        self,
        *,
        name: str,
        email: str,
        starts_at: datetime,
        duration_minutes: int,
        discord_name: Optional[str] = None,
        note: Optional[str] = None,
    ) -> BookingResult:
        with self.tracer.start_as_current_span('use_case.create_booking') as span:
            business_tz = zoneinfo.ZoneInfo(self.config.BUSINESS_TIMEZONE)
            try:
                booking = Booking.create(
                    name=name,
                    email=email,
                    starts_at=starts_at,
                    duration_minutes=duration_minutes,
                    allowed_durations=self.config.BOOKING_DURATIONS,
                    business_tz=business_tz,
                    discord_name=discord_name,
                    note=note,
                )
            except ValidationError:
                metrics.record_booking_request(result='invalid')
                raise

            slot_month = booking.slot_month(business_tz=business_tz)
            span.set_attribute('booking.id', str(booking.id))
            span.set_attribute('slot.month', str(slot_month))

            try:
                async with self.uow:
                    allocator = self.slot_allocator.bind(self.uow.slot_counter_repo)
                    if await allocator.remaining(slot_month=slot_month) == 0:
                        raise CapacityExhaustedError()
                    await self.uow.booking_command_repo.create(booking=booking)
                    await allocator.consume(slot_month=slot_month)
                    await self.uow.commit()
            except CapacityExhaustedError:
                metrics.record_booking_request(result='capacity_exhausted')
                raise
            except SQLAlchemyError as e:
                metrics.record_booking_request(result='error')
                # Reconciliation context: the transaction was rolled back as a whole
                Logger.base.error(
                    f'💥 [BOOKING] store failure year={slot_month.year} month={slot_month.month} '
                    f'booking_id={booking.id}: {type(e).__name__}: {e}'
                )
                raise StoreError() from e

            metrics.record_booking_request(result='created')
            Logger.base.info(f'📅 [BOOKING] {booking.id} created for {slot_month}')

            notified = await self.notification_dispatcher.dispatch(
                email_composer.booking_received(booking=booking, business_tz=business_tz),
                email_composer.booking_operator_alert(
                    booking=booking,
                    operator_email=self.config.OPERATOR_EMAIL,
                    business_tz=business_tz,
                ),
            )
            span.set_attribute('booking.notified', notified)
            return BookingResult(booking=booking, notified=notified)
