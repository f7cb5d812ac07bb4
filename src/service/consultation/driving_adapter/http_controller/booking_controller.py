from fastapi import APIRouter, Depends, status
from opentelemetry import trace

from src.platform.logging.loguru_io import Logger
from src.service.consultation.app.command.create_booking_use_case import CreateBookingUseCase
from src.service.consultation.driving_adapter.http_controller.schema.booking_schema import (
    BookingCreateRequest,
    BookingCreateResponse,
)


router = APIRouter()
tracer = trace.get_tracer(__name__)


@router.post('/create', status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_booking(
    request: BookingCreateRequest,
    use_case: CreateBookingUseCase = Depends(CreateBookingUseCase.depends),
) -> BookingCreateResponse:
    with tracer.start_as_current_span('controller.create_booking') as span:
        span.set_attribute('duration', request.duration)

        result = await use_case.create_booking(
            name=request.name,
            email=request.email,
            discord_name=request.discord_name,
            note=request.note,
            starts_at=request.starts_at,
            duration_minutes=request.duration,
        )

        return BookingCreateResponse(
            booking_id=result.booking.id,
            status=result.booking.status.value,
            notified=result.notified,
        )
