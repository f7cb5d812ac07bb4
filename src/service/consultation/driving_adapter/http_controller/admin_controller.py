from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import SecretStr

from src.platform.logging.loguru_io import Logger
from src.service.consultation.app.command.reset_monthly_slots_use_case import (
    ResetMonthlySlotsUseCase,
)
from src.service.consultation.app.command.update_booking_status_use_case import (
    UpdateBookingStatusUseCase,
)
from src.service.consultation.app.dto.booking_result import BookingResult
from src.service.consultation.app.query.get_admin_dashboard_use_case import (
    GetAdminDashboardUseCase,
)
from src.service.consultation.driving_adapter.http_controller.auth.admin_auth import (
    get_admin_credential,
)
from src.service.consultation.driving_adapter.http_controller.schema.admin_schema import (
    AdminDashboardResponse,
)
from src.service.consultation.driving_adapter.http_controller.schema.booking_schema import (
    BookingDecisionRequest,
    BookingDecisionResponse,
    UpcomingBookingResponse,
)
from src.service.consultation.driving_adapter.http_controller.schema.review_schema import (
    PendingReviewResponse,
)
from src.service.consultation.driving_adapter.http_controller.schema.slot_schema import (
    SlotResetRequest,
    SlotResetResponse,
)


router = APIRouter()


def _decision_response(result: BookingResult) -> BookingDecisionResponse:
    return BookingDecisionResponse(
        booking_id=result.booking.id,
        status=result.booking.status.value,
        notified=result.notified,
    )


@router.post('/bookings/approve')
@Logger.io
async def approve_booking(
    request: BookingDecisionRequest,
    admin_credential: Optional[SecretStr] = Depends(get_admin_credential),
    use_case: UpdateBookingStatusUseCase = Depends(UpdateBookingStatusUseCase.depends),
) -> BookingDecisionResponse:
    result = await use_case.approve(booking_id=request.booking_id, admin_secret=admin_credential)
    return _decision_response(result)


@router.post('/bookings/reject')
@Logger.io
async def reject_booking(
    request: BookingDecisionRequest,
    admin_credential: Optional[SecretStr] = Depends(get_admin_credential),
    use_case: UpdateBookingStatusUseCase = Depends(UpdateBookingStatusUseCase.depends),
) -> BookingDecisionResponse:
    result = await use_case.reject(booking_id=request.booking_id, admin_secret=admin_credential)
    return _decision_response(result)


@router.post('/reset-slots')
@Logger.io
async def reset_slots(
    request: SlotResetRequest,
    use_case: ResetMonthlySlotsUseCase = Depends(ResetMonthlySlotsUseCase.depends),
) -> SlotResetResponse:
    state = await use_case.execute(
        admin_secret=request.admin_pass, year=request.year, month=request.month
    )
    return SlotResetResponse(
        success=True,
        message=f'Slots for {state.year:04d}-{state.month:02d} reset',
        remaining=state.remaining,
    )


@router.get('/dashboard')
@Logger.io(truncate_content=True)
async def get_dashboard(
    admin_credential: Optional[SecretStr] = Depends(get_admin_credential),
    use_case: GetAdminDashboardUseCase = Depends(GetAdminDashboardUseCase.depends),
) -> AdminDashboardResponse:
    dashboard = await use_case.get_dashboard(admin_secret=admin_credential)
    return AdminDashboardResponse(
        pending_reviews=[
            PendingReviewResponse(
                id=review.id,
                name=review.name,
                email=review.email,
                rating=review.rating,
                title=review.title,
                body=review.body,
                verified_at=review.verified_at,
            )
            for review in dashboard.pending_reviews
        ],
        upcoming_bookings=[
            UpcomingBookingResponse(
                id=booking.id,
                name=booking.name,
                email=booking.email,
                discord_name=booking.discord_name,
                note=booking.note,
                starts_at=booking.starts_at,
                duration=booking.duration_minutes,
                status=booking.status.value,
            )
            for booking in dashboard.upcoming_bookings
        ],
    )
