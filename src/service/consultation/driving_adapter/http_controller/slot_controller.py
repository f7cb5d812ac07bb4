from typing import Optional

from fastapi import APIRouter, Depends, Query

from src.platform.logging.loguru_io import Logger
from src.service.consultation.app.query.get_slot_state_use_case import GetSlotStateUseCase
from src.service.consultation.driving_adapter.http_controller.schema.slot_schema import (
    SlotStateResponse,
)


router = APIRouter()


@router.get('/state')
@Logger.io
async def get_slot_state(
    year: Optional[int] = Query(default=None, ge=2000, le=9999),
    month: Optional[int] = Query(default=None, ge=1, le=12),
    use_case: GetSlotStateUseCase = Depends(GetSlotStateUseCase.depends),
) -> SlotStateResponse:
    """Remaining free slots of a month (current month in the business time zone by default)."""
    state = await use_case.get_slot_state(year=year, month=month)
    return SlotStateResponse(
        remaining=state.remaining, max_slots=state.max_slots, year=state.year, month=state.month
    )
