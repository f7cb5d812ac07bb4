from datetime import datetime, timezone
from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from pydantic import SecretStr

from src.platform.config.di import Container
from src.platform.exception.exceptions import UnauthorizedError
from src.platform.logging.loguru_io import Logger
from src.service.consultation.app.dto.admin_dashboard import AdminDashboard
from src.service.consultation.app.interface.i_admin_gate import IAdminGate
from src.service.consultation.app.interface.i_booking_query_repo import IBookingQueryRepo
from src.service.consultation.app.interface.i_review_query_repo import IReviewQueryRepo


DASHBOARD_LIMIT = 50


class GetAdminDashboardUseCase:
    """Moderation queue (verified reviews) and upcoming bookings for the operator"""

    def __init__(
        self,
        *,
        admin_gate: IAdminGate,
        review_query_repo: IReviewQueryRepo,
        booking_query_repo: IBookingQueryRepo,
    ) -> None:
        self.admin_gate = admin_gate
        self.review_query_repo = review_query_repo
        self.booking_query_repo = booking_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        admin_gate: IAdminGate = Depends(Provide[Container.admin_gate]),
        review_query_repo: IReviewQueryRepo = Depends(Provide[Container.review_query_repo]),
        booking_query_repo: IBookingQueryRepo = Depends(Provide[Container.booking_query_repo]),
    ) -> Self:
        return cls(
            admin_gate=admin_gate,
            review_query_repo=review_query_repo,
            booking_query_repo=booking_query_repo,
        )

    @Logger.io(truncate_content=True)
    async def get_dashboard(self, *, admin_secret: Optional[SecretStr]) -> AdminDashboard:
        if not self.admin_gate.authorize(supplied_secret=admin_secret, action='dashboard.read'):
            raise UnauthorizedError()

        return AdminDashboard(
            pending_reviews=await self.review_query_repo.list_awaiting_publication(
                limit=DASHBOARD_LIMIT
            ),
            upcoming_bookings=await self.booking_query_repo.list_upcoming(
                since=datetime.now(timezone.utc), limit=DASHBOARD_LIMIT
            ),
        )
