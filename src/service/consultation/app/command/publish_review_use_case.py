from datetime import datetime, timezone
from typing import Optional, Self
from uuid import UUID

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace
from pydantic import SecretStr

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import InvalidStateError, UnauthorizedError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.consultation_metrics import metrics
from src.service.consultation.app.interface.i_admin_gate import IAdminGate


class PublishReviewUseCase:
    def __init__(self, *, uow: AbstractUnitOfWork, admin_gate: IAdminGate) -> None:
        self.uow = uow
        self.admin_gate = admin_gate
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work]),
        admin_gate: IAdminGate = Depends(Provide[Container.admin_gate]),
    ) -> Self:
        return cls(uow=uow, admin_gate=admin_gate)

    @Logger.io
    async def publish_review(
        self, *, review_id: UUID, admin_secret: Optional[SecretStr]
    ) -> datetime:
        """
        verified -> published. Returns the publication timestamp.

        Raises:
            UnauthorizedError: bad admin credential (checked first)
            InvalidStateError: unknown review, or not in status verified
        """
        with self.tracer.start_as_current_span(
            'use_case.publish_review', attributes={'review.id': str(review_id)}
        ):
            if not self.admin_gate.authorize(supplied_secret=admin_secret, action='review.publish'):
                raise UnauthorizedError()

            published_at = datetime.now(timezone.utc)
            async with self.uow:
                changed = await self.uow.review_command_repo.mark_published(
                    review_id=review_id, published_at=published_at
                )
                if not changed:
                    metrics.record_review_transition(transition='publish', success=False)
                    raise InvalidStateError('Review is not verified or does not exist')
                await self.uow.commit()

            metrics.record_review_transition(transition='publish', success=True)
            Logger.base.info(f'📣 [REVIEW] {review_id} published')
            return published_at
