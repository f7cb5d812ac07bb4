from datetime import timedelta
from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from src.platform.config.core_setting import Settings
from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import ValidationError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.consultation_metrics import metrics
from src.service.consultation.app.dto.review_views import SubmittedReview
from src.service.consultation.app.service import email_composer
from src.service.consultation.app.service.notification_dispatcher import NotificationDispatcher
from src.service.consultation.domain.entity.review_entity import Review
from src.service.consultation.domain.value_object.verification_code import (
    generate_verification_code,
    hash_verification_code,
)


class SubmitReviewUseCase:
    """
    Accept a review as `pending` and mail its single-use verification link.

    Only the SHA-256 digest of the code is stored; the plain code leaves the
    service in the email (and in the response, for clients that verify inline).
    """

    def __init__(
        self,
        *,
        uow: AbstractUnitOfWork,
        notification_dispatcher: NotificationDispatcher,
        config: Settings,
    ) -> None:
        self.uow = uow
        self.notification_dispatcher = notification_dispatcher
        self.config = config
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work]),
        notification_dispatcher: NotificationDispatcher = Depends(
            Provide[Container.notification_dispatcher]
        ),
        config: Settings = Depends(Provide[Container.config_service]),
    ) -> Self:
        return cls(uow=uow, notification_dispatcher=notification_dispatcher, config=config)

    @Logger.io
    async def submit_review(
        self,
        *,
        name: str,
        email: str,
        rating: int,
        body: str,
        title: Optional[str] = None,
    ) -> SubmittedReview:
        with self.tracer.start_as_current_span('use_case.submit_review') as span:
            code = generate_verification_code()
            try:
                review = Review.create(
                    name=name,
                    email=email,
                    rating=rating,
                    title=title,
                    body=body,
                    verification_code_hash=hash_verification_code(code),
                    verification_ttl=timedelta(hours=self.config.REVIEW_VERIFICATION_TTL_HOURS),
                )
            except ValidationError:
                metrics.record_review_transition(transition='submit', success=False)
                raise
            span.set_attribute('review.id', str(review.id))

            async with self.uow:
                await self.uow.review_command_repo.create(review=review)
                await self.uow.commit()

            metrics.record_review_transition(transition='submit', success=True)
            Logger.base.info(f'📝 [REVIEW] {review.id} submitted, awaiting verification')

            notified = await self.notification_dispatcher.dispatch(
                email_composer.review_verification(
                    review=review, code=code, public_base_url=self.config.PUBLIC_BASE_URL
                )
            )
            return SubmittedReview(review_id=review.id, code=code, notified=notified)
