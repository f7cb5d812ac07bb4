from datetime import datetime, timezone
from typing import Self
from uuid import UUID

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import VerificationFailedError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.consultation_metrics import metrics
from src.service.consultation.domain.value_object.verification_code import (
    hash_verification_code,
    verification_code_matches,
)


class VerifyReviewUseCase:
    """
    pending -> verified, at most once per review.

    Unknown id, wrong/expired/reused code all end in the same
    VerificationFailedError.
    """

    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls, uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work])
    ) -> Self:
        return cls(uow=uow)

    @staticmethod
    def _parse_id(review_id: UUID | str) -> UUID | None:
        if isinstance(review_id, UUID):
            return review_id
        try:
            return UUID(str(review_id))
        except ValueError:
            return None

    def _fail(self, reason: str, review_id: object) -> VerificationFailedError:
        metrics.record_review_transition(transition='verify', success=False)
        # Reason only goes to the log, the caller gets the uniform error
        Logger.base.info(f'🔑 [REVIEW] verification of {review_id} refused: {reason}')
        return VerificationFailedError()

    @Logger.io
    async def verify_review(self, *, review_id: UUID | str, code: str) -> None:
        with self.tracer.start_as_current_span(
            'use_case.verify_review', attributes={'review.id': str(review_id)}
        ):
            parsed_id = self._parse_id(review_id)
            if parsed_id is None:
                raise self._fail('malformed id', review_id)

            now = datetime.now(timezone.utc)
            async with self.uow:
                review = await self.uow.review_command_repo.get_by_id(review_id=parsed_id)
                if review is None:
                    raise self._fail('unknown review', parsed_id)
                if not review.is_verification_open(now=now):
                    raise self._fail(f'not open (status={review.status})', parsed_id)
                code_hash = review.verification_code_hash
                if not verification_code_matches(code=code, code_hash=code_hash):
                    raise self._fail('code mismatch', parsed_id)

                # Conditional on the digest: a concurrent replay finds no row
                changed = await self.uow.review_command_repo.mark_verified(
                    review_id=parsed_id, code_hash=hash_verification_code(code), verified_at=now
                )
                if not changed:
                    raise self._fail('lost race to another verification', parsed_id)
                await self.uow.commit()

            metrics.record_review_transition(transition='verify', success=True)
            Logger.base.info(f'✅ [REVIEW] {parsed_id} verified')
