from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional
from uuid import UUID

from src.service.consultation.domain.entity.review_entity import Review


class IReviewCommandRepo(ABC):
    @abstractmethod
    async def create(self, *, review: Review) -> Review:
        pass

    @abstractmethod
    async def get_by_id(self, *, review_id: UUID) -> Optional[Review]:
        pass

    @abstractmethod
    async def mark_verified(
        self, *, review_id: UUID, code_hash: str, verified_at: datetime
    ) -> bool:
        """
        Conditional `UPDATE ... WHERE id AND status = 'pending' AND code hash matches`.

        Sets verified/verified_at and clears the stored digest. Returns True iff
        one row changed, so a replayed or concurrent second call gets False.
        """
        pass

    @abstractmethod
    async def mark_published(self, *, review_id: UUID, published_at: datetime) -> bool:
        """Conditional `UPDATE ... WHERE id AND status = 'verified'`"""
        pass
