from abc import ABC, abstractmethod
from typing import List, Optional

from src.service.consultation.domain.entity.review_entity import Review


class IReviewQueryRepo(ABC):
    """Repository interface for the public review read path and the admin queue"""

    @abstractmethod
    async def list_published(
        self, *, limit: int, offset: int, rating: Optional[int] = None
    ) -> List[Review]:
        """Published reviews, newest published_at first"""
        pass

    @abstractmethod
    async def count_published(self, *, rating: Optional[int] = None) -> int:
        pass

    @abstractmethod
    async def rating_totals(self) -> tuple[int, int]:
        """(count, sum of ratings) over all published reviews"""
        pass

    @abstractmethod
    async def list_awaiting_publication(self, *, limit: int) -> List[Review]:
        """Verified, unpublished reviews, oldest verification first"""
        pass
