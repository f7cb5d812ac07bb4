from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from src.service.consultation.domain.entity.booking_entity import Booking


class IBookingQueryRepo(ABC):
    """Repository interface for booking read operations"""

    @abstractmethod
    async def get_by_id(self, *, booking_id: UUID) -> Optional[Booking]:
        pass

    @abstractmethod
    async def list_upcoming(self, *, since: datetime, limit: int) -> List[Booking]:
        """Bookings in status new/confirmed starting at or after `since`, soonest first"""
        pass
