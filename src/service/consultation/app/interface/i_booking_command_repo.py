from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from src.service.consultation.domain.entity.booking_entity import Booking
from src.service.consultation.domain.enum.booking_status import BookingStatus


class IBookingCommandRepo(ABC):
    @abstractmethod
    async def create(self, *, booking: Booking) -> Booking:
        pass

    @abstractmethod
    async def decide_if_new(self, *, booking_id: UUID, status: BookingStatus) -> Optional[Booking]:
        """
        Conditional `UPDATE ... WHERE id = :id AND status = 'new'`.

        Returns the updated booking, or None when no row matched (unknown id or
        already decided).
        """
        pass

    @abstractmethod
    async def exists(self, *, booking_id: UUID) -> bool:
        pass
