from abc import ABC, abstractmethod

from src.service.consultation.domain.value_object.slot_month import SlotMonth


class ISlotCounterRepo(ABC):
    """
    Capacity store: one counter row per (year, month).

    Rows are created lazily and never deleted; `consume` is the only
    operation that increments.
    """

    @abstractmethod
    async def get_used(self, *, slot_month: SlotMonth) -> int:
        """Used slots of the month, 0 when the row does not exist yet"""
        pass

    @abstractmethod
    async def consume(self, *, slot_month: SlotMonth, max_slots: int) -> bool:
        """
        Atomically take one slot.

        Single conditional statement `used = used + 1 ... WHERE used < max_slots`;
        returns True iff exactly one row was affected.
        """
        pass

    @abstractmethod
    async def reset(self, *, slot_month: SlotMonth) -> None:
        """Set used = 0, creating the row when missing"""
        pass
