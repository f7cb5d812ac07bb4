from enum import StrEnum


class BookingStatus(StrEnum):
    NEW = 'new'
    CONFIRMED = 'confirmed'
    REJECTED = 'rejected'
