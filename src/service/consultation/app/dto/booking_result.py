import attrs

from src.service.consultation.domain.entity.booking_entity import Booking


@attrs.define(frozen=True)
class BookingResult:
    """
    Outcome of a booking command.

    `notified` is False when any email of the command was not delivered within
    the notification timeout; the booking itself is committed regardless.
    """

    booking: Booking
    notified: bool
