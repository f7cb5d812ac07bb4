from enum import StrEnum

import attrs


class EmailKind(StrEnum):
    BOOKING_RECEIVED = 'booking_received'
    BOOKING_OPERATOR_ALERT = 'booking_operator_alert'
    BOOKING_DECIDED = 'booking_decided'
    REVIEW_VERIFICATION = 'review_verification'


@attrs.define(frozen=True)
class EmailMessage:
    kind: EmailKind
    to: str
    subject: str
    html: str
