from datetime import datetime, timezone, tzinfo
import re
from typing import Iterable, Optional
from uuid import UUID

import attrs
import uuid_utils

from src.platform.exception.exceptions import ValidationError
from src.platform.logging.loguru_io import Logger
from src.service.consultation.domain.enum.booking_status import BookingStatus
from src.service.consultation.domain.value_object.slot_month import SlotMonth


EMAIL_PATTERN = re.compile(r'^[^@\s]+@[^@\s]+\.[^@\s]+$')
NAME_MAX_LENGTH = 100
NOTE_MAX_LENGTH = 2000


def validate_email(email: str) -> str:
    email = (email or '').strip()
    if not email:
        raise ValidationError('email is required')
    if not EMAIL_PATTERN.match(email):
        raise ValidationError('email is not a valid address')
    return email


def validate_name(name: str) -> str:
    name = (name or '').strip()
    if not name:
        raise ValidationError('name is required')
    if len(name) > NAME_MAX_LENGTH:
        raise ValidationError(f'name must be at most {NAME_MAX_LENGTH} characters')
    return name


@attrs.define
class Booking:
    id: UUID
    name: str
    email: str
    starts_at: datetime
    duration_minutes: int
    discord_name: Optional[str] = None
    note: Optional[str] = None
    status: BookingStatus = BookingStatus.NEW
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    @Logger.io
    def create(
        cls,
        *,
        name: str,
        email: str,
        starts_at: datetime,
        duration_minutes: int,
        allowed_durations: Iterable[int],
        business_tz: tzinfo,
        discord_name: Optional[str] = None,
        note: Optional[str] = None,
    ) -> 'Booking':
        name = validate_name(name)
        email = validate_email(email)

        allowed = sorted(allowed_durations)
        if isinstance(duration_minutes, bool) or duration_minutes not in allowed:
            raise ValidationError(f'duration must be one of {allowed} minutes')

        if starts_at is None:
            raise ValidationError('startsAt is required')
        # Naive timestamps are wall-clock time of the business
        if starts_at.tzinfo is None:
            starts_at = starts_at.replace(tzinfo=business_tz)

        note = (note or '').strip() or None
        if note and len(note) > NOTE_MAX_LENGTH:
            raise ValidationError(f'note must be at most {NOTE_MAX_LENGTH} characters')

        now = datetime.now(timezone.utc)
        return cls(
            id=UUID(str(uuid_utils.uuid7())),
            name=name,
            email=email,
            discord_name=(discord_name or '').strip() or None,
            note=note,
            starts_at=starts_at.astimezone(timezone.utc),
            duration_minutes=duration_minutes,
            status=BookingStatus.NEW,
            created_at=now,
            updated_at=now,
        )

    def slot_month(self, *, business_tz: tzinfo) -> SlotMonth:
        return SlotMonth.of(moment=self.starts_at, tz=business_tz)
