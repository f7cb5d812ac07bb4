from datetime import datetime, tzinfo

import attrs

from src.platform.exception.exceptions import ValidationError


def _validate_month(instance: 'SlotMonth', attribute: attrs.Attribute, value: int) -> None:
    if not 1 <= value <= 12:
        raise ValidationError(f'month must be between 1 and 12, got {value}')


def _validate_year(instance: 'SlotMonth', attribute: attrs.Attribute, value: int) -> None:
    if not 2000 <= value <= 9999:
        raise ValidationError(f'year out of range: {value}')


@attrs.frozen
class SlotMonth:
    """Calendar month that owns one capacity counter"""

    year: int = attrs.field(validator=_validate_year)
    month: int = attrs.field(validator=_validate_month)

    @classmethod
    def of(cls, *, moment: datetime, tz: tzinfo) -> 'SlotMonth':
        """
        Month a moment falls into, seen from the business time zone.

        Naive datetimes are taken as wall-clock time in `tz`.
        """
        local = moment.replace(tzinfo=tz) if moment.tzinfo is None else moment.astimezone(tz)
        return cls(year=local.year, month=local.month)

    @classmethod
    def current(cls, *, tz: tzinfo) -> 'SlotMonth':
        now = datetime.now(tz)
        return cls(year=now.year, month=now.month)

    def __str__(self) -> str:
        return f'{self.year:04d}-{self.month:02d}'

    @classmethod
    def resolve(cls, *, year: int | None, month: int | None, tz: tzinfo) -> 'SlotMonth':
        """Explicit month when both parts are given, the current month when neither is"""
        if year is None and month is None:
            return cls.current(tz=tz)
        if year is None or month is None:
            raise ValidationError('year and month must be given together')
        return cls(year=year, month=month)
