from datetime import datetime, timedelta, timezone
import re
from typing import Optional
from uuid import UUID

import attrs
import uuid_utils

from src.platform.exception.exceptions import ValidationError
from src.platform.logging.loguru_io import Logger
from src.service.consultation.domain.entity.booking_entity import validate_email, validate_name
from src.service.consultation.domain.enum.review_status import ReviewStatus


URL_LIKE_PATTERN = re.compile(r'(?:https?://|www\.)\S+', re.IGNORECASE)
MIN_BODY_LENGTH = 10
MAX_BODY_LENGTH = 5000
MAX_URLS_IN_BODY = 2
TITLE_MAX_LENGTH = 200


def count_url_like(text: str) -> int:
    return len(URL_LIKE_PATTERN.findall(text))


def display_name(name: str) -> str:
    """'Anna Maria Schmidt' -> 'Anna S.'; single names are shown as given"""
    parts = name.split()
    if not parts:
        return 'Anonymous'
    if len(parts) == 1:
        return parts[0]
    return f'{parts[0]} {parts[-1][0].upper()}.'


@attrs.define
class Review:
    id: UUID
    name: str
    email: str
    rating: int
    body: str
    title: Optional[str] = None
    status: ReviewStatus = ReviewStatus.PENDING
    verification_code_hash: Optional[str] = None
    verification_expires_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    verified_at: Optional[datetime] = None
    published_at: Optional[datetime] = None

    @classmethod
    @Logger.io
    def create(
        cls,
        *,
        name: str,
        email: str,
        rating: int,
        body: str,
        verification_code_hash: str,
        verification_ttl: timedelta,
        title: Optional[str] = None,
    ) -> 'Review':
        name = validate_name(name)
        email = validate_email(email)

        if isinstance(rating, bool) or not isinstance(rating, int) or not 1 <= rating <= 5:
            raise ValidationError('rating must be an integer between 1 and 5')

        body = (body or '').strip()
        if len(body) < MIN_BODY_LENGTH:
            raise ValidationError(f'review text must be at least {MIN_BODY_LENGTH} characters')
        if len(body) > MAX_BODY_LENGTH:
            raise ValidationError(f'review text must be at most {MAX_BODY_LENGTH} characters')
        if count_url_like(body) > MAX_URLS_IN_BODY:
            raise ValidationError(f'review text may contain at most {MAX_URLS_IN_BODY} links')

        title = (title or '').strip() or None
        if title and len(title) > TITLE_MAX_LENGTH:
            raise ValidationError(f'title must be at most {TITLE_MAX_LENGTH} characters')

        now = datetime.now(timezone.utc)
        return cls(
            id=UUID(str(uuid_utils.uuid7())),
            name=name,
            email=email,
            rating=rating,
            title=title,
            body=body,
            status=ReviewStatus.PENDING,
            verification_code_hash=verification_code_hash,
            verification_expires_at=now + verification_ttl,
            created_at=now,
        )

    @property
    def display_name(self) -> str:
        return display_name(self.name)

    def is_verification_open(self, *, now: datetime) -> bool:
        """Pending, holding a code digest, and not past its expiry"""
        if self.status != ReviewStatus.PENDING or not self.verification_code_hash:
            return False
        return self.verification_expires_at is None or now < self.verification_expires_at
