from enum import StrEnum


class ReviewStatus(StrEnum):
    PENDING = 'pending'
    VERIFIED = 'verified'
    PUBLISHED = 'published'
