from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field, SecretStr


class ReviewCreateRequest(BaseModel):
    model_config = {
        'json_schema_extra': {
            'example': {
                'name': 'Anna Schmidt',
                'email': 'anna@example.com',
                'rating': 5,
                'title': 'Very helpful',
                'body': 'Clear advice and concrete next steps for my application.',
            }
        },
    }

    name: str = Field(min_length=1, max_length=100)
    email: EmailStr
    rating: int = Field(ge=1, le=5)
    title: Optional[str] = Field(default=None, max_length=200)
    body: str = Field(max_length=5000)


class ReviewCreateResponse(BaseModel):
    review_id: UUID
    code: str
    notified: bool


class ReviewVerifyRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    # Plain unbounded strings: a malformed id or code must fail like any other bad verification
    review_id: str = Field(alias='reviewId')
    code: str


class ReviewPublishRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    review_id: UUID = Field(alias='reviewId')
    admin_password: SecretStr = Field(alias='adminPassword')


class SuccessResponse(BaseModel):
    success: bool = True


class ReviewPublishResponse(BaseModel):
    success: bool = True
    review_id: UUID
    published_at: datetime


class PublishedReviewResponse(BaseModel):
    id: UUID
    display_name: str
    rating: int
    title: Optional[str] = None
    body: str
    published_at: datetime


class RatingSummaryResponse(BaseModel):
    model_config = {'json_schema_extra': {'example': {'count': 4, 'average': 4.3}}}

    count: int
    average: Optional[float] = None


class ReviewListResponse(BaseModel):
    items: List[PublishedReviewResponse]
    total: int
    count: int
    average: Optional[float] = None


class PendingReviewResponse(BaseModel):
    id: UUID
    name: str
    email: str
    rating: int
    title: Optional[str] = None
    body: str
    verified_at: Optional[datetime] = None
