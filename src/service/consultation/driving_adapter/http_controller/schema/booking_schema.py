from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import AliasChoices, BaseModel, ConfigDict, EmailStr, Field


class BookingCreateRequest(BaseModel):
    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            'examples': [
                {
                    'name': 'Anna Schmidt',
                    'email': 'anna@example.com',
                    'discordName': 'anna#1234',
                    'note': 'Career change into data engineering',
                    'startsAt': '2025-03-14T15:00:00+01:00',
                    'duration': 45,
                },
                {
                    'name': 'Ben Meyer',
                    'email': 'ben@example.com',
                    'startsAt': '2025-03-20T10:30:00',
                    'duration': 30,
                },
            ]
        },
    )

    name: str = Field(min_length=1, max_length=100)
    email: EmailStr
    discord_name: Optional[str] = Field(default=None, alias='discordName', max_length=100)
    note: Optional[str] = Field(default=None, max_length=2000)
    starts_at: datetime = Field(alias='startsAt')
    duration: int  # minutes


class BookingCreateResponse(BaseModel):
    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            'example': {
                'bookingId': '01936d8f-5e73-7c4e-a9c5-123456789abc',  # UUID7
                'status': 'new',
                'notified': True,
            }
        },
    )

    booking_id: UUID = Field(alias='bookingId')
    status: str
    notified: bool


class BookingDecisionRequest(BaseModel):
    booking_id: UUID = Field(validation_alias=AliasChoices('booking_id', 'bookingId'))


class BookingDecisionResponse(BaseModel):
    booking_id: UUID
    status: str
    notified: bool


class UpcomingBookingResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: UUID
    name: str
    email: str
    discord_name: Optional[str] = Field(default=None, alias='discordName')
    note: Optional[str] = None
    starts_at: datetime = Field(alias='startsAt')
    duration: int
    status: str
