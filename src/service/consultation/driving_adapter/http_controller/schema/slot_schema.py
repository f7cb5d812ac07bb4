from typing import Optional

from pydantic import AliasChoices, BaseModel, Field, SecretStr


class SlotStateResponse(BaseModel):
    model_config = {
        'json_schema_extra': {
            'example': {'remaining': 3, 'max_slots': 5, 'year': 2025, 'month': 3}
        },
    }

    remaining: int
    max_slots: int
    year: int
    month: int


class SlotResetRequest(BaseModel):
    model_config = {
        'json_schema_extra': {'example': {'adminPass': 'admin-secret', 'year': 2025, 'month': 3}},
    }

    admin_pass: SecretStr = Field(validation_alias=AliasChoices('adminPass', 'adminPassword'))
    year: Optional[int] = Field(default=None, ge=2000, le=9999)
    month: Optional[int] = Field(default=None, ge=1, le=12)


class SlotResetResponse(BaseModel):
    success: bool
    message: str
    remaining: int
