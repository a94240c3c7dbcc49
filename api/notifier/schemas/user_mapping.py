from datetime import datetime

from pydantic import AliasChoices, BaseModel, Field


# Older clients post ``discord_id``; both names are accepted on input.
def _platform_id_field():
    return Field(
        ...,
        min_length=1,
        max_length=64,
        validation_alias=AliasChoices("platform_id", "discord_id"),
        description="Discord user ID",
    )


class UserMappingCreate(BaseModel):
    username: str = Field(..., min_length=1, max_length=255, description="Overseerr username")
    platform_id: str = _platform_id_field()

    model_config = {"str_strip_whitespace": True}


class UserMappingUpdate(BaseModel):
    platform_id: str = _platform_id_field()

    model_config = {"str_strip_whitespace": True}


class UserMappingResponse(BaseModel):
    id: int
    username: str
    platform_id: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class ResolveResponse(BaseModel):
    username: str
    platform_id: str
