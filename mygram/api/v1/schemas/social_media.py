"""Social media link schemas."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class SocialMediaCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    social_media_url: str = Field(..., min_length=1, max_length=2048)


class SocialMediaUpdate(BaseModel):
    """Partial update. Unset fields are untouched."""

    name: Optional[str] = Field(None, min_length=1, max_length=100)
    social_media_url: Optional[str] = Field(None, min_length=1, max_length=2048)


class SocialMediaResponse(BaseModel):
    id: int
    name: str
    social_media_url: str
    user_id: int
    created_at: datetime
    updated_at: datetime


class SocialMediaUser(BaseModel):
    id: int
    email: str
    username: str


class SocialMediaWithUser(SocialMediaResponse):
    """Link as listed by GET /socialmedias."""

    user: SocialMediaUser
