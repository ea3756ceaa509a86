"""Photo schemas."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class PhotoBase(BaseModel):
    """Fields shared by photo requests and responses."""

    title: str = Field(..., min_length=1, max_length=200)
    caption: str = Field(default="", max_length=2000)
    photo_url: str = Field(..., min_length=1, max_length=2048)


class PhotoCreate(PhotoBase):
    """Request to post a photo. The owner is always the caller."""


class PhotoUpdate(BaseModel):
    """Partial photo update. Unset fields are untouched."""

    title: Optional[str] = Field(None, min_length=1, max_length=200)
    caption: Optional[str] = Field(None, max_length=2000)
    photo_url: Optional[str] = Field(None, min_length=1, max_length=2048)


class PhotoResponse(PhotoBase):
    id: int
    user_id: int
    created_at: datetime
    updated_at: datetime


class PhotoOwner(BaseModel):
    email: str
    username: str


class PhotoWithUser(PhotoResponse):
    """Photo as listed by GET /photos."""

    user: PhotoOwner
