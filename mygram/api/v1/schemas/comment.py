"""Comment schemas."""

from datetime import datetime

from pydantic import BaseModel, Field


class CommentCreate(BaseModel):
    """Request to comment on a photo."""

    message: str = Field(..., min_length=1, max_length=2000)
    photo_id: int = Field(..., gt=0)


class CommentUpdate(BaseModel):
    """Only the message of a comment can change."""

    message: str = Field(..., min_length=1, max_length=2000)


class CommentResponse(BaseModel):
    id: int
    message: str
    photo_id: int
    user_id: int
    created_at: datetime
    updated_at: datetime


class CommentUser(BaseModel):
    id: int
    email: str
    username: str


class CommentPhoto(BaseModel):
    id: int
    title: str
    caption: str
    photo_url: str
    user_id: int


class CommentWithRelations(CommentResponse):
    """Comment as listed by GET /comments, with its author and photo."""

    user: CommentUser
    photo: CommentPhoto
