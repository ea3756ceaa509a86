"""User and token schemas."""

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

USERNAME_PATTERN = r"^[A-Za-z0-9_-]+$"

# bcrypt only looks at the first 72 bytes of a password
PASSWORD_MAX_BYTES = 72


# ============================================================================
# Requests
# ============================================================================


class UserSignUp(BaseModel):
    """Registration request."""

    username: str = Field(
        ...,
        min_length=3,
        max_length=50,
        pattern=USERNAME_PATTERN,
        description="Letters, digits, underscores and hyphens"
    )
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=72)
    dob: Optional[date] = Field(None, description="Date of birth (YYYY-MM-DD)")
    age: Optional[int] = Field(None, ge=0, le=150)

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, v: str) -> str:
        return v.lower()

    @field_validator("password")
    @classmethod
    def validate_password_bytes(cls, v: str) -> str:
        """Reject passwords bcrypt would silently truncate."""
        if len(v.encode("utf-8")) > PASSWORD_MAX_BYTES:
            raise ValueError(f"Password must be at most {PASSWORD_MAX_BYTES} bytes")
        return v


class UserLogin(BaseModel):
    """Login request."""

    email: EmailStr
    password: str = Field(..., min_length=1)

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, v: str) -> str:
        return v.lower()


class UserUpdate(BaseModel):
    """Partial update of the caller's profile. Unset fields are untouched."""

    username: Optional[str] = Field(
        None, min_length=3, max_length=50, pattern=USERNAME_PATTERN
    )
    email: Optional[EmailStr] = None
    dob: Optional[date] = None
    age: Optional[int] = Field(None, ge=0, le=150)

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, v: Optional[str]) -> Optional[str]:
        return v.lower() if v is not None else v


# ============================================================================
# Responses
# ============================================================================


class UserResponse(BaseModel):
    """User as returned by the API. Never carries the password hash."""

    id: int
    username: str
    email: str
    dob: Optional[date] = None
    age: Optional[int] = None
    created_at: datetime
    updated_at: datetime


class TokenClaims(BaseModel):
    """Identity claims carried by an access token.

    Immutable once issued. ``user_id`` is the only claim the ownership
    gate relies on.
    """

    model_config = ConfigDict(frozen=True)

    jti: str
    iss: str
    aud: str
    sub: str
    exp: int
    iat: int
    nbf: int
    user_id: int
    username: str
    dob: Optional[date] = None


class TokenResponse(BaseModel):
    """Body of a successful register or login."""

    token: str
