from datetime import datetime
from typing import Annotated, Optional

from pydantic import BeforeValidator, EmailStr, Field

from goalslayer.schemas.base import CamelModel


def _normalize_email(v):
    # Stored lower-cased; EmailStr alone keeps the local part's case
    return v.strip().lower() if isinstance(v, str) else v


Email = Annotated[EmailStr, BeforeValidator(_normalize_email)]


class UserRead(CamelModel):
    """Public view of a user; never carries the password hash."""

    id: str
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    profile_image_url: Optional[str] = None
    email_verified: bool = False
    created_at: Optional[datetime] = None


class RegisterRequest(CamelModel):
    email: Email
    password: str = Field(min_length=8, max_length=128)
    first_name: Optional[str] = Field(default=None, max_length=255)
    last_name: Optional[str] = Field(default=None, max_length=255)


class LoginRequest(CamelModel):
    email: Email
    password: str = Field(min_length=1)


class AuthResponse(CamelModel):
    user: UserRead
    token: str
