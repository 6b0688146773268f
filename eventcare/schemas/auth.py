"""Authentication schemas."""

import re
from typing import Annotated

from pydantic import AfterValidator, BaseModel, Field


def validate_email_lenient(v: str) -> str:
    """Validate email with lenient rules that allow .local domains."""
    if not v or "@" not in v:
        raise ValueError("Invalid email address")
    pattern = r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$"
    if not re.match(pattern, v):
        raise ValueError("Invalid email address format")
    return v.lower()


LenientEmail = Annotated[str, AfterValidator(validate_email_lenient)]


class LoginRequest(BaseModel):
    """Staff login request with email and password."""

    email: LenientEmail
    password: str = Field(min_length=8, max_length=128)


class TokenResponse(BaseModel):
    """JWT token response."""

    access_token: str
    token_type: str = "bearer"
    expires_in: int  # seconds
