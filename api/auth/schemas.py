"""
Account operation schemas (inputs and envelopes).
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated

from pydantic import AfterValidator, Field, StringConstraints

from core.schemas import CoreOutput, WireModel

# bcrypt rejects (5.x) or silently truncates (4.x) anything past 72 bytes.
PASSWORD_MAX_BYTES = 72


def _check_password_bytes(value: str) -> str:
    if len(value.encode("utf-8")) > PASSWORD_MAX_BYTES:
        raise ValueError(f"Password must be at most {PASSWORD_MAX_BYTES} bytes in UTF-8.")
    return value


Email = Annotated[str, StringConstraints(strip_whitespace=True, min_length=3, max_length=320)]
Password = Annotated[str, Field(min_length=1), AfterValidator(_check_password_bytes)]


class UserRole(str, Enum):
    HOST = "Host"
    LISTENER = "Listener"


class UserOut(WireModel):
    id: int
    email: str
    role: UserRole


class CreateAccountInput(WireModel):
    email: Email
    password: Password
    role: UserRole


class CreateAccountOutput(CoreOutput):
    pass


class LoginInput(WireModel):
    email: Email
    password: Password


class LoginOutput(CoreOutput):
    token: str | None = None


class SeeProfileInput(WireModel):
    user_id: int


class UserProfileOutput(CoreOutput):
    user: UserOut | None = None


class EditProfileInput(WireModel):
    email: Email | None = None
    password: Password | None = None


class EditProfileOutput(CoreOutput):
    user: UserOut | None = None


class MeOutput(CoreOutput):
    user: UserOut | None = None
