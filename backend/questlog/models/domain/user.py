"""User domain model."""

import re
from datetime import datetime, timezone

from pydantic import BaseModel, Field, field_validator

PASSWORD_MIN_LENGTH = 8


def check_password_policy(password: str) -> str:
    """
    Enforce the minimum password strength.

    :param password: Candidate password
    :type password: str
    :return: The unchanged password
    :rtype: str
    :raises ValueError: When the password is too weak
    """
    if len(password) < PASSWORD_MIN_LENGTH:
        raise ValueError(f"Password must be at least {PASSWORD_MIN_LENGTH} characters")
    if not re.search(r"[A-Z]", password):
        raise ValueError("Password must contain at least one uppercase letter")
    if not re.search(r"[a-z]", password):
        raise ValueError("Password must contain at least one lowercase letter")
    if not re.search(r"[0-9]", password):
        raise ValueError("Password must contain at least one number")
    return password


class UserCreate(BaseModel):
    """Registration payload."""
    username: str
    password: str

    @field_validator("username")
    @classmethod
    def username_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Username is required")
        return value

    @field_validator("password")
    @classmethod
    def password_strength(cls, value: str) -> str:
        return check_password_policy(value)


class UserLogin(BaseModel):
    """Login payload. No strength policy: existing passwords are checked as-is."""
    username: str
    password: str


class User(BaseModel):
    """Public view of an account."""
    id: int
    username: str
    created: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class UserRecord(User):
    """Stored account, including the password hash. Never returned to clients."""
    password_hash: str

    def public(self) -> User:
        return User(id=self.id, username=self.username, created=self.created)
