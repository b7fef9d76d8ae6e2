"""
================================================================================
User Test Data
================================================================================

Immutable value records for login and registration forms, plus unique
email generation for registration cases.

================================================================================
"""

from __future__ import annotations

import time
import uuid
from dataclasses import dataclass, replace


@dataclass(frozen=True)
class UserCredentials:
    """Login form input."""
    email: str
    password: str

    def __repr__(self) -> str:
        return f"UserCredentials(email={self.email!r}, password='***')"


@dataclass(frozen=True)
class RegistrationData:
    """Registration form input."""
    first_name: str
    last_name: str
    email: str
    password: str
    confirm_password: str
    gender: str = "male"

    def __post_init__(self) -> None:
        if self.gender not in ("male", "female"):
            raise ValueError(f"Unsupported gender option: {self.gender}")

    def __repr__(self) -> str:
        return (
            f"RegistrationData(first_name={self.first_name!r}, "
            f"last_name={self.last_name!r}, email={self.email!r}, "
            f"gender={self.gender!r})"
        )

    @classmethod
    def for_account(
        cls,
        first_name: str,
        last_name: str,
        email: str,
        password: str,
    ) -> "RegistrationData":
        """Registration data whose confirmation matches the password."""
        return cls(first_name, last_name, email, password, confirm_password=password)

    @property
    def credentials(self) -> UserCredentials:
        return UserCredentials(self.email, self.password)

    def with_email(self, email: str) -> "RegistrationData":
        return replace(self, email=email)


def unique_email(prefix: str = "testuser", domain: str = "example.com") -> str:
    """
    Email address never used by a previous run.

    Millisecond timestamp plus a short random suffix so parallel workers
    starting in the same millisecond still get distinct addresses.
    """
    timestamp = int(time.time() * 1000)
    return f"{prefix}{timestamp}{uuid.uuid4().hex[:4]}@{domain}"


__all__ = [
    "RegistrationData",
    "UserCredentials",
    "unique_email",
]
