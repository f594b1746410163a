"""User domain model for account management and token authentication."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(slots=True, frozen=True)
class User:
    """
    Account record as held by the credential store.

    Attributes:
        username: Unique, immutable login name
        password_hash: bcrypt hash of the current password
        name: Display name
        token: Opaque session token, ``None`` while logged out
        created_at: Account creation timestamp
        updated_at: Last update timestamp
    """

    username: str
    password_hash: str
    name: str
    token: Optional[str]
    created_at: datetime
    updated_at: datetime

    def __repr__(self) -> str:
        return f"<User username={self.username} name={self.name} logged_in={self.token is not None}>"
