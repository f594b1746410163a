"""Pydantic schemas for user API responses."""

from typing import Optional

from pydantic import BaseModel

from ....domain.models import User


class UserResponse(BaseModel):
    """Public view of a user; password hashes are never part of it."""

    username: str
    name: str
    token: Optional[str] = None

    @classmethod
    def from_user(cls, user: User, include_token: bool = False) -> "UserResponse":
        return cls(
            username=user.username,
            name=user.name,
            token=user.token if include_token else None,
        )
