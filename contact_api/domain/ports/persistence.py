from __future__ import annotations

from typing import List, Optional, Protocol, Tuple

from ..models import Contact, User


class DuplicateKeyError(Exception):
    """Raised by a store when a write violates a unique key."""


class UserRepository(Protocol):
    """Credential store keyed by username."""

    def find_user_by_username(self, username: str) -> Optional[User]:
        ...

    def find_user_by_token(self, token: str) -> Optional[User]:
        ...

    def count_users_by_username(self, username: str) -> int:
        ...

    def create_user(self, username: str, password_hash: str, name: str) -> User:
        """Persist a new user with no token. Raises DuplicateKeyError if the username exists."""
        ...

    def update_user(
        self,
        username: str,
        *,
        name: Optional[str] = None,
        password_hash: Optional[str] = None,
    ) -> User:
        ...

    def set_user_token(self, username: str, token: Optional[str]) -> User:
        ...


class ContactRepository(Protocol):
    """Per-user contact storage."""

    def create_contact(
        self,
        username: str,
        first_name: str,
        last_name: Optional[str],
        email: Optional[str],
        phone: Optional[str],
    ) -> Contact:
        ...

    def get_contact(self, username: str, contact_id: int) -> Optional[Contact]:
        ...

    def update_contact(
        self,
        username: str,
        contact_id: int,
        first_name: str,
        last_name: Optional[str],
        email: Optional[str],
        phone: Optional[str],
    ) -> Contact:
        ...

    def delete_contact(self, username: str, contact_id: int) -> None:
        ...

    def search_contacts(
        self,
        username: str,
        *,
        name: Optional[str] = None,
        email: Optional[str] = None,
        phone: Optional[str] = None,
        limit: int,
        offset: int,
    ) -> Tuple[List[Contact], int]:
        """Return one page of matching contacts together with the total match count."""
        ...


class PersistenceGateway(
    UserRepository,
    ContactRepository,
    Protocol,
):
    """Composite gateway combining every persistence concern used by the app."""

    def close(self) -> None:
        ...
