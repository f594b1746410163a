"""Domain models for the Contact API."""

from .contact import Contact
from .user import User

__all__ = [
    "Contact",
    "User",
]
