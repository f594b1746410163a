"""Pydantic schemas for contact API responses."""

from typing import Optional

from pydantic import BaseModel

from ....domain.models import Contact


class ContactResponse(BaseModel):
    id: int
    first_name: str
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None

    @classmethod
    def from_contact(cls, contact: Contact) -> "ContactResponse":
        return cls(
            id=contact.id,
            first_name=contact.first_name,
            last_name=contact.last_name,
            email=contact.email,
            phone=contact.phone,
        )
