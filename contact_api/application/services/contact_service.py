from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, List

from ...domain.errors import ServiceError
from ...domain.models import Contact, User
from ...domain.ports.persistence import ContactRepository
from ..validation import ContactValidation, ValidationService

logger = logging.getLogger(__name__)

CONTACT_NOT_FOUND_MSG = "Contact is not found"


@dataclass(slots=True)
class ContactPage:
    items: List[Contact]
    current_page: int
    size: int
    total_page: int


class ContactService:
    """Contact management scoped to the authenticated owner."""

    def __init__(self, contact_repository: ContactRepository, validation: ValidationService) -> None:
        self._contacts = contact_repository
        self._validation = validation

    def create(self, user: User, payload: Any) -> Contact:
        request = self._validation.validate(ContactValidation.CREATE, payload)
        logger.debug("ContactService.create(%s)", user.username)
        contact = self._contacts.create_contact(
            username=user.username,
            first_name=request.first_name,
            last_name=request.last_name,
            email=request.email,
            phone=request.phone,
        )
        logger.info("Created contact %s for %s", contact.id, user.username)
        return contact

    def get(self, user: User, contact_id: int) -> Contact:
        return self._require_contact(user, contact_id)

    def update(self, user: User, payload: Any) -> Contact:
        """Replace every field of an existing contact owned by ``user``."""
        request = self._validation.validate(ContactValidation.UPDATE, payload)
        logger.debug("ContactService.update(%s, %s)", user.username, request.id)
        self._require_contact(user, request.id)
        return self._contacts.update_contact(
            username=user.username,
            contact_id=request.id,
            first_name=request.first_name,
            last_name=request.last_name,
            email=request.email,
            phone=request.phone,
        )

    def remove(self, user: User, contact_id: int) -> Contact:
        contact = self._require_contact(user, contact_id)
        self._contacts.delete_contact(user.username, contact_id)
        logger.info("Removed contact %s for %s", contact_id, user.username)
        return contact

    def search(self, user: User, payload: Any) -> ContactPage:
        request = self._validation.validate(ContactValidation.SEARCH, payload)
        items, total = self._contacts.search_contacts(
            user.username,
            name=request.name,
            email=request.email,
            phone=request.phone,
            limit=request.size,
            offset=(request.page - 1) * request.size,
        )
        return ContactPage(
            items=items,
            current_page=request.page,
            size=request.size,
            total_page=math.ceil(total / request.size),
        )

    def _require_contact(self, user: User, contact_id: int) -> Contact:
        contact = self._contacts.get_contact(user.username, contact_id)
        if not contact:
            raise ServiceError.not_found(CONTACT_NOT_FOUND_MSG)
        return contact
