"""Tests for contact management scoped to an owner."""

import pytest

from contact_api.application.services.contact_service import ContactService
from contact_api.domain.errors import ErrorKind, ServiceError


@pytest.fixture
def owner(persistence, hasher):
    return persistence.create_user(username="test", password_hash=hasher.hash("test"), name="test")


@pytest.fixture
def service(persistence, validation) -> ContactService:
    return ContactService(persistence, validation)


class TestContactService:
    def test_create_and_get(self, service: ContactService, owner):
        created = service.create(owner, {"first_name": "Ada", "email": "ada@example.com"})

        fetched = service.get(owner, created.id)

        assert fetched.first_name == "Ada"
        assert fetched.username == "test"
        assert fetched.last_name is None

    def test_missing_contact_is_not_found(self, service: ContactService, owner):
        with pytest.raises(ServiceError) as exc_info:
            service.get(owner, 42)

        assert exc_info.value.kind is ErrorKind.NOT_FOUND

    def test_update_replaces_all_fields(self, service: ContactService, owner):
        created = service.create(owner, {"first_name": "Ada", "phone": "123"})

        updated = service.update(owner, {"id": created.id, "first_name": "Grace"})

        assert updated.first_name == "Grace"
        assert updated.phone is None

    def test_remove_returns_deleted_contact(self, service: ContactService, owner):
        created = service.create(owner, {"first_name": "Ada"})

        removed = service.remove(owner, created.id)

        assert removed.id == created.id
        with pytest.raises(ServiceError):
            service.get(owner, created.id)

    def test_search_pages(self, service: ContactService, owner):
        for index in range(3):
            service.create(owner, {"first_name": f"Ada {index}"})

        page = service.search(owner, {"size": 2, "page": 2})

        assert [contact.first_name for contact in page.items] == ["Ada 2"]
        assert page.total_page == 2
