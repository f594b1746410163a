"""Shared fixtures: an isolated SQLite database per test and a running app."""

from pathlib import Path
from typing import Iterator

import pytest
from fastapi.testclient import TestClient

from contact_api.application.security import PasswordHasher, TokenIssuer
from contact_api.application.validation import ValidationService
from contact_api.core.app_factory import create_application
from contact_api.core.config import Settings
from contact_api.core.container import ApplicationContainer
from contact_api.domain.models import Contact, User
from contact_api.infrastructure.persistence.sqlite import SQLitePersistence


@pytest.fixture
def settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Settings:
    monkeypatch.setenv("DATABASE_PATH", str(tmp_path / "app.db"))
    monkeypatch.setenv("BCRYPT_ROUNDS", "4")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    return Settings()


@pytest.fixture
def client(settings: Settings) -> Iterator[TestClient]:
    app = create_application(settings)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def container(client: TestClient) -> ApplicationContainer:
    return client.app.state.container


@pytest.fixture
def persistence(tmp_path: Path) -> Iterator[SQLitePersistence]:
    store = SQLitePersistence(tmp_path / "unit.db")
    yield store
    store.close()


@pytest.fixture
def hasher() -> PasswordHasher:
    return PasswordHasher(rounds=4)


@pytest.fixture
def token_issuer() -> TokenIssuer:
    return TokenIssuer()


@pytest.fixture
def validation() -> ValidationService:
    return ValidationService()


class DataSeeder:
    """Creates the canonical ``test`` user (password ``test``, token ``test``)."""

    def __init__(self, container: ApplicationContainer) -> None:
        self._persistence = container.persistence
        self._hasher = container.password_hasher

    def create_user(self) -> User:
        self._persistence.create_user(
            username="test",
            password_hash=self._hasher.hash("test"),
            name="test",
        )
        return self._persistence.set_user_token("test", "test")

    def get_user(self) -> User:
        user = self._persistence.find_user_by_username("test")
        assert user is not None
        return user

    def create_contact(self, **overrides) -> Contact:
        values = {
            "first_name": "test",
            "last_name": "test",
            "email": "test@example.com",
            "phone": "9999",
        }
        values.update(overrides)
        return self._persistence.create_contact(username="test", **values)


@pytest.fixture
def seeder(container: ApplicationContainer) -> DataSeeder:
    return DataSeeder(container)
