"""Tests for password hashing and token issuing."""

import uuid

from contact_api.application.security import PasswordHasher, TokenIssuer


class TestPasswordHasher:
    def test_hash_is_not_plaintext(self, hasher: PasswordHasher):
        assert hasher.hash("secret") != "secret"

    def test_hash_is_salted(self, hasher: PasswordHasher):
        assert hasher.hash("secret") != hasher.hash("secret")

    def test_verify_accepts_matching_password(self, hasher: PasswordHasher):
        assert hasher.verify("secret", hasher.hash("secret")) is True

    def test_verify_rejects_wrong_password(self, hasher: PasswordHasher):
        assert hasher.verify("wrong", hasher.hash("secret")) is False

    def test_verify_returns_false_for_malformed_hash(self, hasher: PasswordHasher):
        assert hasher.verify("secret", "not-a-bcrypt-hash") is False

    def test_handles_passwords_longer_than_bcrypt_limit(self, hasher: PasswordHasher):
        password = "é" * 100

        assert hasher.verify(password, hasher.hash(password)) is True

    def test_uses_configured_cost(self):
        assert PasswordHasher(rounds=5).hash("secret").startswith("$2b$05$")


class TestTokenIssuer:
    def test_issues_uuid_tokens(self, token_issuer: TokenIssuer):
        token = token_issuer.issue()

        assert uuid.UUID(token).version == 4

    def test_tokens_are_unique(self, token_issuer: TokenIssuer):
        tokens = {token_issuer.issue() for _ in range(1000)}

        assert len(tokens) == 1000
