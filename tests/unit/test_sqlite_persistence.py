"""Tests for the SQLite credential and contact store."""

import pytest

from contact_api.domain.ports.persistence import DuplicateKeyError


class TestUserStore:
    def test_create_and_find(self, persistence):
        persistence.create_user(username="test", password_hash="hash", name="Test")

        user = persistence.find_user_by_username("test")

        assert user.name == "Test"
        assert user.token is None
        assert persistence.count_users_by_username("test") == 1
        assert persistence.count_users_by_username("other") == 0

    def test_unique_username_is_enforced(self, persistence):
        persistence.create_user(username="test", password_hash="hash", name="Test")

        with pytest.raises(DuplicateKeyError):
            persistence.create_user(username="test", password_hash="hash2", name="Other")

        assert persistence.find_user_by_username("test").password_hash == "hash"

    def test_token_lookup(self, persistence):
        persistence.create_user(username="test", password_hash="hash", name="Test")
        persistence.set_user_token("test", "abc")

        assert persistence.find_user_by_token("abc").username == "test"
        assert persistence.find_user_by_token("nope") is None

        persistence.set_user_token("test", None)

        assert persistence.find_user_by_token("abc") is None

    def test_update_only_given_fields(self, persistence):
        persistence.create_user(username="test", password_hash="hash", name="Test")

        user = persistence.update_user("test", name="Renamed")

        assert user.name == "Renamed"
        assert user.password_hash == "hash"

    def test_update_unknown_user_raises(self, persistence):
        with pytest.raises(ValueError):
            persistence.update_user("ghost", name="Boo")


class TestContactStore:
    def test_contacts_are_scoped_to_owner(self, persistence):
        persistence.create_user(username="a", password_hash="hash", name="A")
        persistence.create_user(username="b", password_hash="hash", name="B")
        contact = persistence.create_contact("a", "Ada", None, None, None)

        assert persistence.get_contact("a", contact.id) is not None
        assert persistence.get_contact("b", contact.id) is None

        persistence.delete_contact("b", contact.id)

        assert persistence.get_contact("a", contact.id) is not None

    def test_search_counts_all_matches(self, persistence):
        persistence.create_user(username="a", password_hash="hash", name="A")
        for index in range(5):
            persistence.create_contact("a", f"Ada {index}", "Lovelace", None, None)

        items, total = persistence.search_contacts("a", name="lace", limit=2, offset=0)

        assert len(items) == 2
        assert total == 5

    @pytest.mark.parametrize("term, expected", [("_", ["a_b"]), ("%", ["50%"]), ("\\", ["c\\d"])])
    def test_search_treats_wildcards_literally(self, persistence, term, expected):
        persistence.create_user(username="a", password_hash="hash", name="A")
        for first_name in ("a_b", "axb", "50%", "c\\d"):
            persistence.create_contact("a", first_name, None, None, None)

        items, total = persistence.search_contacts("a", name=term, limit=10, offset=0)

        assert [item.first_name for item in items] == expected
        assert total == len(expected)
