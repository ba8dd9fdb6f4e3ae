"""Tests for login and password hashing."""

import pytest

from src.services import auth_service
from src.services.exceptions import (
    AuthenticationError,
    NotFoundError,
    StoreError,
    ValidationError,
)
from src.services.store_gateway import get_gateway


class TestPasswordHashing:
    """Tests for hash_password and verify_password."""

    def test_round_trip(self):
        encoded = auth_service.hash_password("secret1")

        assert auth_service.verify_password("secret1", encoded)
        assert not auth_service.verify_password("secret2", encoded)

    def test_salted(self):
        assert auth_service.hash_password("secret1") != auth_service.hash_password("secret1")

    def test_uses_configured_iterations(self):
        encoded = auth_service.hash_password("secret1")

        assert encoded.startswith("pbkdf2:sha256:1000$")

    def test_explicit_iterations(self):
        encoded = auth_service.hash_password("secret1", iterations=10)

        assert encoded.startswith("pbkdf2:sha256:10$")
        assert auth_service.verify_password("secret1", encoded)

    @pytest.mark.parametrize(
        "encoded",
        [None, "", "plaintext", "md5$00$00", "pbkdf2:sha256:x$00$00", "pbkdf2:sha256:1$00"],
    )
    def test_malformed_hash_never_matches(self, encoded):
        assert not auth_service.verify_password("secret1", encoded)


class TestLogin:
    """Tests for login."""

    def test_login_success(self, test_db, courier):
        user = auth_service.login("luis@example.com", "secret1")

        assert user["id"] == courier["id"]
        assert user["email"] == "luis@example.com"
        assert user["role"] == "delivery"
        assert "password" not in user
        assert "password_hash" not in user

    def test_login_non_delivery_role(self, test_db, admin_account):
        user = auth_service.login("admin@example.com", "adminpass")

        assert user["role"] == "admin"

    @pytest.mark.parametrize(
        "email,password",
        [
            ("luis@example.com", "wrong-password"),
            ("nobody@example.com", "secret1"),
            ("LUIS@example.com", "secret1"),
            ("", "secret1"),
            ("luis@example.com", ""),
            (None, None),
        ],
    )
    def test_any_mismatch_is_the_same_error(self, test_db, courier, email, password):
        with pytest.raises(AuthenticationError) as exc_info:
            auth_service.login(email, password)

        assert str(exc_info.value) == "Invalid credentials"
        assert exc_info.value.kind == "authentication_error"

    def test_account_without_password_cannot_login(self, test_db):
        from src.services import delivery_person_service

        delivery_person_service.create_delivery_person("Sin Clave", None, "sin@example.com")

        with pytest.raises(AuthenticationError):
            auth_service.login("sin@example.com", "anything")

    def test_password_not_logged(self, test_db, courier, caplog):
        import logging

        with caplog.at_level(logging.DEBUG, logger="parcel_tracker.services"):
            auth_service.login("luis@example.com", "secret1")
            with pytest.raises(AuthenticationError):
                auth_service.login("luis@example.com", "wrong-password")

        assert "secret1" not in caplog.text
        assert "wrong-password" not in caplog.text
        assert "login: success" in caplog.text
        assert "login: rejected" in caplog.text

    def test_store_failure_is_not_masked(self, broken_store):
        with pytest.raises(StoreError) as exc_info:
            auth_service.login("luis@example.com", "secret1")

        assert not isinstance(exc_info.value, AuthenticationError)
        assert exc_info.value.kind == "store_error"


class TestSetPassword:
    """Tests for set_password."""

    def test_set_password_enables_login(self, test_db):
        from src.services import delivery_person_service

        person = delivery_person_service.create_delivery_person("Nuevo", None, "nuevo@example.com")

        result = auth_service.set_password(person["id"], "fresh-pass")

        assert "password_hash" not in result
        assert auth_service.login("nuevo@example.com", "fresh-pass")["id"] == person["id"]

    def test_set_password_replaces_old(self, test_db, courier):
        auth_service.set_password(courier["id"], "rotated1")

        with pytest.raises(AuthenticationError):
            auth_service.login("luis@example.com", "secret1")
        stored = get_gateway().select_by_id("persons", courier["id"])
        assert auth_service.verify_password("rotated1", stored["password_hash"])

    def test_set_password_too_short(self, test_db, courier):
        with pytest.raises(ValidationError):
            auth_service.set_password(courier["id"], "abc")

    def test_set_password_missing_person(self, test_db):
        with pytest.raises(NotFoundError):
            auth_service.set_password(999, "longenough")
