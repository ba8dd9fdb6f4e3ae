"""Unit tests for the delivery person directory."""

import pytest

from src.services import delivery_person_service
from src.services.auth_service import verify_password
from src.services.exceptions import NotFoundError, StoreError, ValidationError
from src.services.store_gateway import get_gateway


class TestCreateDeliveryPerson:
    """Tests for create_delivery_person."""

    def test_create_success(self, test_db):
        person = delivery_person_service.create_delivery_person(
            "Marta", "555-0202", "marta@example.com"
        )

        assert person["id"] is not None
        assert person["name"] == "Marta"
        assert person["role"] == "delivery"
        assert person["status"] == "available"
        assert "password_hash" not in person
        assert "password" not in person

    def test_password_stored_as_hash(self, test_db):
        person = delivery_person_service.create_delivery_person(
            "Marta", None, "marta@example.com", password="secret1"
        )

        stored = get_gateway().select_by_id("persons", person["id"])
        assert stored["password_hash"] != "secret1"
        assert stored["password_hash"].startswith("pbkdf2:sha256:")
        assert verify_password("secret1", stored["password_hash"])

    @pytest.mark.parametrize(
        "name,email,field",
        [
            ("", "marta@example.com", "name"),
            ("Marta", "", "email"),
            ("Marta", "not-an-email", "email"),
        ],
    )
    def test_create_validation(self, test_db, name, email, field):
        with pytest.raises(ValidationError) as exc_info:
            delivery_person_service.create_delivery_person(name, None, email)

        assert exc_info.value.field == field

    def test_short_password_rejected(self, test_db):
        with pytest.raises(ValidationError) as exc_info:
            delivery_person_service.create_delivery_person(
                "Marta", None, "marta@example.com", password="abc"
            )

        assert exc_info.value.field == "password"

    def test_duplicate_email_rejected(self, test_db, courier):
        with pytest.raises(ValidationError) as exc_info:
            delivery_person_service.create_delivery_person("Otro", None, courier["email"])

        assert "already exists" in str(exc_info.value)

    def test_concurrent_duplicate_email_rejected(self, test_db, courier, monkeypatch):
        """The unique constraint still reports a duplicate the pre-check missed."""
        monkeypatch.setattr(get_gateway(), "count", lambda table, filters=None: 0)

        with pytest.raises(ValidationError) as exc_info:
            delivery_person_service.create_delivery_person("Otro", None, courier["email"])

        assert exc_info.value.field == "email"
        assert "already exists" in str(exc_info.value)
        assert len(delivery_person_service.list_delivery_persons()) == 1

    def test_store_failure_propagates(self, broken_store):
        with pytest.raises(StoreError):
            delivery_person_service.create_delivery_person("Marta", None, "marta@example.com")


class TestListDeliveryPersons:
    """Tests for list_delivery_persons."""

    def test_lists_only_delivery_role(self, test_db, courier, admin_account):
        persons = delivery_person_service.list_delivery_persons()

        assert [p["id"] for p in persons] == [courier["id"]]

    def test_never_includes_credentials(self, test_db, courier):
        delivery_person_service.create_delivery_person(
            "Ana Ruiz", "555-0303", "ana@example.com", password="another1"
        )

        persons = delivery_person_service.list_delivery_persons()

        assert len(persons) == 2
        for person in persons:
            assert "password" not in person
            assert "password_hash" not in person

    def test_ordered_by_name(self, test_db):
        for name, email in [("Zoe", "z@example.com"), ("Adrián", "a@example.com")]:
            delivery_person_service.create_delivery_person(name, None, email)

        names = [p["name"] for p in delivery_person_service.list_delivery_persons()]

        assert names == ["Adrián", "Zoe"]

    def test_empty_directory(self, test_db):
        assert delivery_person_service.list_delivery_persons() == []


class TestGetDeliveryPerson:
    """Tests for get_delivery_person and is_delivery_person."""

    def test_get(self, test_db, courier):
        assert delivery_person_service.get_delivery_person(courier["id"]) == courier

    def test_non_delivery_account_is_not_found(self, test_db, admin_account):
        with pytest.raises(NotFoundError):
            delivery_person_service.get_delivery_person(admin_account["id"])

        assert not delivery_person_service.is_delivery_person(admin_account["id"])

    def test_missing(self, test_db):
        assert not delivery_person_service.is_delivery_person(404)
