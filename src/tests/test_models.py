"""Tests for models and the package status transition table."""

import pytest

from src.models import Package, PackageStatus, Person, VALID_TRANSITIONS, is_valid_transition


class TestPackageStatus:
    def test_values_in_lifecycle_order(self):
        assert PackageStatus.values() == ["pending", "in_transit", "delivered", "cancelled"]

    def test_every_status_has_transitions_entry(self):
        assert set(VALID_TRANSITIONS) == set(PackageStatus)

    @pytest.mark.parametrize(
        "current,target",
        [
            (PackageStatus.PENDING, PackageStatus.IN_TRANSIT),
            (PackageStatus.PENDING, PackageStatus.CANCELLED),
            (PackageStatus.IN_TRANSIT, PackageStatus.DELIVERED),
            (PackageStatus.IN_TRANSIT, PackageStatus.CANCELLED),
        ],
    )
    def test_allowed(self, current, target):
        assert is_valid_transition(current, target)

    @pytest.mark.parametrize(
        "current,target",
        [
            (PackageStatus.PENDING, PackageStatus.DELIVERED),
            (PackageStatus.PENDING, PackageStatus.PENDING),
            (PackageStatus.IN_TRANSIT, PackageStatus.PENDING),
            (PackageStatus.DELIVERED, PackageStatus.PENDING),
            (PackageStatus.CANCELLED, PackageStatus.IN_TRANSIT),
        ],
    )
    def test_rejected(self, current, target):
        assert not is_valid_transition(current, target)

    def test_terminal_states(self):
        assert PackageStatus.DELIVERED.is_terminal
        assert PackageStatus.CANCELLED.is_terminal
        assert not PackageStatus.PENDING.is_terminal


class TestModelHelpers:
    def test_to_dict_flattens_enum(self):
        package = Package(destinatario="Ana", direccion="Calle 1", status=PackageStatus.IN_TRANSIT)

        data = package.to_dict()

        assert data["status"] == "in_transit"
        assert data["destinatario"] == "Ana"

    def test_update_from_dict_skips_immutable_columns(self):
        person = Person(name="Luis", email="luis@example.com")

        person.update_from_dict({"id": 9, "created_at": "never", "phone": "555", "bogus": 1})

        assert person.id is None
        assert person.created_at is None
        assert person.phone == "555"

    def test_repr(self):
        assert "Luis" in repr(Person(id=3, name="Luis", role="delivery"))
        assert "in_transit" in repr(
            Package(id=1, destinatario="Ana", status=PackageStatus.IN_TRANSIT)
        )
