"""Tests for the health check service."""

from datetime import datetime

from src.services import health_service


def test_store_reachable(test_db):
    assert health_service.check_store_connection() is True


def test_health_status_payload(test_db):
    status = health_service.get_health_status()

    assert status["store"] is True
    assert status["message"] == health_service.HEALTHY_MESSAGE
    assert status["version"] == "0.1.0"
    assert datetime.fromisoformat(status["timestamp"]).tzinfo is not None


def test_store_unreachable(test_db, broken_store, caplog):
    status = health_service.get_health_status()

    assert status["store"] is False
    assert status["message"] == health_service.DEGRADED_MESSAGE
    assert "check_store_connection: unreachable" in caplog.text
