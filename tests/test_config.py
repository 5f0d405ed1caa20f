"""
Tests for configuration
"""

import pytest
from pydantic import ValidationError

from booking_reconciler.config import (
    Config,
    ReconciliationConfig,
    ReservationAPIConfig,
)


class TestReservationAPIConfig:
    """Test reservation API settings"""

    def test_defaults(self):
        settings = ReservationAPIConfig()
        assert settings.token_max_attempts == 10
        assert len(settings.identities) == 3

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("RESERVATION_API_TOKEN_MAX_ATTEMPTS", "4")
        monkeypatch.setenv("RESERVATION_API_IDENTITIES", '["ops@example.com", "desk@example.com"]')

        settings = ReservationAPIConfig()

        assert settings.token_max_attempts == 4
        assert settings.identities == ["ops@example.com", "desk@example.com"]

    def test_invalid_identity_rejected(self):
        with pytest.raises(ValidationError):
            ReservationAPIConfig(identities=["not-an-email"])

    def test_empty_identities_rejected(self):
        with pytest.raises(ValidationError):
            ReservationAPIConfig(identities=[])


class TestConfig:
    """Test aggregated configuration"""

    def test_reconciliation_defaults(self):
        settings = ReconciliationConfig()
        assert settings.timezone == "Asia/Kolkata"
        assert settings.sheet_name == "Sheet1"

    def test_environment_flags(self, monkeypatch):
        monkeypatch.setenv("SERVER_ENVIRONMENT", "production")
        settings = Config()
        assert settings.is_production
        assert not settings.is_development
