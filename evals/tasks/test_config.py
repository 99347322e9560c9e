"""
Configuration loading and boundary validators.
"""

from datetime import timezone

import pytest

from copyguard.config import ConfigError, ValidationConfig, load_settings, load_validation_config
from copyguard.security import (
    ValidationError,
    validate_category,
    validate_list_size,
    validate_timestamp,
)

ENV_VARS = [
    "COPYGUARD_MAX_QUOTE_LENGTH",
    "COPYGUARD_MAX_SIMILARITY",
    "COPYGUARD_MIN_TRANSFORMATION",
    "COPYGUARD_LEDGER_MAX",
    "COPYGUARD_LEDGER_KEEP",
    "COPYGUARD_REGENERATE_ATTEMPTS",
    "COPYGUARD_AUDIT_CONCURRENCY",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class TestSettings:
    def test_defaults(self):
        assert load_validation_config() == ValidationConfig(15, 0.6, 0.5)
        settings = load_settings()
        assert settings.ledger_max_entries == 1000
        assert settings.ledger_keep_entries == 500
        assert settings.regenerate_attempts == 3

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("COPYGUARD_MAX_QUOTE_LENGTH", "10")
        monkeypatch.setenv("COPYGUARD_MAX_SIMILARITY", "0.7")
        monkeypatch.setenv("COPYGUARD_AUDIT_CONCURRENCY", "8")
        settings = load_settings()
        assert settings.validation.max_quote_length == 10
        assert settings.validation.max_similarity_score == 0.7
        assert settings.audit_concurrency == 8

    def test_malformed_value_falls_back(self, monkeypatch):
        monkeypatch.setenv("COPYGUARD_MAX_QUOTE_LENGTH", "many")
        assert load_validation_config().max_quote_length == 15

    def test_out_of_range_value_raises(self, monkeypatch):
        monkeypatch.setenv("COPYGUARD_MIN_TRANSFORMATION", "1.5")
        with pytest.raises(ConfigError):
            load_validation_config()

    def test_inconsistent_ledger_bounds(self, monkeypatch):
        monkeypatch.setenv("COPYGUARD_LEDGER_KEEP", "2000")
        with pytest.raises(ConfigError):
            load_settings()


class TestBoundaryValidators:
    def test_category(self):
        assert validate_category("  경제 ") == "경제"
        with pytest.raises(ValidationError):
            validate_category("   ")
        with pytest.raises(ValidationError):
            validate_category("경제\x00")

    def test_list_size(self):
        with pytest.raises(ValidationError):
            validate_list_size([1, 2, 3], max_items=2)

    def test_timestamp(self):
        assert validate_timestamp("2025-01-02T03:04:05Z").tzinfo is not None
        assert validate_timestamp("2025-01-02T03:04:05").tzinfo == timezone.utc
        with pytest.raises(ValidationError):
            validate_timestamp("last week")
