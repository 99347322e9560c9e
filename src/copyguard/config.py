"""
Configuration -- thresholds and runtime settings loaded from the environment.

Configuration via environment:
  COPYGUARD_MAX_QUOTE_LENGTH=15        verbatim window / longest-run limit
  COPYGUARD_MAX_SIMILARITY=0.6         similarity score limit
  COPYGUARD_MIN_TRANSFORMATION=0.5     required share of rewritten vocabulary
  COPYGUARD_LEDGER_MAX=1000            violation ledger bound
  COPYGUARD_LEDGER_KEEP=500            entries kept when the bound is exceeded
  COPYGUARD_REGENERATE_ATTEMPTS=3      summarizer attempts per regeneration
  COPYGUARD_AUDIT_CONCURRENCY=4        parallel validations during an audit

Malformed numbers fall back to the defaults with a warning. Well-formed but
out-of-range values raise ConfigError.
"""

import logging
import os
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)

DEFAULT_MAX_QUOTE_LENGTH = 15
DEFAULT_MAX_SIMILARITY_SCORE = 0.6
DEFAULT_MIN_TRANSFORMATION_RATIO = 0.5
DEFAULT_LEDGER_MAX = 1000
DEFAULT_LEDGER_KEEP = 500
DEFAULT_REGENERATE_ATTEMPTS = 3
DEFAULT_AUDIT_CONCURRENCY = 4


class ConfigError(ValueError):
    """Raised when a threshold or bound is out of range."""

    pass


@dataclass(frozen=True)
class ValidationConfig:
    """Thresholds shared by every check."""

    max_quote_length: int = DEFAULT_MAX_QUOTE_LENGTH
    max_similarity_score: float = DEFAULT_MAX_SIMILARITY_SCORE
    min_transformation_ratio: float = DEFAULT_MIN_TRANSFORMATION_RATIO

    def __post_init__(self):
        if self.max_quote_length < 1:
            raise ConfigError(
                f"max_quote_length must be at least 1 (got {self.max_quote_length})"
            )
        if not 0.0 <= self.max_similarity_score <= 1.0:
            raise ConfigError(
                f"max_similarity_score must be within [0, 1] (got {self.max_similarity_score})"
            )
        if not 0.0 <= self.min_transformation_ratio <= 1.0:
            raise ConfigError(
                "min_transformation_ratio must be within [0, 1] "
                f"(got {self.min_transformation_ratio})"
            )


@dataclass(frozen=True)
class Settings:
    """Process-level settings used when composing the application."""

    validation: ValidationConfig = field(default_factory=ValidationConfig)
    ledger_max_entries: int = DEFAULT_LEDGER_MAX
    ledger_keep_entries: int = DEFAULT_LEDGER_KEEP
    regenerate_attempts: int = DEFAULT_REGENERATE_ATTEMPTS
    audit_concurrency: int = DEFAULT_AUDIT_CONCURRENCY


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning(f"[Config] {name}={raw!r} is not an integer, using {default}")
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning(f"[Config] {name}={raw!r} is not a number, using {default}")
        return default


def load_validation_config() -> ValidationConfig:
    """Build thresholds from COPYGUARD_* environment variables."""
    return ValidationConfig(
        max_quote_length=_env_int("COPYGUARD_MAX_QUOTE_LENGTH", DEFAULT_MAX_QUOTE_LENGTH),
        max_similarity_score=_env_float("COPYGUARD_MAX_SIMILARITY", DEFAULT_MAX_SIMILARITY_SCORE),
        min_transformation_ratio=_env_float(
            "COPYGUARD_MIN_TRANSFORMATION", DEFAULT_MIN_TRANSFORMATION_RATIO
        ),
    )


def load_settings() -> Settings:
    """Build the full settings object from the environment."""
    settings = Settings(
        validation=load_validation_config(),
        ledger_max_entries=_env_int("COPYGUARD_LEDGER_MAX", DEFAULT_LEDGER_MAX),
        ledger_keep_entries=_env_int("COPYGUARD_LEDGER_KEEP", DEFAULT_LEDGER_KEEP),
        regenerate_attempts=_env_int("COPYGUARD_REGENERATE_ATTEMPTS", DEFAULT_REGENERATE_ATTEMPTS),
        audit_concurrency=_env_int("COPYGUARD_AUDIT_CONCURRENCY", DEFAULT_AUDIT_CONCURRENCY),
    )
    if not 0 < settings.ledger_keep_entries <= settings.ledger_max_entries:
        raise ConfigError(
            "COPYGUARD_LEDGER_KEEP must be positive and not exceed COPYGUARD_LEDGER_MAX"
        )
    if settings.regenerate_attempts < 1 or settings.audit_concurrency < 1:
        raise ConfigError("regenerate attempts and audit concurrency must be at least 1")
    return settings
