"""
Secure Configuration Management

Provides centralized, validated configuration for the sanitization layer.
Values come from environment variables (optionally from a ``.env`` file) and
are validated up front with fail-fast behavior.

Usage:
    from safedom.secure_config import get_config

    config = get_config().get_sanitizer_config()
    if config.dev_mode:
        ...

Environment:
    SAFEDOM_DEV_MODE   Report values that fail sanitization (default: false)
    SAFEDOM_LOG_LEVEL  Log level used by the command line (default: WARNING)
    SAFEDOM_LOG_JSON   Emit JSON logs from the command line (default: false)

Raises:
    ConfigurationError: If configuration is invalid
"""

import os
from dataclasses import dataclass

from dotenv import load_dotenv


class ConfigurationError(Exception):
    """Raised when configuration is missing or invalid."""

    pass


_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}
_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def _parse_bool(name: str, raw: str | None) -> bool:
    """Parse a boolean environment variable, rejecting anything ambiguous."""
    if raw is None:
        return False
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"{name} must be one of true/false/1/0/yes/no/on/off, got: {raw!r}")


@dataclass(frozen=True)
class SanitizerConfig:
    """
    Validated sanitizer configuration.
    """

    dev_mode: bool = False
    log_level: str = "WARNING"
    log_json: bool = False

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self):
        """
        Validate sanitizer configuration.

        Raises:
            ConfigurationError: If configuration is invalid
        """
        if self.log_level.upper() not in _LOG_LEVELS:
            raise ConfigurationError(
                f"SAFEDOM_LOG_LEVEL must be one of {', '.join(sorted(_LOG_LEVELS))}, got: {self.log_level!r}"
            )


class SecureConfig:
    """
    Secure configuration manager.

    Loads and validates configuration from environment variables.
    """

    def __init__(self):
        """Initialize configuration (loads .env file)."""
        load_dotenv()

    def get_sanitizer_config(self) -> SanitizerConfig:
        """
        Get validated sanitizer configuration.

        The environment is read on every call so that changes made after
        start-up (for example by a test harness) are honored.

        Returns:
            SanitizerConfig: Validated configuration

        Raises:
            ConfigurationError: If configuration is invalid
        """
        return SanitizerConfig(
            dev_mode=_parse_bool("SAFEDOM_DEV_MODE", os.getenv("SAFEDOM_DEV_MODE")),
            log_level=(os.getenv("SAFEDOM_LOG_LEVEL") or "WARNING").strip().upper(),
            log_json=_parse_bool("SAFEDOM_LOG_JSON", os.getenv("SAFEDOM_LOG_JSON")),
        )


_config_instance = None


def get_config() -> SecureConfig:
    """
    Get the global configuration instance (singleton pattern).

    Returns:
        SecureConfig: The configuration manager
    """
    global _config_instance
    if _config_instance is None:
        _config_instance = SecureConfig()
    return _config_instance
