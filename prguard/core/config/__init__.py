"""Configuration management module."""

from prguard.core.config.settings import (
    DEFAULT_ACTIVATION_VERSION,
    DEFAULT_MAX_FUTURE_SKEW,
    ConfigManager,
    LoggingConfig,
    OracleConfig,
    PolicyConfig,
    PRGuardConfig,
    get_default_config,
    load_config_from_env,
)

__all__ = [
    "ConfigManager",
    "PRGuardConfig",
    "OracleConfig",
    "PolicyConfig",
    "LoggingConfig",
    "DEFAULT_ACTIVATION_VERSION",
    "DEFAULT_MAX_FUTURE_SKEW",
    "get_default_config",
    "load_config_from_env",
]
