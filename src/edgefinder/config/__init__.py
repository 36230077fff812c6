"""Environment-driven application settings."""

from edgefinder.config.settings import AppConfig, get_config, reset_config

__all__ = ["AppConfig", "get_config", "reset_config"]
