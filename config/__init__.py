"""
Configuration module.

Exports:
    Settings: Application settings model
    get_settings: Cached settings loader (call once at process start)
    configure_logging: structlog setup
"""

from config.settings import Settings, get_settings, DEFAULT_EXEMPT_SKUS
from config.log_config import configure_logging

__all__ = [
    "Settings",
    "get_settings",
    "DEFAULT_EXEMPT_SKUS",
    "configure_logging",
]
