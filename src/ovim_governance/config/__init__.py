"""Configuration for the governance service."""

from .settings import GovernanceSettings, get_settings
from .logging_config import LoggingConfig, LogLevel, LogVerbosity
from . import constants

__all__ = [
    "GovernanceSettings",
    "get_settings",
    "LoggingConfig",
    "LogLevel",
    "LogVerbosity",
    "constants",
]
