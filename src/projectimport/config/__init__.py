"""Application configuration helpers."""

from __future__ import annotations

from .env import env_bool, env_int
from .errors import ConfigurationError
from .importer import ImportConfig, get_import_config
from .logging import configure_logging

__all__ = [
    "ConfigurationError",
    "ImportConfig",
    "configure_logging",
    "env_bool",
    "env_int",
    "get_import_config",
]
