"""Import engine configuration values."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from .env import env_bool, env_int
from .errors import ConfigurationError

DEFAULT_DESERIALIZE_WORKERS = 1
DEFAULT_LOG_LEVEL = "INFO"

DESERIALIZE_WORKERS_VAR = "PROJECTIMPORT_DESERIALIZE_WORKERS"
RAISE_ON_FAULTS_VAR = "PROJECTIMPORT_RAISE_ON_FAULTS"
LOG_LEVEL_VAR = "PROJECTIMPORT_LOG_LEVEL"


@dataclass(frozen=True, slots=True)
class ImportConfig:
    """Tunables for :class:`~projectimport.domain.data_import.ProjectDataManager`."""

    deserialize_workers: int = DEFAULT_DESERIALIZE_WORKERS
    raise_on_faults: bool = True
    log_level: str = DEFAULT_LOG_LEVEL

    def __post_init__(self) -> None:
        if self.deserialize_workers < 1:
            raise ConfigurationError("deserialize_workers must be >= 1")
        if not isinstance(logging.getLevelName(self.log_level), int):
            raise ConfigurationError(f"Unknown log level: {self.log_level}")


def get_import_config() -> ImportConfig:
    level = (os.getenv(LOG_LEVEL_VAR) or DEFAULT_LOG_LEVEL).strip().upper()
    return ImportConfig(
        deserialize_workers=env_int(
            DESERIALIZE_WORKERS_VAR, DEFAULT_DESERIALIZE_WORKERS, minimum=1
        ),
        raise_on_faults=env_bool(RAISE_ON_FAULTS_VAR, True),
        log_level=level,
    )
