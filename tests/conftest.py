from __future__ import annotations

import pytest

from projectimport.adapters import InMemoryModelsProvider, InMemoryProject
from projectimport.config import ImportConfig
from projectimport.domain.data_import import ProjectDataManager
from projectimport.services import default_registry


@pytest.fixture
def trace() -> list[str]:
    return []


@pytest.fixture
def project() -> InMemoryProject:
    return InMemoryProject()


@pytest.fixture
def manager() -> ProjectDataManager:
    return ProjectDataManager(
        default_registry(load_entry_points=False),
        models_provider_factory=InMemoryModelsProvider.for_project,
        config=ImportConfig(),
    )
