"""In-memory project model and its modifiable models provider."""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from projectimport.domain.model import Library, Module

if TYPE_CHECKING:
    from collections.abc import Sequence

log = logging.getLogger(__name__)


@dataclass(slots=True)
class ProjectState:
    name: str | None = None
    linked_projects: dict[str, set[str]] = field(default_factory=dict)
    modules: dict[str, Module] = field(default_factory=dict)
    libraries: dict[str, Library] = field(default_factory=dict)


class InMemoryProject:
    """Committed project model. Only changed through a models provider."""

    def __init__(self, name: str | None = None) -> None:
        self._state = ProjectState(name=name)
        self.commit_count = 0

    @property
    def name(self) -> str | None:
        return self._state.name

    @property
    def modules(self) -> dict[str, Module]:
        return dict(self._state.modules)

    @property
    def libraries(self) -> dict[str, Library]:
        return dict(self._state.libraries)

    def linked_projects(self, external_system_id: str) -> frozenset[str]:
        return frozenset(self._state.linked_projects.get(external_system_id, ()))

    def snapshot(self) -> ProjectState:
        return copy.deepcopy(self._state)

    def replace_state(self, state: ProjectState) -> None:
        self._state = state
        self.commit_count += 1


class ProviderClosedError(RuntimeError):
    """Raised when a committed or disposed provider is used again."""


class InMemoryModelsProvider:
    """Works on a private copy of an :class:`InMemoryProject` until committed."""

    def __init__(self, project: InMemoryProject) -> None:
        self.project = project
        self._state = project.snapshot()
        self._closed: str | None = None

    @classmethod
    def for_project(cls, project: object) -> InMemoryModelsProvider:
        if not isinstance(project, InMemoryProject):
            raise TypeError(f"Expected InMemoryProject, got {type(project).__name__}")
        return cls(project)

    def _check_open(self) -> None:
        if self._closed is not None:
            raise ProviderClosedError(f"Models provider already {self._closed}")

    @property
    def is_closed(self) -> bool:
        return self._closed is not None

    @property
    def project_name(self) -> str | None:
        return self._state.name

    def set_project_name(self, name: str) -> None:
        self._check_open()
        self._state.name = name

    def link_external_project(self, external_system_id: str, config_path: str) -> None:
        self._check_open()
        self._state.linked_projects.setdefault(external_system_id, set()).add(config_path)

    def modules(self) -> Sequence[Module]:
        return tuple(self._state.modules.values())

    def find_module(self, name: str) -> Module | None:
        return self._state.modules.get(name)

    def new_module(self, *, name: str, type_id: str, directory: str) -> Module:
        self._check_open()
        if name in self._state.modules:
            raise ValueError(f"Module {name!r} already exists")
        module = Module(name=name, type_id=type_id, directory=directory)
        self._state.modules[name] = module
        return module

    def dispose_module(self, module: Module) -> None:
        self._check_open()
        if self._state.modules.get(module.name) is not module:
            raise ValueError(f"Module {module.name!r} not owned by this provider")
        del self._state.modules[module.name]

    def libraries(self) -> Sequence[Library]:
        return tuple(self._state.libraries.values())

    def find_library(self, name: str) -> Library | None:
        return self._state.libraries.get(name)

    def create_library(self, name: str) -> Library:
        self._check_open()
        if name in self._state.libraries:
            raise ValueError(f"Library {name!r} already exists")
        library = Library(name=name)
        self._state.libraries[name] = library
        return library

    def remove_library(self, library: Library) -> None:
        self._check_open()
        if self._state.libraries.get(library.name) is not library:
            raise ValueError(f"Library {library.name!r} not owned by this provider")
        del self._state.libraries[library.name]

    def commit(self) -> None:
        self._check_open()
        self.project.replace_state(self._state)
        self._closed = "committed"
        log.debug(
            "Committed project model: modules=%s, libraries=%s",
            len(self._state.modules),
            len(self._state.libraries),
        )

    def dispose(self) -> None:
        if self._closed is not None:
            return
        self._closed = "disposed"
        log.debug("Disposed uncommitted project model changes")
