"""Capability handle over the mutable project model.

The import engine never calls the model operations itself; it only threads the
provider through every data service call and, when it created the provider,
commits or disposes it once the import finished.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Protocol, TypeAlias, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from projectimport.domain.model import Library, Module


@runtime_checkable
class ModifiableModelsProvider(Protocol):
    """Modifiable view of a project's modules and libraries."""

    @property
    def project_name(self) -> str | None: ...

    def set_project_name(self, name: str) -> None: ...

    def link_external_project(self, external_system_id: str, config_path: str) -> None: ...

    def modules(self) -> Sequence[Module]: ...

    def find_module(self, name: str) -> Module | None: ...

    def new_module(self, *, name: str, type_id: str, directory: str) -> Module: ...

    def dispose_module(self, module: Module) -> None: ...

    def libraries(self) -> Sequence[Library]: ...

    def find_library(self, name: str) -> Library | None: ...

    def create_library(self, name: str) -> Library: ...

    def remove_library(self, library: Library) -> None: ...

    def commit(self) -> None:
        """Write all modifications back to the project."""
        ...

    def dispose(self) -> None:
        """Discard all modifications."""
        ...


ModelsProviderFactory: TypeAlias = Callable[[object], "ModifiableModelsProvider"]
