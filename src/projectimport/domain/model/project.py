"""Payload types for the built-in project keys."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class LibraryLevel(StrEnum):
    PROJECT = "project"
    MODULE = "module"


class DependencyScope(StrEnum):
    COMPILE = "compile"
    TEST = "test"
    RUNTIME = "runtime"
    PROVIDED = "provided"


class ExternalEntityData(BaseModel):
    """Common base: every payload remembers the external system that produced it."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    external_system_id: str = Field(alias="externalSystemId", min_length=1)


class ProjectData(ExternalEntityData):
    external_name: str = Field(alias="externalName", min_length=1)
    external_config_path: str = Field(alias="externalConfigPath")
    linked_config_path: str = Field(alias="linkedConfigPath")


class ModuleData(ExternalEntityData):
    id: str = Field(min_length=1)
    module_type_id: str = Field(alias="moduleTypeId")
    external_name: str = Field(alias="externalName", min_length=1)
    module_file_directory: str = Field(alias="moduleFileDirectory")
    external_config_path: str = Field(alias="externalConfigPath")


class LibraryData(ExternalEntityData):
    external_name: str = Field(alias="externalName", min_length=1)
    unresolved: bool = False
    paths: tuple[str, ...] = ()


class LibraryDependencyData(ExternalEntityData):
    owner_module: ModuleData = Field(alias="ownerModule")
    target: LibraryData
    level: LibraryLevel = LibraryLevel.PROJECT
    scope: DependencyScope = DependencyScope.COMPILE
    exported: bool = False

    @property
    def library_name(self) -> str:
        return self.target.external_name
