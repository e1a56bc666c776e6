from __future__ import annotations

from typing import Any

from projectimport.domain.model import (
    DataNode,
    DependencyScope,
    LibraryData,
    LibraryDependencyData,
    LibraryLevel,
    ModuleData,
    ProjectData,
    ProjectKeys,
)

SYSTEM_ID = "GRADLE"


def project_data(name: str = "demo") -> ProjectData:
    return ProjectData(
        external_system_id=SYSTEM_ID,
        external_name=name,
        external_config_path=f"/work/{name}",
        linked_config_path=f"/work/{name}/build.gradle",
    )


def module_data(name: str) -> ModuleData:
    return ModuleData(
        id=name,
        external_system_id=SYSTEM_ID,
        module_type_id="JAVA_MODULE",
        external_name=name,
        module_file_directory=f"/work/demo/{name}",
        external_config_path=f"/work/demo/{name}/build.gradle",
    )


def library_data(name: str, *, unresolved: bool = False) -> LibraryData:
    return LibraryData(
        external_system_id=SYSTEM_ID,
        external_name=name,
        unresolved=unresolved,
        paths=(f"/cache/{name}.jar",),
    )


def dependency_data(
    module: ModuleData,
    library: LibraryData,
    *,
    level: LibraryLevel = LibraryLevel.PROJECT,
    scope: DependencyScope = DependencyScope.COMPILE,
) -> LibraryDependencyData:
    return LibraryDependencyData(
        external_system_id=SYSTEM_ID,
        owner_module=module,
        target=library,
        level=level,
        scope=scope,
    )


def build_project_tree(
    modules: dict[str, list[str]],
    *,
    libraries: list[str] | None = None,
    name: str = "demo",
) -> DataNode[ProjectData]:
    """Project node with libraries and modules, each module listing its dependencies."""

    root = DataNode(ProjectKeys.PROJECT, project_data(name))
    library_names = libraries if libraries is not None else sorted(
        {lib for deps in modules.values() for lib in deps}
    )
    libs = {lib: library_data(lib) for lib in library_names}
    for lib in library_names:
        root.create_child(ProjectKeys.LIBRARY, libs[lib])
    for module_name, deps in modules.items():
        module = module_data(module_name)
        module_node = root.create_child(ProjectKeys.MODULE, module)
        for lib in deps:
            target = libs.get(lib) or library_data(lib)
            module_node.create_child(ProjectKeys.LIBRARY_DEPENDENCY, dependency_data(module, target))
    return root


def find_nodes(root: DataNode[Any], key: Any) -> list[DataNode[Any]]:
    return [node for node in root.walk() if node.key == key]
