from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import pytest

from projectimport.adapters import InMemoryModelsProvider, InMemoryProject
from projectimport.domain.faults import ImportFaultsError
from projectimport.domain.model import DataNode, LibraryLevel, ProjectKeys
from projectimport.services import builtin_services, default_registry
from tests.support.project_tree import (
    build_project_tree,
    dependency_data,
    library_data,
    module_data,
    project_data,
)

if TYPE_CHECKING:
    from projectimport.domain.data_import import ProjectDataManager

LINKED_PATH = "/work/demo/build.gradle"


def _entries(project: InMemoryProject, module: str) -> list[str]:
    return [entry.library_name for entry in project.modules[module].order_entries]


def test_builtin_registry_order() -> None:
    registry = default_registry(load_entry_points=False)

    assert [key.name for key in registry.ordered_keys()] == [
        "project",
        "module",
        "library",
        "library_dependency",
    ]
    assert len(builtin_services()) == 4


def test_initial_import_builds_project(
    manager: ProjectDataManager, project: InMemoryProject
) -> None:
    tree = build_project_tree({"app": ["guava", "junit"], "lib": ["guava"]})

    report = manager.import_data([tree], project)

    assert report.ok
    assert project.name == "demo"
    assert project.linked_projects("GRADLE") == frozenset({LINKED_PATH})
    assert set(project.modules) == {"app", "lib"}
    assert set(project.libraries) == {"guava", "junit"}
    assert _entries(project, "app") == ["guava", "junit"]
    assert _entries(project, "lib") == ["guava"]
    assert project.modules["app"].linked_project_path == LINKED_PATH
    assert project.libraries["guava"].paths == ["/cache/guava.jar"]
    assert project.commit_count == 1


def test_reimport_removes_orphans(manager: ProjectDataManager, project: InMemoryProject) -> None:
    manager.import_data([build_project_tree({"app": ["guava", "junit"], "lib": []})], project)

    report = manager.import_data([build_project_tree({"app": ["guava"]})], project)

    assert set(project.modules) == {"app"}
    assert set(project.libraries) == {"guava"}
    assert _entries(project, "app") == ["guava"]
    assert report.removed == {
        "project": 0,
        "module": 1,
        "library": 1,
        "library_dependency": 1,
    }


def test_ignored_module_survives_reimport(
    manager: ProjectDataManager, project: InMemoryProject
) -> None:
    manager.import_data([build_project_tree({"app": ["guava"], "lib": ["guava"]})], project)
    tree = build_project_tree({"app": ["guava"]}, libraries=["guava"])
    lib_module = module_data("lib")
    ignored = tree.create_child(ProjectKeys.MODULE, lib_module, ignored=True)
    ignored.create_child(
        ProjectKeys.LIBRARY_DEPENDENCY, dependency_data(lib_module, library_data("guava"))
    )

    report = manager.import_data([tree], project)

    assert set(project.modules) == {"app", "lib"}
    assert _entries(project, "lib") == ["guava"]
    assert report.records_ignored == 2


def test_foreign_modules_are_left_alone(
    manager: ProjectDataManager, project: InMemoryProject
) -> None:
    provider = InMemoryModelsProvider(project)
    provider.new_module(name="handmade", type_id="JAVA_MODULE", directory="/work/handmade")
    provider.commit()

    manager.import_data([build_project_tree({"app": []})], project)

    assert set(project.modules) == {"app", "handmade"}


def test_dependency_levels(manager: ProjectDataManager, project: InMemoryProject) -> None:
    root = DataNode(ProjectKeys.PROJECT, project_data())
    app = module_data("app")
    module_node = root.create_child(ProjectKeys.MODULE, app)
    module_node.create_child(
        ProjectKeys.LIBRARY_DEPENDENCY,
        dependency_data(app, library_data("local"), level=LibraryLevel.MODULE),
    )
    module_node.create_child(
        ProjectKeys.LIBRARY_DEPENDENCY, dependency_data(app, library_data("shared"))
    )

    manager.import_data([root], project)

    local, shared = project.modules["app"].order_entries
    assert local.module_library is not None
    assert local.module_library.paths == ["/cache/local.jar"]
    assert "local" not in project.libraries
    assert shared.module_library is None
    assert project.libraries["shared"].unresolved is True


def test_dependency_of_unknown_module_is_skipped(
    manager: ProjectDataManager,
    project: InMemoryProject,
    caplog: pytest.LogCaptureFixture,
) -> None:
    root = DataNode(ProjectKeys.PROJECT, project_data())
    root.create_child(
        ProjectKeys.LIBRARY_DEPENDENCY,
        dependency_data(module_data("ghost"), library_data("guava")),
    )

    with caplog.at_level(logging.WARNING):
        report = manager.import_data([root], project)

    assert report.ok
    assert project.modules == {}
    assert "Module 'ghost' not found" in caplog.text


def test_broken_module_record_still_commits_the_rest(
    manager: ProjectDataManager, project: InMemoryProject
) -> None:
    tree = build_project_tree({"app": []})
    tree.create_child(ProjectKeys.MODULE, raw={"externalSystemId": "GRADLE", "id": ""})

    with pytest.raises(ImportFaultsError) as excinfo:
        manager.import_data([tree], project)

    assert len(excinfo.value.report.record_faults) == 1
    assert set(project.modules) == {"app"}
    assert project.commit_count == 1
