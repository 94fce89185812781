"""Tests for pom.xml dependency discovery."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from javaimports.core.errors import ErrorCode, ManifestError
from javaimports.environment.maven.dependencies import (
    MavenDependency,
    MavenDependencyFinder,
    find_dependencies,
)

WritePom = Callable[..., Path]


class TestMavenDependency:
    """Coordinate tests."""

    def test_relative_path(self) -> None:
        dependency = MavenDependency("com.google.guava", "guava", "31.1-jre")

        assert dependency.relative_path() == Path(
            "com/google/guava/guava/31.1-jre/guava-31.1-jre.jar"
        )
        assert str(dependency) == "com.google.guava:guava:31.1-jre"


class TestFindDependencies:
    """Reading dependencies declared by a project."""

    def test_no_manifest_means_no_dependencies(self, project_root: Path) -> None:
        assert find_dependencies(project_root) == []

    def test_reads_declared_dependencies_in_order(
        self, project_root: Path, write_pom: WritePom
    ) -> None:
        write_pom(project_root, ["org.b:beta:2.0", "org.a:alpha:1.0"])

        assert find_dependencies(project_root) == [
            MavenDependency("org.b", "beta", "2.0"),
            MavenDependency("org.a", "alpha", "1.0"),
        ]

    def test_manifest_without_namespace(self, project_root: Path, write_pom: WritePom) -> None:
        write_pom(project_root, ["org.a:alpha:1.0"], namespace=False)

        assert find_dependencies(project_root) == [MavenDependency("org.a", "alpha", "1.0")]

    def test_substitutes_properties(self, project_root: Path, write_pom: WritePom) -> None:
        """Versions may reference properties, including project coordinates."""
        write_pom(
            project_root,
            ["org.a:alpha:${alpha.version}", "com.example:sibling:${project.version}"],
            properties={"alpha.version": "${base.version}", "base.version": "3.1"},
            version="7.0",
        )

        assert find_dependencies(project_root) == [
            MavenDependency("org.a", "alpha", "3.1"),
            MavenDependency("com.example", "sibling", "7.0"),
        ]

    def test_managed_version_fills_missing_version(
        self, project_root: Path, write_pom: WritePom
    ) -> None:
        write_pom(project_root, ["org.a:alpha"], managed=["org.a:alpha:5.5"])

        assert find_dependencies(project_root) == [MavenDependency("org.a", "alpha", "5.5")]

    def test_parent_manifest_supplies_versions(
        self, tmp_path: Path, write_pom: WritePom
    ) -> None:
        """Parent directories are read until every version is known."""
        # Given
        parent = tmp_path / "parent"
        child = parent / "child"
        write_pom(parent, managed=["org.a:alpha:1.2"], properties={"beta.version": "9"})
        write_pom(child, ["org.a:alpha", "org.b:beta:${beta.version}"])

        # When
        dependencies = find_dependencies(child)

        # Then
        assert dependencies == [
            MavenDependency("org.a", "alpha", "1.2"),
            MavenDependency("org.b", "beta", "9"),
        ]

    def test_child_values_win_over_parent(self, tmp_path: Path, write_pom: WritePom) -> None:
        parent = tmp_path / "parent"
        child = parent / "child"
        write_pom(parent, properties={"v": "parent"}, managed=["org.b:beta:1"])
        write_pom(child, ["org.a:alpha:${v}", "org.b:beta"], properties={"v": "child"})

        assert find_dependencies(child)[0] == MavenDependency("org.a", "alpha", "child")

    def test_unresolvable_version_is_dropped(
        self, project_root: Path, write_pom: WritePom
    ) -> None:
        write_pom(project_root, ["org.a:alpha:${nowhere}", "org.b:beta:1.0"])

        assert find_dependencies(project_root) == [MavenDependency("org.b", "beta", "1.0")]

    def test_malformed_manifest_raises(self, project_root: Path) -> None:
        (project_root / "pom.xml").write_text("<project><dependencies>")

        with pytest.raises(ManifestError) as exc_info:
            find_dependencies(project_root)

        assert exc_info.value.code == ErrorCode.MANIFEST_PARSE_ERROR


class TestMavenDependencyFinder:
    """Finder state tests."""

    def test_all_found_tracks_missing_versions(
        self, project_root: Path, write_pom: WritePom
    ) -> None:
        manifest = write_pom(project_root, ["org.a:alpha"])
        finder = MavenDependencyFinder()

        finder.scan(manifest)

        assert finder.all_found() is False
        assert finder.result() == []
