"""Tests for project walking and parsing."""

from __future__ import annotations

import os
from collections.abc import Callable
from pathlib import Path

import pytest

from javaimports.core.errors import ErrorCode, ProjectError
from javaimports.environment.project import (
    JavaProject,
    JavaProjectParser,
    find_java_files,
)
from javaimports.parser.models import ParsedFile


class TestFindJavaFiles:
    """Directory walk tests."""

    def test_finds_sources_in_stable_order(
        self, project_root: Path, write_java: Callable[[str, str], Path]
    ) -> None:
        b = write_java("src/b/B.java", "class B {}")
        a = write_java("src/a/A.java", "class A {}")
        write_java("src/a/notes.txt", "not java")

        assert find_java_files(project_root) == [a, b]

    def test_excludes_file_being_resolved(
        self, project_root: Path, write_java: Callable[[str, str], Path]
    ) -> None:
        target = write_java("A.java", "class A {}")
        other = write_java("B.java", "class B {}")

        assert find_java_files(project_root, excluding=target) == [other]

    def test_skips_pruned_directories(
        self, project_root: Path, write_java: Callable[[str, str], Path]
    ) -> None:
        """Build output and VCS metadata are not walked."""
        kept = write_java("src/Main.java", "class Main {}")
        write_java("target/generated/Gen.java", "class Gen {}")
        write_java(".git/hooks/Hook.java", "class Hook {}")

        assert find_java_files(project_root) == [kept]

    def test_depth_bound(
        self, project_root: Path, write_java: Callable[[str, str], Path]
    ) -> None:
        """Files deeper than the bound are not found."""
        shallow = write_java("a/Shallow.java", "class Shallow {}")
        write_java("a/b/c/Deep.java", "class Deep {}")

        assert find_java_files(project_root, max_depth=2) == [shallow]

    def test_missing_root_raises(self, tmp_path: Path) -> None:
        with pytest.raises(ProjectError) as exc_info:
            find_java_files(tmp_path / "nope")

        assert exc_info.value.code == ErrorCode.PROJECT_WALK_ERROR

    @pytest.mark.skipif(
        os.name == "nt" or (hasattr(os, "geteuid") and os.geteuid() == 0),
        reason="permissions are not enforced",
    )
    def test_unlistable_directory_raises(
        self, project_root: Path, write_java: Callable[[str, str], Path]
    ) -> None:
        """A directory that cannot be listed aborts the walk."""
        write_java("locked/L.java", "class L {}")
        locked = project_root / "locked"
        locked.chmod(0)
        try:
            with pytest.raises(ProjectError):
                find_java_files(project_root)
        finally:
            locked.chmod(0o755)


class TestJavaProject:
    """Package grouping tests."""

    def test_groups_by_package(self) -> None:
        a1 = ParsedFile("a", Path("a/One.java"))
        a2 = ParsedFile("a", Path("a/Two.java"))
        b = ParsedFile("b", Path("b/Three.java"))

        project = JavaProject([a1, a2, b])

        assert set(project.files_in_package("a")) == {a1, a2}
        assert project.files_in_package("missing") == []
        assert project.packages() == {"a", "b"}
        assert len(project) == 3


class TestJavaProjectParser:
    """Parsing every file of a project."""

    def test_parses_all_but_excluded(
        self, project_root: Path, write_java: Callable[[str, str], Path]
    ) -> None:
        target = write_java("src/com/example/App.java", "package com.example; class App {}")
        write_java("src/com/example/Util.java", "package com.example; public class Util {}")
        write_java("src/com/example/ui/Widget.java", "package com.example.ui; class Widget {}")

        result = JavaProjectParser.with_root(project_root).excluding_file(target).parse_all()

        assert result.errors == []
        assert {f.path.name for f in result.project.all_files()} == {"Util.java", "Widget.java"}
        assert [f.path.name for f in result.project.files_in_package("com.example")] == [
            "Util.java"
        ]

    def test_unparsable_file_is_recorded_and_skipped(
        self, project_root: Path, write_java: Callable[[str, str], Path]
    ) -> None:
        """One broken sibling does not stop the rest from being indexed."""
        write_java("Good.java", "package p; class Good {}")
        broken = write_java("Broken.java", "package p; class Broken {")

        result = JavaProjectParser(project_root).parse_all()

        assert [f.path.name for f in result.project.all_files()] == ["Good.java"]
        assert len(result.errors) == 1
        assert result.errors[0].file == str(broken)
