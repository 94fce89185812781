"""Parsed view of the Java sources of one project."""

from __future__ import annotations

import os
from collections import defaultdict
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from javaimports.config.constants import PROJECT_MAX_DEPTH, PRUNED_DIRS, SOURCE_EXTENSION
from javaimports.core.errors import ParseError, ProjectError
from javaimports.parser.models import ParsedFile
from javaimports.parser.parser import JavaParser


class JavaProject:
    """All successfully parsed files of a project, grouped by package."""

    def __init__(self, files: Iterable[ParsedFile] = ()) -> None:
        self._files: list[ParsedFile] = []
        self._by_package: dict[str, list[ParsedFile]] = defaultdict(list)
        for f in files:
            self.add(f)

    def add(self, parsed: ParsedFile) -> None:
        self._files.append(parsed)
        self._by_package[parsed.package_name].append(parsed)

    def files_in_package(self, package_name: str) -> list[ParsedFile]:
        return list(self._by_package.get(package_name, ()))

    def all_files(self) -> list[ParsedFile]:
        return list(self._files)

    def packages(self) -> set[str]:
        return set(self._by_package)

    def __len__(self) -> int:
        return len(self._files)


@dataclass
class ProjectParseResult:
    project: JavaProject
    errors: list[ParseError] = field(default_factory=list)


def _raise_walk_error(err: OSError) -> None:
    raise ProjectError.walk_failed(err.filename or "", err.strerror or str(err)) from err


def find_java_files(
    root: Path,
    excluding: Path | None = None,
    max_depth: int = PROJECT_MAX_DEPTH,
) -> list[Path]:
    """All ``.java`` files under root, at most ``max_depth`` directories deep.

    Files are returned in a stable order (sorted per directory) so that
    repeated walks over the same snapshot agree.

    Raises:
        ProjectError: if root, or a directory below it, cannot be listed.
    """
    if not root.is_dir():
        raise ProjectError.walk_failed(root, "not a directory")

    excluded = excluding.resolve() if excluding is not None else None
    found: list[Path] = []
    root_depth = len(root.parts)
    for dirpath, dirnames, filenames in os.walk(root, onerror=_raise_walk_error):
        current = Path(dirpath)
        depth = len(current.parts) - root_depth
        if depth >= max_depth:
            dirnames[:] = []
        else:
            dirnames[:] = sorted(d for d in dirnames if d not in PRUNED_DIRS)
        for filename in sorted(filenames):
            if not filename.endswith(SOURCE_EXTENSION):
                continue
            path = current / filename
            if excluded is not None and path.resolve() == excluded:
                continue
            found.append(path)
    return found


class JavaProjectParser:
    """Parses every Java file of a project except the one being resolved.

    A file that fails to parse is recorded in the result's ``errors`` and
    skipped; it never prevents the rest of the project from being indexed.
    """

    def __init__(
        self,
        root: Path,
        excluding: Path | None = None,
        max_depth: int = PROJECT_MAX_DEPTH,
        parser: JavaParser | None = None,
    ) -> None:
        self.root = root
        self.excluding = excluding
        self.max_depth = max_depth
        self._parser = parser or JavaParser()

    @classmethod
    def with_root(cls, root: Path) -> JavaProjectParser:
        return cls(root)

    def excluding_file(self, path: Path) -> JavaProjectParser:
        return JavaProjectParser(self.root, path, self.max_depth, self._parser)

    def parse_all(self) -> ProjectParseResult:
        """Parse the whole project.

        Raises:
            ProjectError: if the project directory cannot be enumerated.
        """
        result = ProjectParseResult(project=JavaProject())
        for path in find_java_files(self.root, self.excluding, self.max_depth):
            try:
                result.project.add(self._parser.parse_path(path))
            except ParseError as e:
                result.errors.append(e)
        return result
