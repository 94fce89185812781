"""Maven project environment.

Scans the project's own sources and its dependency jars for importable
symbols and keeps, for each simple name, the candidate whose package is
closest to the package being resolved.
"""

from __future__ import annotations

import time
from collections.abc import Callable, Mapping
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from uuid import uuid4

from javaimports.config.options import Options
from javaimports.core.errors import InternalError, ManifestError, ParseError
from javaimports.environment.candidates import ImportWithDistance, Origin, best_by_name
from javaimports.environment.distance import PackageDistance
from javaimports.environment.maven.dependencies import MavenDependency, find_dependencies
from javaimports.environment.maven.loader import DependencyScan, scan_dependency
from javaimports.environment.project import JavaProject, JavaProjectParser
from javaimports.parser.models import Import, ParsedFile
from javaimports.parser.parser import JavaParser

DependencyFinder = Callable[[Path], list[MavenDependency]]


class InitState(Enum):
    UNINITIALIZED = "uninitialized"
    INITIALIZING = "initializing"
    READY = "ready"


def _elapsed_ms(start: float) -> float:
    return round((time.perf_counter() - start) * 1000, 2)


class MavenEnvironment:
    """Resolution session for one file of a Maven project.

    Usage::

        env = MavenEnvironment(root, path, "com.example", Options.defaults())
        env.search("Widget")  # Import(name="Widget", qualifier="com.example.ui")

    The first call to ``search`` or ``files_in_package`` does all the work;
    later calls are lookups. Instances are not thread-safe: use one per file.
    """

    def __init__(
        self,
        root: Path,
        file_being_resolved: Path,
        package_being_resolved: str,
        options: Options | None = None,
        dependency_finder: DependencyFinder = find_dependencies,
    ) -> None:
        self.root = root
        self.file_being_resolved = file_being_resolved
        self.options = options or Options.defaults()
        self.distance = PackageDistance.from_package(package_being_resolved)
        self._dependency_finder = dependency_finder
        self.session_id = uuid4().hex[:12]
        self._log = self.options.logger.bind(
            file=str(file_being_resolved), session=self.session_id
        )

        self._state = InitState.UNINITIALIZED
        self._project: JavaProject | None = None
        self._project_errors: list[ParseError] = []
        self._dependency_scans: list[DependencyScan] = []
        self._best_available_imports: Mapping[str, Import] = MappingProxyType({})

    @property
    def state(self) -> InitState:
        return self._state

    @property
    def repository(self) -> Path:
        return self.options.repository

    @property
    def resolution_map(self) -> Mapping[str, Import]:
        self._ensure_initialized()
        return self._best_available_imports

    @property
    def project_errors(self) -> list[ParseError]:
        """Sibling files that could not be parsed and were skipped."""
        return list(self._project_errors)

    @property
    def dependency_scans(self) -> list[DependencyScan]:
        return list(self._dependency_scans)

    def files_in_package(self, package_name: str) -> set[ParsedFile]:
        return set(self._parse_project_if_needed().files_in_package(package_name))

    def search(self, identifier: str) -> Import | None:
        self._ensure_initialized()
        return self._best_available_imports.get(identifier)

    def _ensure_initialized(self) -> None:
        if self._state is InitState.READY:
            return
        if self._state is InitState.INITIALIZING:
            raise InternalError.unexpected(
                "environment queried during its own initialization",
                file=str(self.file_being_resolved),
            )

        self._state = InitState.INITIALIZING
        try:
            self._init()
        except BaseException:
            self._state = InitState.UNINITIALIZED
            raise
        self._state = InitState.READY

    def _init(self) -> None:
        project = self._parse_project_if_needed()

        start = time.perf_counter()
        candidates = self._extract_project_imports(project)
        candidates.extend(self._extract_dependency_imports())

        self._best_available_imports = MappingProxyType(best_by_name(candidates))
        self._log.info(
            "init_completed",
            candidates=len(candidates),
            identifiers=len(self._best_available_imports),
            elapsed_ms=_elapsed_ms(start),
        )

    def _parse_project_if_needed(self) -> JavaProject:
        if self._project is not None:
            return self._project

        start = time.perf_counter()
        parser = JavaProjectParser(
            self.root,
            excluding=self.file_being_resolved,
            max_depth=self.options.max_depth,
            parser=JavaParser(self.options),
        )
        parsed = parser.parse_all()
        if self.options.debug:
            self._log.debug(
                "parsed_project",
                files=len(parsed.project),
                errors=len(parsed.errors),
                elapsed_ms=_elapsed_ms(start),
            )
            for error in parsed.errors:
                self._log.warning("error_parsing_project", error=str(error))

        self._project = parsed.project
        self._project_errors = parsed.errors
        return self._project

    def _extract_project_imports(self, project: JavaProject) -> list[ImportWithDistance]:
        candidates: list[ImportWithDistance] = []
        for parsed in project.all_files():
            for identifier in sorted(parsed.top_level_declarations):
                candidate = Import(identifier, parsed.package_name, False)
                candidates.append(ImportWithDistance.of(candidate, self.distance, Origin.PROJECT))
        return candidates

    def _find_dependencies(self) -> list[MavenDependency]:
        try:
            dependencies = self._dependency_finder(self.root)
        except ManifestError as e:
            self._log.warning("could_not_read_manifest", error=str(e))
            return []
        if self.options.debug:
            self._log.debug(
                "found_dependencies",
                count=len(dependencies),
                dependencies=[str(d) for d in dependencies],
            )
        return dependencies

    def _extract_dependency_imports(self) -> list[ImportWithDistance]:
        candidates: list[ImportWithDistance] = []
        for dependency in self._find_dependencies():
            start = time.perf_counter()
            scan = scan_dependency(dependency, self.repository)
            self._dependency_scans.append(scan)
            if self.options.debug:
                if scan.error is not None:
                    self._log.warning(
                        "could_not_resolve_dependency",
                        dependency=str(dependency),
                        location=str(scan.location),
                        error=str(scan.error),
                    )
                self._log.debug(
                    "loaded_dependency",
                    dependency=str(dependency),
                    imports=len(scan.imports),
                    elapsed_ms=_elapsed_ms(start),
                )
            candidates.extend(
                ImportWithDistance.of(i, self.distance, Origin.DEPENDENCY) for i in scan.imports
            )
        return candidates
