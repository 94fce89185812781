"""Importable type names found in dependency jars.

A jar entry ``com/example/Outer$Inner.class`` becomes the candidate
``Import(name="Inner", qualifier="com.example.Outer")`` so that nested types
are addressable by their own simple name.
"""

from __future__ import annotations

import zipfile
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath

from javaimports.config.constants import NESTED_CLASS_SEPARATOR, PACKAGE_SEPARATOR
from javaimports.core.errors import ResolutionError
from javaimports.environment.maven.dependencies import MavenDependency
from javaimports.parser.models import Import

_CLASS_SUFFIX = ".class"
_NON_TYPE_CLASSES = frozenset({"module-info", "package-info"})
_METADATA_DIR = "META-INF"

# What zipfile raises on malformed archives. ValueError covers undecodable
# UTF-8 entry names; NotImplementedError covers unsupported zip versions.
_ARCHIVE_ERRORS = (
    zipfile.BadZipFile,
    zipfile.LargeZipFile,
    OSError,
    EOFError,
    NotImplementedError,
    ValueError,
)


def import_from_entry(entry_name: str) -> Import | None:
    """Candidate for one jar entry, or None if the entry is not an importable type.

    Skipped entries: directories, resources, ``module-info``/``package-info``,
    anything under ``META-INF/`` and anonymous or local classes (``Foo$1``).
    """
    if not entry_name.endswith(_CLASS_SUFFIX):
        return None

    entry = PurePosixPath(entry_name)
    if entry.parts and entry.parts[0] == _METADATA_DIR:
        return None

    stem = entry.name[: -len(_CLASS_SUFFIX)]
    if stem in _NON_TYPE_CLASSES:
        return None

    segments = stem.split(NESTED_CLASS_SEPARATOR)
    if any(not s or s[0].isdigit() for s in segments):
        return None

    package = PACKAGE_SEPARATOR.join(entry.parent.parts)
    # Make the nested class addressable by its name
    qualifier = PACKAGE_SEPARATOR.join(p for p in (package, *segments[:-1]) if p)
    return Import(name=segments[-1], qualifier=qualifier, is_static=False)


class MavenDependencyLoader:
    """Streams the entries of one jar into import candidates."""

    def load(self, jar: Path, dependency: str | None = None) -> list[Import]:
        """Candidates in the jar, in entry order.

        Raises:
            ResolutionError: if the jar is missing, unreadable or corrupt.
        """
        label = dependency or str(jar)
        if not jar.is_file():
            raise ResolutionError.not_found(label, jar)

        imports: list[Import] = []
        try:
            with zipfile.ZipFile(jar) as archive:
                for info in archive.infolist():
                    if info.is_dir():
                        continue
                    candidate = import_from_entry(info.filename)
                    if candidate is not None:
                        imports.append(candidate)
        except _ARCHIVE_ERRORS as e:
            raise ResolutionError.unreadable(label, jar, str(e)) from e
        return imports


class MavenDependencyResolver:
    """Locates dependency jars in a local repository."""

    def __init__(self, repository: Path) -> None:
        self.repository = repository

    @classmethod
    def with_repository(cls, repository: Path) -> MavenDependencyResolver:
        return cls(repository)

    def resolve(self, dependency: MavenDependency) -> Path:
        return self.repository / dependency.relative_path()


def load_dependency(dependency: MavenDependency, repository: Path) -> list[Import]:
    """Candidates exported by one dependency.

    Raises:
        ResolutionError: if the dependency jar cannot be located or scanned.
    """
    location = MavenDependencyResolver.with_repository(repository).resolve(dependency)
    return MavenDependencyLoader().load(location, str(dependency))


@dataclass
class DependencyScan:
    """Outcome of scanning one dependency: its candidates or the reason there are none."""

    dependency: MavenDependency
    location: Path
    imports: list[Import] = field(default_factory=list)
    error: ResolutionError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def scan_dependency(dependency: MavenDependency, repository: Path) -> DependencyScan:
    """Like ``load_dependency`` but never raises: failures become ``DependencyScan.error``."""
    location = MavenDependencyResolver.with_repository(repository).resolve(dependency)
    try:
        imports = MavenDependencyLoader().load(location, str(dependency))
    except ResolutionError as e:
        return DependencyScan(dependency, location, error=e)
    return DependencyScan(dependency, location, imports)
