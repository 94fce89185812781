"""Root conftest.py for test configuration.

Ensures local src/ directory takes priority over any installed packages,
and provides builders for synthetic projects, manifests and jars.
"""

import sys
import zipfile
from collections.abc import Callable, Generator, Iterable
from pathlib import Path
from typing import Any

import pytest
import structlog
import structlog.testing

# Insert local src directory at the beginning of sys.path
# This ensures that the local javaimports package is used, not any installed one
_src_dir = Path(__file__).parent.parent / "src"
if str(_src_dir) not in sys.path:
    sys.path.insert(0, str(_src_dir))

# Force reimport of javaimports modules if already imported
for module_name in list(sys.modules.keys()):
    if module_name.startswith("javaimports"):
        del sys.modules[module_name]


WriteJava = Callable[[str, str], Path]
WriteJar = Callable[[Path, str, str, str, Iterable[str]], Path]


def _pom_dependency(coordinate: str) -> str:
    group_id, artifact_id, *rest = coordinate.split(":")
    version = f"<version>{rest[0]}</version>" if rest else ""
    return (
        "<dependency>"
        f"<groupId>{group_id}</groupId><artifactId>{artifact_id}</artifactId>{version}"
        "</dependency>"
    )


def pom_xml(
    dependencies: Iterable[str] = (),
    *,
    properties: dict[str, str] | None = None,
    managed: Iterable[str] = (),
    group_id: str = "com.example",
    artifact_id: str = "app",
    version: str = "1.0.0",
    namespace: bool = True,
) -> str:
    """A minimal pom.xml. Dependencies are ``group:artifact[:version]`` strings."""
    xmlns = ' xmlns="http://maven.apache.org/POM/4.0.0"' if namespace else ""
    props = "".join(f"<{k}>{v}</{k}>" for k, v in (properties or {}).items())
    managed_xml = "".join(_pom_dependency(d) for d in managed)
    deps_xml = "".join(_pom_dependency(d) for d in dependencies)
    return (
        f'<?xml version="1.0" encoding="UTF-8"?>\n<project{xmlns}>'
        f"<modelVersion>4.0.0</modelVersion>"
        f"<groupId>{group_id}</groupId><artifactId>{artifact_id}</artifactId>"
        f"<version>{version}</version>"
        f"<properties>{props}</properties>"
        f"<dependencyManagement><dependencies>{managed_xml}</dependencies></dependencyManagement>"
        f"<dependencies>{deps_xml}</dependencies>"
        "</project>\n"
    )


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """Empty project directory."""
    root = tmp_path / "project"
    root.mkdir()
    return root


@pytest.fixture
def repository(tmp_path: Path) -> Path:
    """Empty local Maven repository."""
    repo = tmp_path / "m2"
    repo.mkdir()
    return repo


@pytest.fixture
def write_java(project_root: Path) -> WriteJava:
    """Write a source file under the project root and return its path."""

    def _write(relative: str, source: str) -> Path:
        path = project_root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(source)
        return path

    return _write


@pytest.fixture
def write_jar() -> WriteJar:
    """Write a jar with the given entry names at its repository location."""

    def _write(
        repo: Path, group_id: str, artifact_id: str, version: str, entries: Iterable[str]
    ) -> Path:
        jar = repo.joinpath(*group_id.split("."), artifact_id, version)
        jar.mkdir(parents=True, exist_ok=True)
        jar = jar / f"{artifact_id}-{version}.jar"
        with zipfile.ZipFile(jar, "w") as archive:
            for entry in entries:
                if entry.endswith("/"):
                    archive.writestr(entry, b"")
                else:
                    archive.writestr(entry, b"\xca\xfe\xba\xbe")
        return jar

    return _write


@pytest.fixture
def write_undecodable_jar(write_jar: WriteJar) -> Callable[[Path, str, str, str], Path]:
    """Write a jar whose UTF-8 flagged entry name is not valid UTF-8.

    The entry is written as ``Bazé.class`` (which sets the UTF-8 flag) and the
    two encoded bytes of ``é`` are then overwritten in both the local header
    and the central directory.
    """

    def _write(repo: Path, group_id: str, artifact_id: str, version: str) -> Path:
        package = group_id.replace(".", "/")
        jar = write_jar(repo, group_id, artifact_id, version, [f"{package}/Bazé.class"])
        raw = jar.read_bytes()
        assert raw.count("Bazé".encode()) == 2
        jar.write_bytes(raw.replace("Bazé".encode(), b"Baz\xff\xfe"))
        return jar

    return _write


@pytest.fixture
def write_pom() -> Callable[..., Path]:
    """Write a pom.xml into a directory; keyword arguments as for ``pom_xml``."""

    def _write(directory: Path, dependencies: Iterable[str] = (), **kwargs: object) -> Path:
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / "pom.xml"
        path.write_text(pom_xml(dependencies, **kwargs))  # type: ignore[arg-type]
        return path

    return _write


@pytest.fixture
def captured_logs() -> Generator[list[dict[str, Any]], None, None]:
    """Structlog events emitted by loggers created during the test."""
    structlog.reset_defaults()
    with structlog.testing.capture_logs() as logs:
        yield logs
