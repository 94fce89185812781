"""Maven dependency coordinates read from ``pom.xml`` manifests.

Structure read from each manifest:
<project>
  <groupId>...</groupId> <version>...</version>
  <parent><groupId/><version/></parent>
  <properties><guava.version>31.1-jre</guava.version></properties>
  <dependencyManagement><dependencies><dependency>...</dependency></dependencies></dependencyManagement>
  <dependencies>
    <dependency>
      <groupId>com.google.guava</groupId>
      <artifactId>guava</artifactId>
      <version>${guava.version}</version>
    </dependency>
  </dependencies>
</project>

The project manifest is read first, then the manifests of parent directories
for as long as they exist and some dependency still lacks a concrete version.
"""

from __future__ import annotations

import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from pathlib import Path

from javaimports.config.constants import (
    ARCHIVE_EXTENSION,
    MANIFEST_FILENAME,
    MANIFEST_MAX_ANCESTORS,
)
from javaimports.core.errors import ManifestError

_PROPERTY = re.compile(r"\$\{([^}]+)\}")
_MAX_SUBSTITUTIONS = 10


@dataclass(frozen=True, slots=True)
class MavenDependency:
    """A ``{group, artifact, version}`` coordinate."""

    group_id: str
    artifact_id: str
    version: str

    def jar_name(self) -> str:
        return f"{self.artifact_id}-{self.version}.{ARCHIVE_EXTENSION}"

    def relative_path(self) -> Path:
        """Location of the jar relative to a repository root."""
        return Path(
            *self.group_id.split("."),
            self.artifact_id,
            self.version,
            self.jar_name(),
        )

    def __str__(self) -> str:
        return f"{self.group_id}:{self.artifact_id}:{self.version}"


@dataclass(frozen=True, slots=True)
class _Declared:
    group_id: str
    artifact_id: str
    version: str | None


def _strip_namespaces(root: ET.Element) -> None:
    for elem in root.iter():
        if isinstance(elem.tag, str) and "}" in elem.tag:
            elem.tag = elem.tag.split("}", 1)[1]


def _text(elem: ET.Element | None, path: str) -> str | None:
    if elem is None:
        return None
    found = elem.find(path)
    if found is None or found.text is None:
        return None
    return found.text.strip() or None


def _declared(elem: ET.Element) -> _Declared | None:
    group_id = _text(elem, "groupId")
    artifact_id = _text(elem, "artifactId")
    if not group_id or not artifact_id:
        return None
    return _Declared(group_id, artifact_id, _text(elem, "version"))


class MavenDependencyFinder:
    """Accumulates dependencies, managed versions and properties over manifests.

    Manifests must be scanned child first: values already known are never
    overwritten by a parent.
    """

    def __init__(self) -> None:
        self._dependencies: list[_Declared] = []
        self._managed: dict[tuple[str, str], str] = {}
        self._properties: dict[str, str] = {}

    def scan(self, manifest: Path) -> None:
        """Read one manifest.

        Raises:
            ManifestError: if the file cannot be read or is not valid XML.
        """
        try:
            tree = ET.parse(manifest)
        except ET.ParseError as e:
            raise ManifestError.malformed(str(manifest), str(e)) from e
        except OSError as e:
            raise ManifestError.malformed(str(manifest), e.strerror or str(e)) from e

        root = tree.getroot()
        _strip_namespaces(root)

        parent = root.find("parent")
        project_props = {
            "project.groupId": _text(root, "groupId") or _text(parent, "groupId"),
            "project.version": _text(root, "version") or _text(parent, "version"),
            "project.artifactId": _text(root, "artifactId"),
            "project.parent.version": _text(parent, "version"),
        }
        for key, value in project_props.items():
            if value is not None:
                self._properties.setdefault(key, value)

        properties = root.find("properties")
        if properties is not None:
            for prop in properties:
                if isinstance(prop.tag, str) and prop.text is not None:
                    self._properties.setdefault(prop.tag, prop.text.strip())

        for elem in root.findall("dependencyManagement/dependencies/dependency"):
            declared = _declared(elem)
            if declared is not None and declared.version:
                key = (declared.group_id, declared.artifact_id)
                self._managed.setdefault(key, declared.version)

        known = {(d.group_id, d.artifact_id) for d in self._dependencies}
        for elem in root.findall("dependencies/dependency"):
            declared = _declared(elem)
            if declared is None:
                continue
            key = (declared.group_id, declared.artifact_id)
            if key not in known:
                self._dependencies.append(declared)
                known.add(key)

    def _substitute(self, value: str | None) -> str | None:
        if value is None:
            return None
        for _ in range(_MAX_SUBSTITUTIONS):
            replaced = _PROPERTY.sub(lambda m: self._properties.get(m.group(1), m.group(0)), value)
            if replaced == value:
                break
            value = replaced
        if _PROPERTY.search(value):
            return None
        return value

    def _resolve(self, declared: _Declared) -> MavenDependency | None:
        group_id = self._substitute(declared.group_id)
        artifact_id = self._substitute(declared.artifact_id)
        if group_id is None or artifact_id is None:
            return None
        version = declared.version or self._managed.get((declared.group_id, declared.artifact_id))
        version = self._substitute(version)
        if not version:
            return None
        return MavenDependency(group_id, artifact_id, version)

    def all_found(self) -> bool:
        """True if every dependency seen so far has a concrete version."""
        return all(self._resolve(d) is not None for d in self._dependencies)

    def result(self) -> list[MavenDependency]:
        """Dependencies with a concrete version, in declaration order."""
        resolved = (self._resolve(d) for d in self._dependencies)
        return [d for d in resolved if d is not None]


def find_dependencies(
    project_root: Path,
    max_ancestors: int = MANIFEST_MAX_ANCESTORS,
) -> list[MavenDependency]:
    """Dependencies declared by the project at ``project_root``.

    Returns an empty list when the project has no manifest.

    Raises:
        ManifestError: if a manifest on the way is malformed.
    """
    manifest = project_root / MANIFEST_FILENAME
    if not manifest.is_file():
        return []

    finder = MavenDependencyFinder()
    finder.scan(manifest)

    target = project_root.resolve().parent
    for _ in range(max_ancestors):
        if finder.all_found():
            break
        parent_manifest = target / MANIFEST_FILENAME
        if not parent_manifest.is_file():
            break
        finder.scan(parent_manifest)
        if target.parent == target:
            break
        target = target.parent

    return finder.result()
