"""Resolution environments: where importable symbols come from."""

from javaimports.environment.base import Environment
from javaimports.environment.candidates import ImportWithDistance, Origin
from javaimports.environment.distance import PackageDistance, distance
from javaimports.environment.project import (
    JavaProject,
    JavaProjectParser,
    ProjectParseResult,
    find_java_files,
)

__all__ = [
    "Environment",
    "ImportWithDistance",
    "JavaProject",
    "JavaProjectParser",
    "Origin",
    "PackageDistance",
    "ProjectParseResult",
    "distance",
    "find_java_files",
]
