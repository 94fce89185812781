"""Configuration constants.

These values are not user-configurable: they describe the Maven repository
layout and the bounds of filesystem walks.
"""

from pathlib import Path

# =============================================================================
# Maven conventions
# =============================================================================

DEFAULT_REPOSITORY = Path("~/.m2/repository").expanduser()
"""Conventional per-user local Maven repository."""

MANIFEST_FILENAME = "pom.xml"
"""Build manifest looked up in the project root and its ancestors."""

ARCHIVE_EXTENSION = "jar"
"""Extension of compiled-type archives in the repository."""

# =============================================================================
# Java conventions
# =============================================================================

SOURCE_EXTENSION = ".java"

PACKAGE_SEPARATOR = "."

NESTED_CLASS_SEPARATOR = "$"
"""Separator between outer and nested type names in compiled class files."""

# =============================================================================
# Walk bounds
# =============================================================================

PROJECT_MAX_DEPTH = 100
"""Maximum directory depth explored when indexing project sources."""

MANIFEST_MAX_ANCESTORS = 10
"""Maximum number of parent manifests followed when collecting dependencies."""

PRUNED_DIRS: frozenset[str] = frozenset(
    (
        # VCS internals
        ".git",
        ".svn",
        ".hg",
        # Tool data
        ".javaimports",
        ".idea",
        ".gradle",
        # Build outputs
        "target",
        "build",
        "out",
        "node_modules",
    )
)
"""Directories never descended into while indexing a project."""
