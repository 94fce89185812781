"""CLI utilities."""

from pathlib import Path

from javaimports.config.constants import MANIFEST_FILENAME


def find_project_root(source_file: Path) -> Path:
    """Nearest ancestor of ``source_file`` holding a pom.xml.

    Falls back to the file's own directory when no ancestor has one.
    """
    start = source_file.resolve().parent
    current = start

    while current != current.parent:
        if (current / MANIFEST_FILENAME).is_file():
            return current
        current = current.parent

    if (current / MANIFEST_FILENAME).is_file():
        return current
    return start
