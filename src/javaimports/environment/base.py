"""The capability a resolution session exposes to its caller."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from javaimports.parser.models import Import, ParsedFile


@runtime_checkable
class Environment(Protocol):
    """Importable symbols visible from the file being resolved."""

    def search(self, identifier: str) -> Import | None:
        """Best import for ``identifier``, or None if nothing visible declares it."""
        ...

    def files_in_package(self, package_name: str) -> set[ParsedFile]:
        """Project files (other than the one being resolved) in ``package_name``."""
        ...
