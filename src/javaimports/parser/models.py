"""Value types produced by source analysis."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType

from javaimports.config.constants import PACKAGE_SEPARATOR


@dataclass(frozen=True, slots=True)
class Import:
    """A single import statement.

    ``qualifier`` is everything before the last dot (``java.util``) and
    ``name`` is the simple name being imported (``List``).
    """

    name: str
    qualifier: str
    is_static: bool = False

    @property
    def path_length(self) -> int:
        if not self.qualifier:
            return 0
        return len(self.qualifier.split(PACKAGE_SEPARATOR))

    @property
    def fully_qualified_name(self) -> str:
        if not self.qualifier:
            return self.name
        return f"{self.qualifier}{PACKAGE_SEPARATOR}{self.name}"

    def as_statement(self) -> str:
        """Creates a fully qualified import statement from this import."""
        static = " static" if self.is_static else ""
        return f"import{static} {self.fully_qualified_name};"

    @classmethod
    def from_statement(cls, statement: str) -> Import:
        """Parse a single ``import ...;`` declaration back into an ``Import``.

        Raises:
            ParseError: if the text is not exactly one single-name import.
        """
        from javaimports.parser.parser import parse_import_statement

        return parse_import_statement(statement)

    def __str__(self) -> str:
        return self.as_statement()


def _frozen_hierarchy(
    hierarchy: Mapping[str, tuple[str, ...]] | None,
) -> Mapping[str, tuple[str, ...]]:
    return MappingProxyType(dict(hierarchy or {}))


@dataclass(frozen=True, eq=False)
class ParsedFile:
    """Result of analyzing one Java source file.

    Identity is the source path: two analyses of the same file in one
    session are the same file.
    """

    package_name: str
    path: Path
    top_level_declarations: frozenset[str] = frozenset()
    unresolved_identifiers: frozenset[str] = frozenset()
    superclass_chain: tuple[str, ...] = ()
    class_hierarchy: Mapping[str, tuple[str, ...]] = field(default_factory=dict)
    imports: tuple[Import, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "class_hierarchy", _frozen_hierarchy(self.class_hierarchy))

    @property
    def extends_external_class(self) -> bool:
        """True if the primary type ultimately extends a type declared elsewhere.

        Such a file may use inherited members that look unresolved here.
        """
        return bool(self.superclass_chain) and (
            self.superclass_chain[-1] not in self.class_hierarchy
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ParsedFile):
            return NotImplemented
        return self.path == other.path and self.package_name == other.package_name

    def __hash__(self) -> int:
        return hash((self.path, self.package_name))

    def __repr__(self) -> str:
        return (
            f"ParsedFile(package_name={self.package_name!r}, path={str(self.path)!r}, "
            f"top_level_declarations={sorted(self.top_level_declarations)!r}, "
            f"unresolved_identifiers={sorted(self.unresolved_identifiers)!r})"
        )
