"""Sort keys used while choosing the best import for each identifier."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

from javaimports.environment.distance import PackageDistance
from javaimports.parser.models import Import


class Origin(IntEnum):
    """Where a candidate came from. Lower values win distance ties."""

    PROJECT = 0
    DEPENDENCY = 1


@dataclass(frozen=True, slots=True)
class ImportWithDistance:
    candidate: Import
    distance: int
    origin: Origin

    @classmethod
    def of(cls, candidate: Import, distance: PackageDistance, origin: Origin) -> ImportWithDistance:
        return cls(candidate, distance.to(candidate.qualifier), origin)

    def sort_key(self) -> tuple[int, int, str, bool]:
        """Closest package first, project before dependency, then lexical qualifier."""
        return (self.distance, self.origin, self.candidate.qualifier, self.candidate.is_static)


def best_by_name(candidates: list[ImportWithDistance]) -> dict[str, Import]:
    """Keep the first candidate per simple name after ranking."""
    best: dict[str, Import] = {}
    for c in sorted(candidates, key=ImportWithDistance.sort_key):
        best.setdefault(c.candidate.name, c.candidate)
    return best
