"""Package proximity used to rank import candidates."""

from __future__ import annotations

from dataclasses import dataclass

from javaimports.config.constants import PACKAGE_SEPARATOR


def _segments(package: str) -> tuple[str, ...]:
    if not package:
        return ()
    return tuple(package.split(PACKAGE_SEPARATOR))


def distance(from_package: str, to_package: str) -> int:
    """Number of package segments not shared between the two packages.

    Segments are compared left to right; the count is taken over both
    sides once the common prefix ends. The default (empty) package has no
    segments, so its distance to ``a.b`` is 2.

    Examples:
        >>> distance("a", "a")
        0
        >>> distance("a", "a.b")
        1
        >>> distance("a.b.c", "a.x")
        3
    """
    source, target = _segments(from_package), _segments(to_package)
    common = 0
    for left, right in zip(source, target):
        if left != right:
            break
        common += 1
    return (len(source) - common) + (len(target) - common)


@dataclass(frozen=True, slots=True)
class PackageDistance:
    """Distance from one fixed package to any other."""

    package: str

    @classmethod
    def from_package(cls, package: str) -> PackageDistance:
        return cls(package)

    def to(self, other: str) -> int:
        return distance(self.package, other)
