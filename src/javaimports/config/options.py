"""Per-session resolution options.

``Options`` is what a resolver actually consumes: the resolved repository
location, the debug flag, the walk bound, and the logger diagnostics go to.
The logger is injected here rather than looked up globally so that each
session can carry its own bound context.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from javaimports.config.constants import DEFAULT_REPOSITORY, PROJECT_MAX_DEPTH
from javaimports.core.logging import get_logger

if TYPE_CHECKING:
    import structlog

    from javaimports.config.models import ResolverConfig


@dataclass(frozen=True)
class Options:
    repository: Path = DEFAULT_REPOSITORY
    debug: bool = False
    max_depth: int = PROJECT_MAX_DEPTH
    logger: structlog.stdlib.BoundLogger = field(
        default_factory=lambda: get_logger("javaimports"), repr=False, compare=False
    )

    @classmethod
    def defaults(cls) -> Options:
        return cls()

    @classmethod
    def from_config(
        cls,
        config: ResolverConfig,
        logger: structlog.stdlib.BoundLogger | None = None,
    ) -> Options:
        return cls(
            repository=config.repository,
            debug=config.debug,
            max_depth=config.max_depth,
            logger=logger if logger is not None else get_logger("javaimports"),
        )
