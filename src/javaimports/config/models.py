"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (JAVAIMPORTS__SECTION__KEY)
3. Project YAML (<project>/.javaimports/config.yaml)
4. Global YAML (~/.config/javaimports/config.yaml)
5. Built-in defaults (this file)

Environment Variable Format:
    JAVAIMPORTS__<SECTION>__<KEY>=<VALUE>

Examples:
    JAVAIMPORTS__LOGGING__LEVEL=DEBUG
    JAVAIMPORTS__RESOLVER__DEBUG=true
    JAVAIMPORTS__RESOLVER__REPOSITORY_PATH=/opt/m2/repository
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from javaimports.config.constants import DEFAULT_REPOSITORY, PROJECT_MAX_DEPTH

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LogOutputConfig(BaseModel):
    """Single logging output configuration.

    Env vars: Not directly configurable via env (use YAML for multi-output).
    """

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        JAVAIMPORTS__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="WARNING",
        description="Root log level. The CLI raises it to DEBUG with --verbose.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class ResolverConfig(BaseModel):
    """Import resolution configuration.

    Env vars:
        JAVAIMPORTS__RESOLVER__REPOSITORY_PATH: Local Maven repository
        JAVAIMPORTS__RESOLVER__DEBUG: Emit per-step diagnostics
        JAVAIMPORTS__RESOLVER__MAX_DEPTH: Project walk depth bound
    """

    repository_path: Path | None = Field(
        default=None,
        description="Local Maven repository holding dependency jars. "
        "Default: ~/.m2/repository.",
    )
    debug: bool = Field(
        default=False,
        description="Log parse timings, dependency scans and failures. "
        "Never changes which import is chosen.",
    )
    max_depth: int = Field(
        default=PROJECT_MAX_DEPTH,
        description="Maximum directory depth explored when indexing project sources.",
    )

    @field_validator("repository_path")
    @classmethod
    def expand_repository(cls, v: Path | None) -> Path | None:
        return v.expanduser() if v is not None else None

    @field_validator("max_depth")
    @classmethod
    def validate_max_depth(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"max_depth must be positive, got {v}")
        return v

    @property
    def repository(self) -> Path:
        return self.repository_path or DEFAULT_REPOSITORY


class JavaImportsConfig(BaseModel):
    """Root configuration for javaimports."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    resolver: ResolverConfig = Field(default_factory=ResolverConfig)
