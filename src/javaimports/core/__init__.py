"""Core module exports."""

from javaimports.core.errors import (
    ConfigError,
    Diagnostic,
    ErrorCode,
    InternalError,
    JavaImportsError,
    ManifestError,
    ParseError,
    ProjectError,
    ResolutionError,
)
from javaimports.core.logging import configure_logging, get_logger

__all__ = [
    # Errors
    "ConfigError",
    "Diagnostic",
    "ErrorCode",
    "InternalError",
    "JavaImportsError",
    "ManifestError",
    "ParseError",
    "ProjectError",
    "ResolutionError",
    # Logging
    "configure_logging",
    "get_logger",
]
