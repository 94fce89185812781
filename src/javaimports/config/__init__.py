"""Config module exports."""

from javaimports.config.loader import load_config
from javaimports.config.models import (
    JavaImportsConfig,
    LoggingConfig,
    LogOutputConfig,
    ResolverConfig,
)
from javaimports.config.options import Options

__all__ = [
    "load_config",
    "JavaImportsConfig",
    "LoggingConfig",
    "LogOutputConfig",
    "Options",
    "ResolverConfig",
]
