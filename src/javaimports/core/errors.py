"""javaimports error types with typed error codes.

Error code ranges:
- 2xxx: Config and build manifests
- 3xxx: Parse
- 4xxx: Dependency resolution
- 9xxx: Internal
"""

from dataclasses import dataclass, field
from enum import IntEnum
from pathlib import Path
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002
    MANIFEST_PARSE_ERROR = 2101

    # Parse (3xxx)
    PARSE_SYNTAX_ERROR = 3001
    PARSE_READ_ERROR = 3002
    PROJECT_WALK_ERROR = 3101

    # Resolution (4xxx)
    DEPENDENCY_NOT_FOUND = 4001
    DEPENDENCY_UNREADABLE = 4002

    # Internal (9xxx)
    INTERNAL_ERROR = 9001


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """A single syntax problem reported while parsing a source file."""

    file: str
    line: int  # 1-based
    column: int  # 0-based
    message: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "file": self.file,
            "line": self.line,
            "column": self.column,
            "message": self.message,
        }

    def __str__(self) -> str:
        return f"{self.file}:{self.line}:{self.column}: {self.message}"


@dataclass(frozen=True, slots=True)
class JavaImportsError(Exception):
    """Base error with structured context."""

    code: ErrorCode
    message: str
    retryable: bool = False
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'PARSE_SYNTAX_ERROR')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON output."""
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "retryable": self.retryable,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ConfigError(JavaImportsError):
    """Configuration-related errors."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message=f"Failed to parse config at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Invalid value for '{field}': {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )


class ManifestError(ConfigError):
    """A build manifest (pom.xml) could not be read."""

    @classmethod
    def malformed(cls, path: str, reason: str) -> "ManifestError":
        return cls(
            code=ErrorCode.MANIFEST_PARSE_ERROR,
            message=f"Failed to parse manifest at {path}: {reason}",
            details={"path": path, "reason": reason},
        )


class ParseError(JavaImportsError):
    """A source file is not syntactically valid Java, or could not be read."""

    @property
    def file(self) -> str:
        return str(self.details.get("file", ""))

    @property
    def diagnostics(self) -> list[Diagnostic]:
        return [Diagnostic(**d) for d in self.details.get("diagnostics", [])]

    @classmethod
    def from_diagnostics(cls, path: Path | str, diagnostics: list[Diagnostic]) -> "ParseError":
        first = diagnostics[0] if diagnostics else None
        summary = str(first) if first else "syntax error"
        if len(diagnostics) > 1:
            summary += f" (and {len(diagnostics) - 1} more)"
        return cls(
            code=ErrorCode.PARSE_SYNTAX_ERROR,
            message=f"Could not parse {path}: {summary}",
            details={"file": str(path), "diagnostics": [d.to_dict() for d in diagnostics]},
        )

    @classmethod
    def unreadable(cls, path: Path | str, reason: str) -> "ParseError":
        return cls(
            code=ErrorCode.PARSE_READ_ERROR,
            message=f"Could not read {path}: {reason}",
            details={
                "file": str(path),
                "diagnostics": [Diagnostic(str(path), 0, 0, reason).to_dict()],
            },
        )


class ProjectError(JavaImportsError):
    """The project directory itself could not be enumerated."""

    @classmethod
    def walk_failed(cls, root: Path | str, reason: str) -> "ProjectError":
        return cls(
            code=ErrorCode.PROJECT_WALK_ERROR,
            message=f"Could not list project files under {root}: {reason}",
            details={"root": str(root), "reason": reason},
        )


class ResolutionError(JavaImportsError):
    """A dependency archive could not be located, opened or scanned."""

    @classmethod
    def not_found(cls, dependency: str, path: Path | str) -> "ResolutionError":
        return cls(
            code=ErrorCode.DEPENDENCY_NOT_FOUND,
            message=f"No archive for {dependency} at {path}",
            details={"dependency": dependency, "path": str(path)},
        )

    @classmethod
    def unreadable(cls, dependency: str, path: Path | str, reason: str) -> "ResolutionError":
        return cls(
            code=ErrorCode.DEPENDENCY_UNREADABLE,
            message=f"Could not scan {dependency} at {path}: {reason}",
            details={"dependency": dependency, "path": str(path), "reason": reason},
        )


class InternalError(JavaImportsError):
    """Internal/unexpected errors."""

    @classmethod
    def unexpected(cls, reason: str, **details: Any) -> "InternalError":
        return cls(
            code=ErrorCode.INTERNAL_ERROR,
            message=f"Internal error: {reason}",
            details=details,
        )
