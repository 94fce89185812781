"""Tests for error types and codes."""

from pathlib import Path

import pytest

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


class TestErrorCode:
    """Error code value tests."""

    @pytest.mark.parametrize(
        ("code", "expected_range"),
        [
            (ErrorCode.CONFIG_PARSE_ERROR, 2000),
            (ErrorCode.MANIFEST_PARSE_ERROR, 2000),
            (ErrorCode.PARSE_SYNTAX_ERROR, 3000),
            (ErrorCode.PROJECT_WALK_ERROR, 3000),
            (ErrorCode.DEPENDENCY_NOT_FOUND, 4000),
            (ErrorCode.INTERNAL_ERROR, 9000),
        ],
    )
    def test_given_error_code_when_checked_then_in_correct_range(
        self, code: ErrorCode, expected_range: int
    ) -> None:
        """Error codes fall within their designated numeric range."""
        # Given
        error_code = code

        # When
        value = error_code.value

        # Then
        assert expected_range <= value < expected_range + 1000


class TestJavaImportsError:
    """Base error behavior tests."""

    def test_given_error_when_to_dict_then_serializes_all_fields(self) -> None:
        """Error serializes to dict with all required fields."""
        # Given
        error = JavaImportsError(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message="Test message",
            retryable=True,
            details={"key": "value"},
        )

        # When
        result = error.to_dict()

        # Then
        assert result == {
            "code": 2001,
            "error": "CONFIG_PARSE_ERROR",
            "message": "Test message",
            "retryable": True,
            "details": {"key": "value"},
        }

    def test_given_error_when_str_then_human_readable(self) -> None:
        """Error string representation is human readable."""
        error = JavaImportsError(code=ErrorCode.INTERNAL_ERROR, message="Something broke")

        assert str(error) == "[9001] INTERNAL_ERROR: Something broke"

    def test_given_error_when_raised_then_catchable_as_exception(self) -> None:
        """Errors are ordinary exceptions."""
        with pytest.raises(JavaImportsError):
            raise ConfigError.parse_error("/nowhere.yaml", "unexpected end of stream")


class TestConfigError:
    """ConfigError factory method tests."""

    def test_parse_error_includes_path_and_reason(self) -> None:
        """parse_error records where and why."""
        error = ConfigError.parse_error("/a/config.yaml", "bad indent")

        assert error.code == ErrorCode.CONFIG_PARSE_ERROR
        assert "/a/config.yaml" in error.message
        assert error.details == {"path": "/a/config.yaml", "reason": "bad indent"}

    def test_invalid_value_stringifies_value(self) -> None:
        """invalid_value keeps the offending value as text."""
        error = ConfigError.invalid_value("resolver.max_depth", 0, "must be positive")

        assert error.code == ErrorCode.CONFIG_INVALID_VALUE
        assert error.details["value"] == "0"
        assert "resolver.max_depth" in error.message

    def test_manifest_error_is_config_error(self) -> None:
        """Manifest failures belong to the config family."""
        error = ManifestError.malformed("/p/pom.xml", "mismatched tag")

        assert isinstance(error, ConfigError)
        assert error.code == ErrorCode.MANIFEST_PARSE_ERROR

    def test_config_codes_cover_only_raised_failures(self) -> None:
        """Config codes are the ones load_config can produce."""
        codes = [c for c in ErrorCode if 2000 <= c < 2100]

        assert codes == [ErrorCode.CONFIG_PARSE_ERROR, ErrorCode.CONFIG_INVALID_VALUE]


class TestParseError:
    """ParseError diagnostics tests."""

    def test_given_diagnostics_when_created_then_round_trips_them(self) -> None:
        """Diagnostics survive being stored in details."""
        # Given
        diagnostics = [
            Diagnostic("A.java", 3, 4, "missing ';'"),
            Diagnostic("A.java", 7, 0, "unexpected '}'"),
        ]

        # When
        error = ParseError.from_diagnostics(Path("A.java"), diagnostics)

        # Then
        assert error.code == ErrorCode.PARSE_SYNTAX_ERROR
        assert error.file == "A.java"
        assert error.diagnostics == diagnostics
        assert "A.java:3:4: missing ';'" in error.message
        assert "(and 1 more)" in error.message

    def test_unreadable_carries_single_diagnostic(self) -> None:
        """A read failure is reported as one diagnostic at 0:0."""
        error = ParseError.unreadable("/p/B.java", "Permission denied")

        assert error.code == ErrorCode.PARSE_READ_ERROR
        assert error.diagnostics == [Diagnostic("/p/B.java", 0, 0, "Permission denied")]

    def test_diagnostic_str(self) -> None:
        """Diagnostics render as file:line:column: message."""
        assert str(Diagnostic("X.java", 1, 2, "oops")) == "X.java:1:2: oops"


class TestOtherErrors:
    """Remaining factory method tests."""

    def test_project_walk_failed(self) -> None:
        error = ProjectError.walk_failed("/p", "not a directory")

        assert error.code == ErrorCode.PROJECT_WALK_ERROR
        assert error.details == {"root": "/p", "reason": "not a directory"}

    def test_resolution_not_found(self) -> None:
        error = ResolutionError.not_found("g:a:1", Path("/m2/g/a/1/a-1.jar"))

        assert error.code == ErrorCode.DEPENDENCY_NOT_FOUND
        assert error.details["path"] == "/m2/g/a/1/a-1.jar"

    def test_resolution_unreadable(self) -> None:
        error = ResolutionError.unreadable("g:a:1", "/x.jar", "File is not a zip file")

        assert error.code == ErrorCode.DEPENDENCY_UNREADABLE
        assert "File is not a zip file" in error.message

    def test_internal_unexpected_keeps_details(self) -> None:
        error = InternalError.unexpected("boom", file="A.java")

        assert error.code == ErrorCode.INTERNAL_ERROR
        assert error.details["file"] == "A.java"
