"""gitbaseline application error types with typed error codes.

Error code ranges:
- 2xxx: Config
- 3xxx: CI environment

Git failures (missing baseline, missing branch, remote errors) live in
gitbaseline.git.errors.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002

    # CI environment (3xxx)
    CI_NOT_DETECTED = 3001
    CI_PROPERTY_MISSING = 3002


@dataclass(frozen=True, slots=True)
class GitBaselineError(Exception):
    """Base error with structured context for CLI and JSON output."""

    code: ErrorCode
    message: str
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'CONFIG_PARSE_ERROR')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON output."""
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ConfigError(GitBaselineError):
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


class CIEnvironmentError(GitBaselineError):
    """Build server values needed to rebuild the repository are unavailable."""

    @classmethod
    def not_detected(cls, path: str) -> "CIEnvironmentError":
        return cls(
            code=ErrorCode.CI_NOT_DETECTED,
            message=f"No git metadata under {path} and no build server configuration found",
            details={"path": path},
        )

    @classmethod
    def property_missing(cls, name: str) -> "CIEnvironmentError":
        return cls(
            code=ErrorCode.CI_PROPERTY_MISSING,
            message=f"Build server configuration property is not set: {name}",
            details={"property": name},
        )
