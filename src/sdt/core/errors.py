"""sdt error types with typed error codes.

Error code ranges:
- 2xxx: Config
- 3xxx: Parser tools and language support
- 4xxx: Revisions
- 5xxx: Diff parsing
- 6xxx: Staging / IO
- 9xxx: Internal
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002

    # Tools (3xxx)
    TOOL_UNAVAILABLE = 3001
    TOOL_FAILED = 3002
    TOOL_TIMEOUT = 3003
    UNSUPPORTED_LANGUAGE = 3101

    # Revisions (4xxx)
    REVISION_UNAVAILABLE = 4001

    # Diff (5xxx)
    MALFORMED_HUNK_HEADER = 5001

    # Staging (6xxx)
    IO_FAILURE = 6001

    # Internal (9xxx)
    INTERNAL_ERROR = 9001


@dataclass(frozen=True)
class SdtError(Exception):
    """Base error with structured context for reports and logs."""

    code: ErrorCode
    message: str
    retryable: bool = False
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'TOOL_UNAVAILABLE')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "retryable": self.retryable,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ConfigError(SdtError):
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


class ToolError(SdtError):
    """A configured parser tool could not produce a tree."""

    @classmethod
    def unavailable(cls, executable: str, reason: str) -> "ToolError":
        return cls(
            code=ErrorCode.TOOL_UNAVAILABLE,
            message=f"Parser tool '{executable}' cannot be run: {reason}",
            details={"executable": executable, "reason": reason},
        )

    @classmethod
    def failed(cls, executable: str, path: str, returncode: int, stderr: str) -> "ToolError":
        tail = stderr.strip().splitlines()[-1] if stderr.strip() else "no output"
        return cls(
            code=ErrorCode.TOOL_FAILED,
            message=f"Could not create parse tree for {path}: {tail}",
            details={
                "executable": executable,
                "path": path,
                "returncode": returncode,
                "stderr": stderr,
            },
        )

    @classmethod
    def timed_out(cls, executable: str, path: str, timeout: float) -> "ToolError":
        return cls(
            code=ErrorCode.TOOL_TIMEOUT,
            message=f"Parser tool '{executable}' timed out after {timeout:g}s on {path}",
            retryable=True,
            details={"executable": executable, "path": path, "timeout": timeout},
        )


class UnsupportedLanguageError(SdtError):
    """No analyzer exists for a file's format."""

    @classmethod
    def no_analyzer(cls, path: str, reason: str = "") -> "UnsupportedLanguageError":
        return cls(
            code=ErrorCode.UNSUPPORTED_LANGUAGE,
            message="No available semantic analyzer for this format",
            details={"path": path, "reason": reason},
        )


class RevisionError(SdtError):
    """A requested revision of a file cannot be retrieved."""

    @classmethod
    def unavailable(cls, rev: str, path: str | None = None) -> "RevisionError":
        target = f"{rev}:{path}" if path else rev
        return cls(
            code=ErrorCode.REVISION_UNAVAILABLE,
            message=f"Unable to retrieve {target}",
            details={"rev": rev, "path": path},
        )


class HunkHeaderError(SdtError):
    """A diff hunk header could not be parsed."""

    @classmethod
    def malformed(cls, header: str) -> "HunkHeaderError":
        return cls(
            code=ErrorCode.MALFORMED_HUNK_HEADER,
            message=f"Malformed hunk header: {header!r}",
            details={"header": header},
        )


class StagingError(SdtError):
    """Temporary storage for a file version could not be written or read."""

    @classmethod
    def io_failure(cls, path: str, reason: str) -> "StagingError":
        return cls(
            code=ErrorCode.IO_FAILURE,
            message=f"I/O failure on {path}: {reason}",
            details={"path": path, "reason": reason},
        )
