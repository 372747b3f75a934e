"""Core module exports."""

from sdt.core.errors import (
    ConfigError,
    ErrorCode,
    HunkHeaderError,
    RevisionError,
    SdtError,
    StagingError,
    ToolError,
    UnsupportedLanguageError,
)
from sdt.core.logging import (
    comparison_scope,
    configure_logging,
    get_comparison_id,
    get_logger,
)

__all__ = [
    # Errors
    "ConfigError",
    "ErrorCode",
    "HunkHeaderError",
    "RevisionError",
    "SdtError",
    "StagingError",
    "ToolError",
    "UnsupportedLanguageError",
    # Logging
    "comparison_scope",
    "configure_logging",
    "get_comparison_id",
    "get_logger",
]
