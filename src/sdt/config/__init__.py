"""Config module exports."""

from sdt.config.loader import load_config
from sdt.config.models import (
    CommandConfig,
    CorrelationConfig,
    DiffConfig,
    LoggingConfig,
    RenderConfig,
    SdtConfig,
    ToolsConfig,
)

__all__ = [
    "load_config",
    "CommandConfig",
    "CorrelationConfig",
    "DiffConfig",
    "LoggingConfig",
    "RenderConfig",
    "SdtConfig",
    "ToolsConfig",
]
