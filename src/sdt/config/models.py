"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (SDT__SECTION__KEY)
3. Project YAML (.sdt.yaml)
4. Global YAML (~/.config/sdt/config.yaml)
5. Built-in defaults (this file)

Environment Variable Format:
    SDT__<SECTION>__<KEY>=<VALUE>

Examples:
    SDT__RENDER__STYLE=dumbterm
    SDT__RENDER__MINIMAL=true
    SDT__TOOLS__TIMEOUT_SEC=60
    SDT__LOGGING__LEVEL=DEBUG
"""

import sys
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
RenderStyleName = Literal["color", "dumbterm", "plain"]

OPTIONS_PLACEHOLDER = "${OPTIONS}"

_ACORN_SCRIPT = (
    "const acorn = require('acorn'); const fs = require('fs');"
    " const src = fs.readFileSync(process.argv[1], 'utf8');"
    " console.log(JSON.stringify(acorn.parse(src, ${OPTIONS}), null, 1));"
)


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
        SDT__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="WARNING",
        description="Root log level. --verbose switches this to DEBUG.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class CommandConfig(BaseModel):
    """External parser command for one language.

    The file to parse is appended after the switches. Any switch containing
    ${OPTIONS} has it replaced with `options` before the command runs.
    """

    executable: str
    switches: list[str] = Field(default_factory=list)
    options: str = ""

    @field_validator("executable")
    @classmethod
    def validate_executable(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("executable must not be empty")
        return v

    def argv(self, path: Path | str) -> list[str]:
        """Full command line for parsing `path`."""
        switches = [s.replace(OPTIONS_PLACEHOLDER, self.options) for s in self.switches]
        return [self.executable, *switches, str(path)]


def _dumper(module: str) -> CommandConfig:
    return CommandConfig(executable=sys.executable, switches=["-m", f"sdt.dumpers.{module}"])


def default_commands() -> dict[str, CommandConfig]:
    """Built-in parser commands, keyed by profile command key."""
    return {
        "python": _dumper("pyast"),
        "ruby": CommandConfig(executable="ruby", switches=["--dump=parsetree"]),
        "javascript": CommandConfig(
            executable="node",
            switches=["-e", _ACORN_SCRIPT],
            options='{"ecmaVersion": "latest", "sourceType": "module"}',
        ),
        "sql": _dumper("sqlformat"),
        "json": _dumper("jsonformat"),
        "go": _dumper("treesit"),
        "treesit": _dumper("treesit"),
    }


def merge_default_commands(v: Any) -> Any:
    """User commands replace built-ins per language; other languages keep defaults."""
    if not isinstance(v, dict):
        return v
    merged: dict[str, Any] = dict(default_commands())
    merged.update(v)
    return merged


class RenderConfig(BaseModel):
    """Report rendering preferences.

    Env vars:
        SDT__RENDER__STYLE: color, dumbterm, or plain
        SDT__RENDER__MINIMAL: Only show changed lines and hunk headers
    """

    style: RenderStyleName = Field(
        default="color",
        description="color uses ANSI escapes; dumbterm uses {{+ }} / {{- }} markers; "
        "plain adds no markup.",
    )
    minimal: bool = Field(
        default=False,
        description="Keep only lines carrying a change marker plus hunk headers.",
    )


class ToolsConfig(BaseModel):
    """Parser tool execution.

    Env vars:
        SDT__TOOLS__TIMEOUT_SEC: Per-invocation timeout
    """

    timeout_sec: float = Field(
        default=30.0,
        description="Kill a parser tool that runs longer than this. A timeout is a failure.",
    )

    @field_validator("timeout_sec")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError(f"timeout must be positive, got {v}")
        return v


class DiffConfig(BaseModel):
    """Structural text diff tuning.

    Env vars:
        SDT__DIFF__TIMEOUT_SEC: diff-match-patch time budget (0 = unlimited)
    """

    timeout_sec: float = Field(
        default=1.0,
        description="Time budget for diffing large trees. On expiry the diff is valid "
        "but less minimal.",
    )


class CorrelationConfig(BaseModel):
    """Diff-to-source correlation tuning.

    Env vars: Not directly configurable via env (use YAML).
    """

    window_radius: dict[str, int] = Field(
        default_factory=dict,
        description="Per-profile override of the number of raw tree lines searched on "
        "each side of a structural hunk, e.g. {python: 6}.",
    )

    @field_validator("window_radius")
    @classmethod
    def validate_radius(cls, v: dict[str, int]) -> dict[str, int]:
        for name, radius in v.items():
            if radius < 0:
                raise ValueError(f"window radius for {name} must be >= 0, got {radius}")
        return v


class SdtConfig(BaseModel):
    """Root configuration."""

    description: str = "Built-in semantic diff defaults"
    glob: str = Field(default="*", description="Only compare files matching this pattern.")
    commands: dict[str, CommandConfig] = Field(default_factory=default_commands)
    render: RenderConfig = Field(default_factory=RenderConfig)
    tools: ToolsConfig = Field(default_factory=ToolsConfig)
    diff: DiffConfig = Field(default_factory=DiffConfig)
    correlation: CorrelationConfig = Field(default_factory=CorrelationConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @field_validator("commands", mode="before")
    @classmethod
    def validate_commands(cls, v: Any) -> Any:
        return merge_default_commands(v)
