from __future__ import annotations

import re
from pathlib import Path
from typing import Any

import tomllib
from pydantic import BaseModel, ConfigDict, Field, field_validator

CONFIG_FILENAME = "twclassname.toml"

DEFAULT_TARGET_NAME = "tw"

DEFAULT_BREAKPOINTS: tuple[str, ...] = ("sm", "md", "lg", "xl", "2xl")

DEFAULT_INCLUDE: tuple[str, ...] = ("*.js", "*.jsx", "*.ts", "*.tsx")

DEFAULT_EXCLUDE: tuple[str, ...] = ("node_modules/*", "*/node_modules/*")

_IDENTIFIER_RE = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


def _validate_breakpoints(value: Any) -> Any:
    if isinstance(value, str) or not isinstance(value, (list, tuple)):
        msg = "breakpoints must be a list of strings"
        raise ValueError(msg)

    if not value:
        msg = "breakpoints must not be empty"
        raise ValueError(msg)

    seen: set[str] = set()
    for name in value:
        if not isinstance(name, str) or not name or any(c.isspace() for c in name):
            msg = f"Invalid breakpoint {name!r}: expected a non-empty token"
            raise ValueError(msg)
        if name in seen:
            msg = f"Duplicate breakpoint {name!r}"
            raise ValueError(msg)
        seen.add(name)

    return tuple(value)


def _validate_target_name(value: Any) -> Any:
    if not isinstance(value, str) or not _IDENTIFIER_RE.match(value):
        msg = f"target_name must be a bare identifier, got {value!r}"
        raise ValueError(msg)
    return value


class EngineConfig(BaseModel):
    """Settings threaded into every rewrite engine invocation."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    target_name: str = Field(
        default=DEFAULT_TARGET_NAME,
        description="Callee identifier recognized as the rewrite target",
    )
    breakpoints: tuple[str, ...] = Field(
        default=DEFAULT_BREAKPOINTS,
        description="Allowed variant names, in declaration order",
    )

    @field_validator("target_name", mode="before")
    @classmethod
    def validate_target_name(cls, v: Any) -> Any:
        return _validate_target_name(v)

    @field_validator("breakpoints", mode="before")
    @classmethod
    def validate_breakpoints(cls, v: Any) -> Any:
        return _validate_breakpoints(v)


class TwClassnameConfig(BaseModel):
    """Configuration for running the rewriter over a project tree."""

    model_config = ConfigDict(extra="forbid")

    target_name: str = Field(
        default=DEFAULT_TARGET_NAME,
        description="Callee identifier recognized as the rewrite target",
    )
    breakpoints: tuple[str, ...] = Field(
        default=DEFAULT_BREAKPOINTS,
        description="Custom breakpoints to support",
    )
    include: list[str] = Field(
        default_factory=lambda: list(DEFAULT_INCLUDE),
        description="Glob patterns for files to transform",
    )
    exclude: list[str] = Field(
        default_factory=lambda: list(DEFAULT_EXCLUDE),
        description="Glob patterns for files to skip",
    )
    output_dir: str = Field(
        default=".twclassname",
        description="Output directory for transformed files and maps",
    )
    nested_gitignore: bool = Field(
        default=False,
        description="Enable nested .gitignore composition (default: root-only)",
    )
    debug: bool = Field(default=False, description="Enable debug logging")

    @field_validator("target_name", mode="before")
    @classmethod
    def validate_target_name(cls, v: Any) -> Any:
        return _validate_target_name(v)

    @field_validator("breakpoints", mode="before")
    @classmethod
    def validate_breakpoints(cls, v: Any) -> Any:
        """Validate that breakpoints form a non-empty list of unique tokens.

        Note: this runs in `mode="before"` so the error message reports the
        raw TOML values.
        """
        return _validate_breakpoints(v)

    def engine_config(self) -> EngineConfig:
        return EngineConfig(
            target_name=self.target_name,
            breakpoints=self.breakpoints,
        )


class ConfigError(Exception):
    """Raised when config file exists but cannot be parsed."""


def resolve_output_dir(root: Path, output_dir: str) -> Path:
    """Resolve a config-provided output_dir safely within the project root.

    The config output_dir must be a non-empty relative path that remains
    within the project root after resolution. Absolute paths and paths
    that escape the root are rejected.
    """
    if not output_dir:
        msg = "output_dir must be a non-empty relative path"
        raise ConfigError(msg)

    if output_dir.startswith("~"):
        msg = "output_dir must be a relative path within the project root"
        raise ConfigError(msg)

    output_path = Path(output_dir)
    if output_path.is_absolute():
        msg = "output_dir must be a relative path within the project root"
        raise ConfigError(msg)

    try:
        resolved_root = root.resolve()
        resolved_output = (resolved_root / output_path).resolve()
    except OSError as exc:
        msg = f"Failed to resolve output_dir '{output_dir}': {exc}"
        raise ConfigError(msg) from exc

    try:
        resolved_output.relative_to(resolved_root)
    except ValueError as exc:
        msg = f"output_dir '{output_dir}' escapes the project root"
        raise ConfigError(msg) from exc

    return resolved_output


def load_config(root: Path) -> TwClassnameConfig:
    """Load configuration from twclassname.toml if it exists."""
    config_path = Path(root) / CONFIG_FILENAME

    if not config_path.is_file():
        return TwClassnameConfig()

    try:
        with config_path.open("rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        msg = f"Invalid TOML in {config_path}: {e}"
        raise ConfigError(msg) from e

    try:
        return TwClassnameConfig.model_validate(data)
    except Exception as e:
        msg = f"Invalid config in {config_path}: {e}"
        raise ConfigError(msg) from e
