"""Configuration for the tw() rewriter."""

from config.settings import (
    CONFIG_FILENAME,
    DEFAULT_BREAKPOINTS,
    DEFAULT_TARGET_NAME,
    ConfigError,
    EngineConfig,
    TwClassnameConfig,
    load_config,
    resolve_output_dir,
)

__all__ = [
    "CONFIG_FILENAME",
    "DEFAULT_BREAKPOINTS",
    "DEFAULT_TARGET_NAME",
    "ConfigError",
    "EngineConfig",
    "TwClassnameConfig",
    "load_config",
    "resolve_output_dir",
]
