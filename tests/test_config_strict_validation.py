from __future__ import annotations

from pathlib import Path

import pytest

from config.settings import (
    DEFAULT_BREAKPOINTS,
    ConfigError,
    EngineConfig,
    load_config,
    resolve_output_dir,
)


def _write_config(project_root: Path, toml_content: str) -> None:
    (project_root / "twclassname.toml").write_text(toml_content, encoding="utf-8")


def test_missing_config_uses_defaults(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert config.target_name == "tw"
    assert config.breakpoints == DEFAULT_BREAKPOINTS
    assert config.include == ["*.js", "*.jsx", "*.ts", "*.tsx"]
    assert config.exclude == ["node_modules/*", "*/node_modules/*"]
    assert config.debug is False


def test_valid_config_accepted(tmp_path: Path) -> None:
    _write_config(
        tmp_path,
        """
target_name = "cx"
breakpoints = ["tablet", "desktop"]
exclude = ["dist/*"]
debug = true
""".strip(),
    )

    config = load_config(tmp_path)

    assert config.target_name == "cx"
    assert config.breakpoints == ("tablet", "desktop")
    assert config.exclude == ["dist/*"]
    assert config.debug is True
    assert config.engine_config() == EngineConfig(
        target_name="cx", breakpoints=("tablet", "desktop")
    )


def test_unknown_top_level_key_rejected(tmp_path: Path) -> None:
    _write_config(tmp_path, "bogus_key = true")

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_invalid_toml_rejected(tmp_path: Path) -> None:
    _write_config(tmp_path, "breakpoints = [")

    with pytest.raises(ConfigError, match="Invalid TOML"):
        load_config(tmp_path)


@pytest.mark.parametrize(
    "toml_content",
    [
        "breakpoints = []",
        'breakpoints = ["md", "md"]',
        'breakpoints = ["m d"]',
        'breakpoints = [""]',
        "breakpoints = [1, 2]",
        'breakpoints = "md"',
        'target_name = "tw()"',
        'target_name = ""',
    ],
)
def test_invalid_values_rejected(tmp_path: Path, toml_content: str) -> None:
    _write_config(tmp_path, toml_content)

    with pytest.raises(ConfigError, match="Invalid config"):
        load_config(tmp_path)


def test_engine_config_is_frozen() -> None:
    config = EngineConfig()

    with pytest.raises(Exception):
        config.target_name = "cx"  # type: ignore[misc]


@pytest.mark.parametrize("output_dir", ["", "~/out", "/abs/out", "../escape"])
def test_resolve_output_dir_rejects_unsafe_paths(
    tmp_path: Path, output_dir: str
) -> None:
    with pytest.raises(ConfigError):
        resolve_output_dir(tmp_path, output_dir)


def test_resolve_output_dir_accepts_nested_relative_path(tmp_path: Path) -> None:
    resolved = resolve_output_dir(tmp_path, "build/tw")

    assert resolved == (tmp_path / "build" / "tw").resolve()
