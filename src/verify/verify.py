"""Determinism and idempotence verification for the rewrite engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from config.settings import load_config
from diagnostics.sink import CollectingSink
from host.pipeline import iter_file_outcomes
from transform.engine import transform_code

if TYPE_CHECKING:
    from pathlib import Path

    from config.settings import TwClassnameConfig


@dataclass(frozen=True)
class VerifyResult:
    ok: bool
    checked: int = 0
    impure: tuple[str, ...] = field(default_factory=tuple)
    not_idempotent: tuple[str, ...] = field(default_factory=tuple)


def verify_transform(
    *, root: Path, config: TwClassnameConfig | None = None
) -> VerifyResult:
    """Verify that transforming the project is pure and idempotent.

    Every transformed file is rewritten a second time from its original text;
    the code, the source map and the diagnostics must be identical. The
    rewritten code is then fed back to the engine, which must report no
    change.

    Args:
        root: Project root to analyze.
        config: Optional configuration (default: loaded from root).

    Returns:
        VerifyResult with ok status and sorted lists of offending source ids.
    """
    if config is None:
        config = load_config(root)

    engine_config = config.engine_config()
    impure: list[str] = []
    not_idempotent: list[str] = []
    checked = 0

    for outcome in iter_file_outcomes(root, config):
        if outcome.result is None:
            continue
        checked += 1

        code = outcome.path.read_bytes().decode("utf-8")
        rerun_sink = CollectingSink()
        rerun = transform_code(code, outcome.source_id, engine_config, rerun_sink)
        if (
            rerun is None
            or rerun.code != outcome.result.code
            or rerun.map != outcome.result.map
            or tuple(rerun_sink.diagnostics) != outcome.diagnostics
        ):
            impure.append(outcome.source_id)

        second_pass = transform_code(
            outcome.result.code, outcome.source_id, engine_config, CollectingSink()
        )
        if second_pass is not None:
            not_idempotent.append(outcome.source_id)

    return VerifyResult(
        ok=not impure and not not_idempotent,
        checked=checked,
        impure=tuple(sorted(impure)),
        not_idempotent=tuple(sorted(not_idempotent)),
    )


__all__ = ["VerifyResult", "verify_transform"]
