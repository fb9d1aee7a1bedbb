"""Entry point of the tw() rewrite engine."""

from __future__ import annotations

from typing import TYPE_CHECKING

from config.settings import EngineConfig
from diagnostics.models import Diagnostic, DiagnosticCode, Severity
from parse.treesitter_tsx import SourceSyntaxError, SourceUnit, parse_source
from transform.locate import collect_edits
from transform.rewrite import RewriteResult, apply_edits

if TYPE_CHECKING:
    from diagnostics.sink import DiagnosticsSink


def transform_code(
    code: str,
    source_id: str,
    config: EngineConfig | None,
    sink: DiagnosticsSink,
) -> RewriteResult | None:
    """Rewrite every valid target call in ``code`` into a string literal.

    Parsing, edit collection and edit application run as separate phases; no
    state is kept between invocations.

    Args:
        code: Source text (JS, JSX, TS or TSX).
        source_id: Opaque identifier of the source, usually its path.
        config: Target name and allowed breakpoints (defaults when None).
        sink: Receives a fatal diagnostic on parse failure and warnings for
            calls left untouched.

    Returns:
        The rewritten code with its source map, or None when nothing changed
        or the source could not be parsed.
    """
    if config is None:
        config = EngineConfig()

    unit = SourceUnit(text=code, source_id=source_id)

    try:
        tree = parse_source(unit)
    except SourceSyntaxError as exc:
        sink.report_fatal(
            Diagnostic(
                severity=Severity.FATAL,
                code=DiagnosticCode.PARSE_ERROR,
                message=f"Failed to parse {source_id}: {exc.message}",
                source_id=source_id,
                offset=exc.offset,
            )
        )
        return None

    edits = collect_edits(tree, config, sink)
    return apply_edits(unit, edits)


__all__ = ["transform_code"]
