"""Single-pass application of edits to the original text."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from sourcemap.builder import SourceMapBuilder

if TYPE_CHECKING:
    from collections.abc import Sequence

    from parse.treesitter_tsx import SourceUnit
    from sourcemap.models import SourceMap


@dataclass(frozen=True)
class Edit:
    """Replace ``text[start:end]`` with ``replacement``."""

    start: int
    end: int
    replacement: str


@dataclass(frozen=True)
class RewriteResult:
    code: str
    map: SourceMap


def apply_edits(unit: SourceUnit, edits: Sequence[Edit]) -> RewriteResult | None:
    """Apply ``edits`` to ``unit.text`` left to right.

    Edits must be sorted by start offset and disjoint. Returns None when there
    is nothing to apply.

    Raises:
        ValueError: If edits are out of order, overlap or fall outside the text.
    """
    if not edits:
        return None

    text = unit.text
    builder = SourceMapBuilder(text, unit.source_id)
    chunks: list[str] = []
    cursor = 0

    for edit in edits:
        if edit.start < cursor or edit.end < edit.start or edit.end > len(text):
            msg = (
                f"Edit [{edit.start}, {edit.end}) is out of order, overlapping "
                f"or outside the text of {unit.source_id}"
            )
            raise ValueError(msg)

        chunks.append(text[cursor : edit.start])
        builder.copy(edit.start)

        chunks.append(edit.replacement)
        builder.replace(edit.end, edit.replacement)

        cursor = edit.end

    chunks.append(text[cursor:])
    builder.copy(len(text))

    return RewriteResult(code="".join(chunks), map=builder.build())


__all__ = ["Edit", "RewriteResult", "apply_edits"]
