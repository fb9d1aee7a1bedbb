"""Source Map v3 artifact correlating rewritten text with the original."""

from __future__ import annotations

from bisect import bisect_right
from typing import NamedTuple

import orjson
from pydantic import BaseModel, ConfigDict, Field

from sourcemap.vlq import decode_segment


class OriginalPosition(NamedTuple):
    source: str
    line: int
    column: int


class SourceMap(BaseModel):
    """Schema for a Source Map v3 document.

    Lines and columns are 0-based; columns count UTF-16 code units.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    version: int = 3
    file: str
    sources: list[str]
    sources_content: list[str | None] = Field(alias="sourcesContent")
    names: list[str] = Field(default_factory=list)
    mappings: str

    def to_dict(self) -> dict[str, object]:
        return self.model_dump(by_alias=True)

    def to_json(self) -> bytes:
        return orjson.dumps(self.to_dict(), option=orjson.OPT_SORT_KEYS)

    def decoded_lines(self) -> list[list[tuple[int, int, int, int]]]:
        """Decode ``mappings`` into absolute ``(gen_col, src, line, col)`` rows."""
        lines: list[list[tuple[int, int, int, int]]] = []
        source = orig_line = orig_col = 0
        for raw_line in self.mappings.split(";"):
            gen_col = 0
            segments: list[tuple[int, int, int, int]] = []
            for raw_segment in raw_line.split(","):
                if not raw_segment:
                    continue
                fields = decode_segment(raw_segment)
                gen_col += fields[0]
                if len(fields) < 4:
                    continue
                source += fields[1]
                orig_line += fields[2]
                orig_col += fields[3]
                segments.append((gen_col, source, orig_line, orig_col))
            lines.append(segments)
        return lines

    def original_position_for(self, line: int, column: int) -> OriginalPosition | None:
        """Map a generated ``(line, column)`` back to the original source.

        Returns the closest segment at or before ``column`` on ``line``, or
        None when the line has no mapping there.
        """
        lines = self.decoded_lines()
        if line < 0 or line >= len(lines):
            return None

        segments = lines[line]
        index = bisect_right([seg[0] for seg in segments], column) - 1
        if index < 0:
            return None

        _, source, orig_line, orig_col = segments[index]
        return OriginalPosition(self.sources[source], orig_line, orig_col)


__all__ = ["OriginalPosition", "SourceMap"]
