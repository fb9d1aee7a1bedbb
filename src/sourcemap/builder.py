"""Incremental high-resolution source map construction."""

from __future__ import annotations

from sourcemap.models import SourceMap
from sourcemap.vlq import encode_segment


def _utf16_width(ch: str) -> int:
    return 2 if ord(ch) > 0xFFFF else 1


def _posix(source_id: str) -> str:
    return source_id.replace("\\", "/")


class SourceMapBuilder:
    """Records generated-to-original correspondences during one rewrite pass.

    The caller walks the original text left to right, calling ``copy`` for
    spans kept verbatim and ``replace`` for spans substituted by new text.
    Verbatim characters each get their own segment; a replacement gets one
    segment pointing at the start of the span it replaced.
    """

    def __init__(self, original: str, source_id: str) -> None:
        self._original = original
        self._source_id = source_id
        self._pos = 0
        self._orig_line = 0
        self._orig_col = 0
        self._gen_col = 0
        self._lines: list[list[tuple[int, int, int]]] = [[]]

    def _add_segment(self) -> None:
        self._lines[-1].append((self._gen_col, self._orig_line, self._orig_col))

    def _new_generated_line(self) -> None:
        self._lines.append([])
        self._gen_col = 0

    def _advance_original(self, ch: str) -> None:
        if ch == "\n":
            self._orig_line += 1
            self._orig_col = 0
        else:
            self._orig_col += _utf16_width(ch)

    def copy(self, end: int) -> None:
        """Emit the original text up to ``end`` unchanged."""
        if end < self._pos or end > len(self._original):
            msg = f"copy end {end} outside [{self._pos}, {len(self._original)}]"
            raise ValueError(msg)

        for ch in self._original[self._pos : end]:
            if ch == "\n":
                self._new_generated_line()
            else:
                self._add_segment()
                self._gen_col += _utf16_width(ch)
            self._advance_original(ch)
        self._pos = end

    def replace(self, end: int, replacement: str) -> None:
        """Emit ``replacement`` in place of the original text up to ``end``."""
        if end < self._pos or end > len(self._original):
            msg = f"replace end {end} outside [{self._pos}, {len(self._original)}]"
            raise ValueError(msg)

        if replacement:
            self._add_segment()
        for index, ch in enumerate(replacement):
            if ch == "\n":
                self._new_generated_line()
                if index + 1 < len(replacement):
                    self._add_segment()
            else:
                self._gen_col += _utf16_width(ch)

        for ch in self._original[self._pos : end]:
            self._advance_original(ch)
        self._pos = end

    def _encode_mappings(self) -> str:
        prev_line = prev_col = 0
        encoded_lines: list[str] = []
        for segments in self._lines:
            prev_gen_col = 0
            encoded: list[str] = []
            for gen_col, orig_line, orig_col in segments:
                encoded.append(
                    encode_segment(
                        (
                            gen_col - prev_gen_col,
                            0,
                            orig_line - prev_line,
                            orig_col - prev_col,
                        )
                    )
                )
                prev_gen_col = gen_col
                prev_line = orig_line
                prev_col = orig_col
            encoded_lines.append(",".join(encoded))
        return ";".join(encoded_lines)

    def build(self) -> SourceMap:
        source = _posix(self._source_id)
        return SourceMap(
            file=source.rsplit("/", 1)[-1],
            sources=[source],
            sources_content=[self._original],
            names=[],
            mappings=self._encode_mappings(),
        )


__all__ = ["SourceMapBuilder"]
