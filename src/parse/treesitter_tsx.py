"""Tree-sitter based parsing of JavaScript/TypeScript/JSX sources."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from tree_sitter import Language, Node, Parser
from tree_sitter_typescript import language_tsx as get_tsx_language

if TYPE_CHECKING:
    from collections.abc import Iterator

_LANGUAGE: Language | None = None


def _get_language() -> Language:
    """Return the TSX grammar, which also accepts plain JS, JSX and TS."""
    global _LANGUAGE
    if _LANGUAGE is None:
        _LANGUAGE = Language(get_tsx_language())

    return _LANGUAGE


def _new_parser() -> Parser:
    # Parsers hold mutable state; one per invocation.
    return Parser(_get_language())


@dataclass(frozen=True)
class SourceUnit:
    """One file's text plus its opaque identifier (usually a path)."""

    text: str
    source_id: str


class SourceSyntaxError(Exception):
    """Raised when source text cannot be parsed."""

    def __init__(self, message: str, offset: int) -> None:
        super().__init__(message)
        self.message = message
        self.offset = offset


def _utf8_width(ch: str) -> int:
    code = ord(ch)
    if code < 0x80:
        return 1
    if code < 0x800:
        return 2
    if code < 0x10000:
        return 3
    return 4


def _build_byte_to_char(text: str, byte_length: int) -> list[int]:
    """Map every UTF-8 byte offset to the index of the character it falls in."""
    table = [0] * (byte_length + 1)
    byte_pos = 0
    for char_index, ch in enumerate(text):
        for _ in range(_utf8_width(ch)):
            table[byte_pos] = char_index
            byte_pos += 1
    table[byte_length] = len(text)
    return table


@dataclass
class SyntaxTree:
    """Parsed tree of a SourceUnit with offsets into the original text.

    Node offsets reported by this class are character offsets into
    ``unit.text``, always satisfying ``0 <= start <= end <= len(text)``.
    """

    unit: SourceUnit
    root: Node
    source_bytes: bytes
    _byte_to_char: list[int] | None = field(default=None, repr=False)

    def __post_init__(self) -> None:
        if len(self.source_bytes) != len(self.unit.text):
            self._byte_to_char = _build_byte_to_char(
                self.unit.text, len(self.source_bytes)
            )

    def char_offset(self, byte_offset: int) -> int:
        if self._byte_to_char is None:
            return byte_offset
        return self._byte_to_char[byte_offset]

    def node_range(self, node: Node) -> tuple[int, int]:
        return self.char_offset(node.start_byte), self.char_offset(node.end_byte)

    def node_text(self, node: Node) -> str:
        return self.source_bytes[node.start_byte : node.end_byte].decode("utf8")

    def walk(self) -> Iterator[Node]:
        """Yield every node in document (pre-)order."""
        stack = [self.root]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))


def _first_error_node(root: Node) -> Node | None:
    stack = [root]
    while stack:
        node = stack.pop()
        if node.is_error or node.is_missing:
            return node
        if node.has_error:
            stack.extend(reversed(node.children))
    return None


def _line_col(text: str, offset: int) -> tuple[int, int]:
    line = text.count("\n", 0, offset) + 1
    col = offset - (text.rfind("\n", 0, offset) + 1)
    return line, col


def parse_source(unit: SourceUnit) -> SyntaxTree:
    """Parse a SourceUnit into a SyntaxTree.

    Raises:
        SourceSyntaxError: If the text contains any syntax error. The error
            carries the character offset of the first erroneous node.
    """
    source_bytes = unit.text.encode("utf8")
    tree = _new_parser().parse(source_bytes)
    syntax_tree = SyntaxTree(unit=unit, root=tree.root_node, source_bytes=source_bytes)

    if not tree.root_node.has_error:
        return syntax_tree

    error_node = _first_error_node(tree.root_node) or tree.root_node
    offset = syntax_tree.char_offset(error_node.start_byte)
    line, col = _line_col(unit.text, offset)

    if error_node.is_missing:
        detail = f"Missing {error_node.type!r}"
    else:
        snippet = syntax_tree.node_text(error_node).strip().splitlines()
        token = snippet[0][:20] if snippet else ""
        detail = f"Unexpected token {token!r}" if token else "Unexpected token"

    msg = f"{detail} ({line}:{col})"
    raise SourceSyntaxError(msg, offset)


__all__ = ["SourceSyntaxError", "SourceUnit", "SyntaxTree", "parse_source"]
