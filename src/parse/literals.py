"""Static literal extraction from call arguments.

Only shapes whose value is fully known at build time are accepted. Anything
else comes back as ``None`` (strings) or is left out (mappings); extraction
never raises.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tree_sitter import Node

    from parse.treesitter_tsx import SyntaxTree


class NodeKind(Enum):
    STRING = "string"
    TEMPLATE = "template"
    OBJECT = "object"
    OTHER = "other"


_KIND_BY_TYPE = {
    "string": NodeKind.STRING,
    "template_string": NodeKind.TEMPLATE,
    "object": NodeKind.OBJECT,
}

_ESCAPE_RE = re.compile(
    r"\\(u\{[0-9a-fA-F]+\}|u[0-9a-fA-F]{4}|x[0-9a-fA-F]{2}|\r\n|[\s\S])"
)

_SIMPLE_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "b": "\b",
    "f": "\f",
    "v": "\v",
    "0": "\0",
}

_LINE_CONTINUATIONS = frozenset({"\n", "\r", "\r\n", "\u2028", "\u2029"})


def _unwrap(node: Node) -> Node:
    while node.type == "parenthesized_expression" and node.named_child_count == 1:
        node = node.named_children[0]
    return node


def classify(node: Node) -> NodeKind:
    return _KIND_BY_TYPE.get(node.type, NodeKind.OTHER)


def _replace_escape(match: re.Match[str]) -> str:
    body = match.group(1)
    if body in _LINE_CONTINUATIONS:
        return ""
    if body in _SIMPLE_ESCAPES:
        return _SIMPLE_ESCAPES[body]
    if body.startswith("u{"):
        return chr(int(body[2:-1], 16))
    if body.startswith("u") and len(body) == 5:
        return chr(int(body[1:], 16))
    if body.startswith("x") and len(body) == 3:
        return chr(int(body[1:], 16))
    return body


def decode_js_escapes(raw: str) -> str:
    """Decode JavaScript string escape sequences in ``raw``."""
    if "\\" not in raw:
        return raw
    try:
        decoded = _ESCAPE_RE.sub(_replace_escape, raw)
    except (ValueError, OverflowError):
        return raw
    # Recombine surrogate pairs written as two \\u escapes.
    return decoded.encode("utf-16", "surrogatepass").decode("utf-16", "replace")


def _has_substitution(node: Node) -> bool:
    return any(child.type == "template_substitution" for child in node.children)


def extract_static_string(tree: SyntaxTree, node: Node | None) -> str | None:
    """Return the static value of a quoted string or plain template.

    A template is accepted only when it holds no ``${...}`` substitution,
    i.e. exactly one static chunk.
    """
    if node is None:
        return None

    node = _unwrap(node)
    kind = classify(node)

    if kind is NodeKind.STRING:
        return decode_js_escapes(tree.node_text(node)[1:-1])

    if kind is NodeKind.TEMPLATE:
        if _has_substitution(node):
            return None
        return decode_js_escapes(tree.node_text(node)[1:-1])

    return None


def extract_static_mapping(tree: SyntaxTree, node: Node | None) -> dict[str, str]:
    """Return the static ``name: "value"`` entries of an object literal.

    Entries keep declaration order. Spread, shorthand, method, computed,
    quoted or numeric keys and non-static values are dropped without notice;
    the remaining entries are still returned.
    """
    result: dict[str, str] = {}

    if node is None:
        return result

    node = _unwrap(node)
    if classify(node) is not NodeKind.OBJECT:
        return result

    for entry in node.named_children:
        if entry.type != "pair":
            continue

        key_node = entry.child_by_field_name("key")
        if key_node is None or key_node.type != "property_identifier":
            continue

        value = extract_static_string(tree, entry.child_by_field_name("value"))
        if value is not None:
            result[tree.node_text(key_node)] = value

    return result


__all__ = [
    "NodeKind",
    "classify",
    "decode_js_escapes",
    "extract_static_mapping",
    "extract_static_string",
]
