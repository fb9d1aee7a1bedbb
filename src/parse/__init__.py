"""Parsing utilities for JavaScript/TypeScript sources."""

from parse.literals import (
    NodeKind,
    classify,
    decode_js_escapes,
    extract_static_mapping,
    extract_static_string,
)
from parse.treesitter_tsx import (
    SourceSyntaxError,
    SourceUnit,
    SyntaxTree,
    parse_source,
)

__all__ = [
    "NodeKind",
    "SourceSyntaxError",
    "SourceUnit",
    "SyntaxTree",
    "classify",
    "decode_js_escapes",
    "extract_static_mapping",
    "extract_static_string",
    "parse_source",
]
