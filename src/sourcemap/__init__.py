"""Source Map v3 support for rewritten sources."""

from sourcemap.builder import SourceMapBuilder
from sourcemap.models import OriginalPosition, SourceMap
from sourcemap.vlq import decode_segment, encode_segment, encode_vlq

__all__ = [
    "OriginalPosition",
    "SourceMap",
    "SourceMapBuilder",
    "decode_segment",
    "encode_segment",
    "encode_vlq",
]
