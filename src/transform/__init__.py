"""Rewrite engine turning tw() calls into static class strings."""

from transform.compose import build_class_string, prefix_classes, quote_js_string
from transform.engine import transform_code
from transform.locate import CallSite, collect_edits, match_call_site
from transform.rewrite import Edit, RewriteResult, apply_edits

__all__ = [
    "CallSite",
    "Edit",
    "RewriteResult",
    "apply_edits",
    "build_class_string",
    "collect_edits",
    "match_call_site",
    "prefix_classes",
    "quote_js_string",
    "transform_code",
]
