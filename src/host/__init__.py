"""Project-level driver around the rewrite engine."""

from host.pipeline import (
    FileOutcome,
    TransformSummary,
    iter_file_outcomes,
    should_transform,
    transform_file,
    transform_tree,
)

__all__ = [
    "FileOutcome",
    "TransformSummary",
    "iter_file_outcomes",
    "should_transform",
    "transform_file",
    "transform_tree",
]
