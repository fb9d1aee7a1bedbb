"""Composition of the static class string for one call."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import orjson

if TYPE_CHECKING:
    from collections.abc import Collection, Mapping


@dataclass(frozen=True)
class ComposedClasses:
    text: str
    unknown_variants: tuple[str, ...] = field(default_factory=tuple)


def prefix_classes(variant: str, classes: str) -> str:
    """Prefix every whitespace-separated class with ``variant:``."""
    return " ".join(f"{variant}:{cls}" for cls in classes.split())


def build_class_string(
    base_classes: str,
    variants: Mapping[str, str],
    breakpoints: Collection[str],
) -> ComposedClasses:
    """Build the final class string from base classes and variant classes.

    Variants are emitted in mapping order, not breakpoint order. Names outside
    ``breakpoints`` are left out and returned in ``unknown_variants``; values
    that are blank after trimming are left out without notice.
    """
    parts = [base_classes.strip()]
    unknown: list[str] = []

    for variant, classes in variants.items():
        if variant not in breakpoints:
            unknown.append(variant)
            continue

        if not classes.strip():
            continue

        parts.append(prefix_classes(variant, classes.strip()))

    return ComposedClasses(text=" ".join(parts), unknown_variants=tuple(unknown))


def quote_js_string(value: str) -> str:
    """Render ``value`` as a double-quoted JavaScript string literal."""
    return orjson.dumps(value).decode("utf8")


__all__ = [
    "ComposedClasses",
    "build_class_string",
    "prefix_classes",
    "quote_js_string",
]
