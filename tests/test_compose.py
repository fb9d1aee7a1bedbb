from __future__ import annotations

import pytest

from config.settings import DEFAULT_BREAKPOINTS
from transform.compose import build_class_string, prefix_classes, quote_js_string


@pytest.mark.parametrize(
    ("base", "variants", "expected"),
    [
        ("text-base", {"md": "text-lg"}, "text-base md:text-lg"),
        (
            "flex items-center",
            {"md": "justify-between gap-4", "lg": "gap-6 p-8"},
            "flex items-center md:justify-between md:gap-4 lg:gap-6 lg:p-8",
        ),
        ("bg-blue-500 text-white", {}, "bg-blue-500 text-white"),
        ("  padded  ", {"sm": "  a \t\n b  "}, "padded sm:a sm:b"),
        ("base", {"md": "   ", "lg": ""}, "base"),
        ("base", {"2xl": "w-full"}, "base 2xl:w-full"),
    ],
)
def test_build_class_string(
    base: str, variants: dict[str, str], expected: str
) -> None:
    composed = build_class_string(base, variants, DEFAULT_BREAKPOINTS)

    assert composed.text == expected
    assert composed.unknown_variants == ()


def test_build_class_string_follows_mapping_order_not_breakpoint_order() -> None:
    composed = build_class_string(
        "base", {"xl": "a", "sm": "b", "md": "c"}, ("sm", "md", "lg", "xl")
    )

    assert composed.text == "base xl:a sm:b md:c"


def test_build_class_string_reports_unknown_variants_and_drops_them() -> None:
    composed = build_class_string(
        "base", {"xxl": "y", "md": "x", "tablet": "z"}, DEFAULT_BREAKPOINTS
    )

    assert composed.text == "base md:x"
    assert composed.unknown_variants == ("xxl", "tablet")


def test_build_class_string_unknown_variant_reported_even_when_empty() -> None:
    composed = build_class_string("base", {"xxl": "  "}, DEFAULT_BREAKPOINTS)

    assert composed.unknown_variants == ("xxl",)


def test_prefix_classes_collapses_whitespace_runs() -> None:
    assert prefix_classes("lg", "gap-6   p-8\tm-2") == "lg:gap-6 lg:p-8 lg:m-2"


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("text-base md:text-lg", '"text-base md:text-lg"'),
        ('say "hi"', '"say \\"hi\\""'),
        ("back\\slash", '"back\\\\slash"'),
        ("line\nbreak", '"line\\nbreak"'),
        ("", '""'),
    ],
)
def test_quote_js_string(value: str, expected: str) -> None:
    assert quote_js_string(value) == expected
