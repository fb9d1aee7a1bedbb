"""Tree-sitter based location of target calls and edit collection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from diagnostics.models import Diagnostic, DiagnosticCode, Severity
from parse.literals import extract_static_mapping, extract_static_string
from transform.compose import build_class_string, quote_js_string
from transform.rewrite import Edit

if TYPE_CHECKING:
    from tree_sitter import Node

    from config.settings import EngineConfig
    from diagnostics.sink import DiagnosticsSink
    from parse.treesitter_tsx import SyntaxTree

_OPTIONAL_CHAIN_TYPES = frozenset({"optional_chain", "?."})


@dataclass(frozen=True)
class CallSite:
    """A located call to the target function."""

    start: int
    end: int
    node: Node
    arguments: tuple[Node, ...]


def _call_arguments(call_node: Node) -> tuple[Node, ...] | None:
    arguments_node = call_node.child_by_field_name("arguments")
    # Tagged templates (tw`...`) carry a template_string here.
    if arguments_node is None or arguments_node.type != "arguments":
        return None
    return tuple(
        child for child in arguments_node.named_children if child.type != "comment"
    )


def match_call_site(tree: SyntaxTree, node: Node, target_name: str) -> CallSite | None:
    """Return a CallSite when ``node`` is a plain call to ``target_name``."""
    if node.type != "call_expression":
        return None

    callee = node.child_by_field_name("function")
    if callee is None or callee.type != "identifier":
        return None
    if tree.node_text(callee) != target_name:
        return None

    if any(child.type in _OPTIONAL_CHAIN_TYPES for child in node.children):
        return None

    arguments = _call_arguments(node)
    if arguments is None:
        return None

    start, end = tree.node_range(node)
    return CallSite(start=start, end=end, node=node, arguments=arguments)


def _warn(
    sink: DiagnosticsSink,
    tree: SyntaxTree,
    code: DiagnosticCode,
    message: str,
    offset: int,
) -> None:
    sink.report_warning(
        Diagnostic(
            severity=Severity.WARNING,
            code=code,
            message=message,
            source_id=tree.unit.source_id,
            offset=offset,
        )
    )


def edit_for_call(
    tree: SyntaxTree,
    call_site: CallSite,
    config: EngineConfig,
    sink: DiagnosticsSink,
) -> Edit | None:
    """Validate one call site and compute its replacement edit."""
    target = config.target_name
    source_id = tree.unit.source_id

    if not call_site.arguments:
        _warn(
            sink,
            tree,
            DiagnosticCode.MISSING_ARGUMENTS,
            f"{target}() called without arguments at {source_id}",
            call_site.start,
        )
        return None

    base_classes = extract_static_string(tree, call_site.arguments[0])
    if base_classes is None:
        _warn(
            sink,
            tree,
            DiagnosticCode.INVALID_BASE_CLASSES,
            f"{target}() first argument must be a string literal at {source_id}",
            call_site.start,
        )
        return None

    variants = (
        extract_static_mapping(tree, call_site.arguments[1])
        if len(call_site.arguments) > 1
        else {}
    )

    composed = build_class_string(base_classes, variants, config.breakpoints)
    for variant in composed.unknown_variants:
        _warn(
            sink,
            tree,
            DiagnosticCode.UNKNOWN_VARIANT,
            (
                f"Unknown breakpoint '{variant}'. "
                f"Valid breakpoints: {', '.join(config.breakpoints)}"
            ),
            call_site.start,
        )

    return Edit(
        start=call_site.start,
        end=call_site.end,
        replacement=quote_js_string(composed.text),
    )


def collect_edits(
    tree: SyntaxTree,
    config: EngineConfig,
    sink: DiagnosticsSink,
) -> list[Edit]:
    """Walk the tree once and collect edits in ascending source order.

    Every call is visited and validated, including target calls nested in
    the arguments of a call that gets replaced. Those still report their
    warnings, but their edits are dropped: the outer replacement covers
    them, so edits never overlap.
    """
    edits: list[Edit] = []
    replaced_end = -1
    stack = [tree.root]

    while stack:
        node = stack.pop()

        call_site = match_call_site(tree, node, config.target_name)
        if call_site is not None:
            edit = edit_for_call(tree, call_site, config, sink)
            # Pre-order: nodes inside a replaced call come right after it.
            if edit is not None and call_site.start >= replaced_end:
                edits.append(edit)
                replaced_end = edit.end

        stack.extend(reversed(node.children))

    return edits


__all__ = ["CallSite", "collect_edits", "edit_for_call", "match_call_site"]
