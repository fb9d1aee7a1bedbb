"""Command-line interface for tw-classname."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from config.settings import ConfigError, load_config
from host.pipeline import transform_tree
from verify.verify import verify_transform

if TYPE_CHECKING:
    from diagnostics.models import Diagnostic


def _add_common_paths(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "root",
        nargs="?",
        default=".",
        help="Project root (default: .)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging (also enabled by debug = true in config)",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="twclassname")
    subparsers = parser.add_subparsers(dest="command", required=True)

    transform_parser = subparsers.add_parser(
        "transform", help="Rewrite tw() calls and write the results"
    )
    _add_common_paths(transform_parser)
    transform_parser.add_argument(
        "--out-dir",
        default=None,
        help="Output directory for transformed files (default: config output dir)",
    )

    check_parser = subparsers.add_parser(
        "check", help="Report diagnostics without writing anything"
    )
    _add_common_paths(check_parser)
    check_parser.add_argument(
        "--strict",
        action="store_true",
        help="Treat warnings as failures",
    )

    verify_parser = subparsers.add_parser(
        "verify", help="Verify that rewriting is deterministic and idempotent"
    )
    _add_common_paths(verify_parser)

    return parser


def _format_diagnostic(diagnostic: Diagnostic) -> str:
    return (
        f"{diagnostic.location()}: {diagnostic.severity.value} "
        f"{diagnostic.code.value}: {diagnostic.message}\n"
    )


def _resolve_output_dir(out_dir: str | None) -> Path | None:
    if out_dir is None:
        return None
    return Path(out_dir).expanduser().resolve()


def _configure_logging(enabled: bool) -> None:
    if enabled:
        logging.basicConfig(
            level=logging.DEBUG,
            format="[tw-classname] %(message)s",
            stream=sys.stderr,
        )


def _handle_transform(root: Path, out_dir: str | None, debug: bool) -> int:
    config = load_config(root)
    _configure_logging(debug or config.debug)

    summary = transform_tree(
        root=root, out_dir=_resolve_output_dir(out_dir), config=config
    )
    for diagnostic in summary.diagnostics:
        sys.stderr.write(_format_diagnostic(diagnostic))
    return 0 if summary.ok else 1


def _handle_check(root: Path, strict: bool, debug: bool) -> int:
    config = load_config(root)
    _configure_logging(debug or config.debug)

    summary = transform_tree(root=root, config=config, write=False)
    for diagnostic in summary.diagnostics:
        sys.stderr.write(_format_diagnostic(diagnostic))

    if not summary.ok:
        return 1
    if strict and summary.diagnostics:
        return 1
    return 0


def _handle_verify(root: Path, debug: bool) -> int:
    config = load_config(root)
    _configure_logging(debug or config.debug)

    result = verify_transform(root=root, config=config)
    if not result.ok:
        for label, source_ids in (
            ("impure", result.impure),
            ("not-idempotent", result.not_idempotent),
        ):
            for source_id in source_ids:
                sys.stderr.write(f"{label}: {source_id}\n")
        return 1
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    root = Path(args.root).expanduser().resolve()

    try:
        if args.command == "transform":
            return _handle_transform(root, args.out_dir, args.debug)

        if args.command == "check":
            return _handle_check(root, args.strict, args.debug)

        if args.command == "verify":
            return _handle_verify(root, args.debug)
    except ConfigError as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 2

    raise AssertionError


if __name__ == "__main__":
    raise SystemExit(main())
