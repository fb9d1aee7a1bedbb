"""Runs the rewrite engine over a project tree and writes the results."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from config.settings import TwClassnameConfig, load_config, resolve_output_dir
from diagnostics.models import Diagnostic, DiagnosticCode, Severity
from diagnostics.sink import CollectingSink
from scan.files import find_source_files
from transform.engine import transform_code

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

    from diagnostics.sink import DiagnosticsSink
    from transform.rewrite import RewriteResult

logger = logging.getLogger(__name__)

SOURCE_MAP_SUFFIX = ".map"


def should_transform(code: str, target_name: str) -> bool:
    """Cheap textual pre-check: only texts containing ``<target>(`` qualify."""
    return f"{target_name}(" in code


def source_id_for(path: Path, root: Path) -> str:
    try:
        return path.resolve().relative_to(root.resolve()).as_posix()
    except ValueError:
        return path.as_posix()


def transform_file(
    path: Path,
    root: Path,
    config: TwClassnameConfig,
    sink: DiagnosticsSink,
) -> RewriteResult | None:
    """Transform one file; None when it is unchanged or failed to read or parse."""
    source_id = source_id_for(path, root)
    try:
        code = path.read_bytes().decode("utf-8")
    except UnicodeDecodeError as exc:
        sink.report_fatal(
            Diagnostic(
                severity=Severity.FATAL,
                code=DiagnosticCode.DECODE_ERROR,
                message=f"Failed to read {source_id}: invalid UTF-8 ({exc}).",
                source_id=source_id,
            )
        )
        return None

    if not should_transform(code, config.target_name):
        return None

    logger.debug("Processing: %s", source_id)
    result = transform_code(code, source_id, config.engine_config(), sink)

    if result is not None:
        logger.debug("Successfully transformed: %s", source_id)

    return result


@dataclass(frozen=True)
class FileOutcome:
    path: Path
    source_id: str
    result: RewriteResult | None
    diagnostics: tuple[Diagnostic, ...]

    @property
    def failed(self) -> bool:
        return any(d.is_fatal for d in self.diagnostics)


def _get_output_dir_name(out_dir: Path, root: Path) -> str:
    """Get the output directory path, relative to root, for filtering."""
    try:
        rel = out_dir.resolve().relative_to(root.resolve())
    except ValueError:
        # out_dir is outside the root; nothing to filter.
        return ""
    return rel.as_posix() if rel.parts else ""


def iter_file_outcomes(
    root: Path,
    config: TwClassnameConfig,
    *,
    output_dir_name: str | None = None,
) -> Iterator[FileOutcome]:
    """Transform every candidate file under ``root`` in sorted order."""
    if output_dir_name is None:
        output_dir_name = config.output_dir

    for path in find_source_files(
        root,
        output_dir=output_dir_name,
        include_patterns=config.include,
        exclude_patterns=config.exclude,
        nested_gitignore=config.nested_gitignore,
    ):
        sink = CollectingSink()
        result = transform_file(path, root, config, sink)
        yield FileOutcome(
            path=path,
            source_id=source_id_for(path, root),
            result=result,
            diagnostics=tuple(sink.diagnostics),
        )


@dataclass
class TransformSummary:
    scanned: int = 0
    transformed: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)
    diagnostics: list[Diagnostic] = field(default_factory=list)
    outputs: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed

    @property
    def unchanged(self) -> int:
        return self.scanned - len(self.transformed) - len(self.failed)


def write_result(out_dir: Path, source_id: str, result: RewriteResult) -> Path:
    """Write the rewritten code and its sibling ``.map`` file under out_dir."""
    target = out_dir / source_id
    target.parent.mkdir(parents=True, exist_ok=True)

    map_path = target.with_name(target.name + SOURCE_MAP_SUFFIX)
    code = result.code
    if code and not code.endswith("\n"):
        code += "\n"
    code += f"//# sourceMappingURL={map_path.name}\n"

    target.write_bytes(code.encode("utf-8"))
    map_path.write_bytes(result.map.to_json())
    return target


def transform_tree(
    *,
    root: Path,
    out_dir: Path | None = None,
    config: TwClassnameConfig | None = None,
    write: bool = True,
) -> TransformSummary:
    """Transform all candidate files of a project.

    Args:
        root: Project root to scan
        out_dir: Optional output directory (default: config output dir)
        config: Optional configuration (default: loaded from root)
        write: When False, only collect diagnostics and counts

    Returns:
        TransformSummary with per-file outcomes and every diagnostic.
    """
    if config is None:
        config = load_config(root)

    if out_dir is None:
        out_dir = resolve_output_dir(root, config.output_dir)

    logger.debug(
        "Initialized with options: target_name=%s breakpoints=%s",
        config.target_name,
        list(config.breakpoints),
    )

    summary = TransformSummary()
    for outcome in iter_file_outcomes(
        root, config, output_dir_name=_get_output_dir_name(out_dir, root)
    ):
        summary.scanned += 1
        summary.diagnostics.extend(outcome.diagnostics)

        if outcome.failed:
            summary.failed.append(outcome.source_id)
            continue

        if outcome.result is None:
            continue

        summary.transformed.append(outcome.source_id)
        if write:
            written = write_result(out_dir, outcome.source_id, outcome.result)
            summary.outputs.append(str(written))

    return summary


__all__ = [
    "FileOutcome",
    "TransformSummary",
    "iter_file_outcomes",
    "should_transform",
    "source_id_for",
    "transform_file",
    "transform_tree",
    "write_result",
]
