"""Source file discovery for JavaScript/TypeScript projects.

The walk prunes directories it can rule out up front (the output directory
and directories covered entirely by an exclude glob such as
``node_modules/*``), so large dependency trees are never listed.
"""

from __future__ import annotations

import os
from fnmatch import fnmatch
from pathlib import Path, PurePosixPath
from typing import TYPE_CHECKING

from gitignore_parser import parse_gitignore  # type: ignore[import-untyped]

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator, Sequence

GITIGNORE_FILENAME = ".gitignore"


def _normalize_rel_dir(output_dir: str) -> str:
    if not output_dir:
        return ""
    normalized = PurePosixPath(output_dir.replace("\\", "/")).as_posix()
    return "" if normalized == "." else normalized


def _matches_any(rel_path: str, name: str, patterns: Sequence[str]) -> bool:
    """Match globs against the relative path and the bare file name."""
    return any(fnmatch(rel_path, pat) or fnmatch(name, pat) for pat in patterns)


def _excludes_whole_dir(rel_dir: str, patterns: Sequence[str]) -> bool:
    """True when every file below ``rel_dir`` matches some exclude glob.

    Only globs ending in ``*`` qualify: if ``rel_dir + "/"`` matches one, the
    trailing star absorbs any deeper path as well.
    """
    prefix = rel_dir + "/"
    return any(pat.endswith("*") and fnmatch(prefix, pat) for pat in patterns)


def _load_gitignore(path: Path) -> Callable[[str], bool] | None:
    if path.is_symlink() or not path.is_file():
        return None
    return parse_gitignore(path)


def _is_ignored(matchers: list[Callable[[str], bool]], path: Path) -> bool:
    for matcher in matchers:
        try:
            if matcher(str(path)):
                return True
        except ValueError:
            # Path lies outside this matcher's base directory.
            continue
    return False


def find_source_files(
    directory: Path,
    *,
    output_dir: str = ".twclassname",
    include_patterns: Sequence[str] | None = None,
    exclude_patterns: Sequence[str] | None = None,
    nested_gitignore: bool = False,
) -> Iterator[Path]:
    """Find candidate source files in a directory, respecting .gitignore.

    Args:
        directory: Directory to search
        output_dir: Root-relative directory to skip, possibly nested
            (default ".twclassname")
        include_patterns: Optional fnmatch patterns; if provided, a file must
            match at least one, by relative path or by file name
        exclude_patterns: Optional fnmatch patterns; a file matching any of
            them, by relative path or by file name, is skipped
        nested_gitignore: Also honor .gitignore files below the root

    Yields:
        Path objects sorted by relative POSIX path. Symlinked files and
        directories are never followed.
    """
    skipped_dir = _normalize_rel_dir(output_dir)
    include = list(include_patterns or ())
    exclude = list(exclude_patterns or ())
    matchers: list[Callable[[str], bool]] = []
    found: list[tuple[str, Path]] = []

    for dirpath, dirnames, filenames in os.walk(directory):
        current = Path(dirpath)
        rel_dir = current.relative_to(directory).as_posix()
        if rel_dir == ".":
            rel_dir = ""

        if GITIGNORE_FILENAME in filenames and (nested_gitignore or not rel_dir):
            matcher = _load_gitignore(current / GITIGNORE_FILENAME)
            if matcher is not None:
                matchers.append(matcher)

        kept_dirs = []
        for name in dirnames:
            rel_child = f"{rel_dir}/{name}" if rel_dir else name
            if rel_child == skipped_dir or _excludes_whole_dir(rel_child, exclude):
                continue
            kept_dirs.append(name)
        dirnames[:] = kept_dirs

        for name in filenames:
            path = current / name
            rel_path = f"{rel_dir}/{name}" if rel_dir else name
            if path.is_symlink() or not path.is_file():
                continue
            if include and not _matches_any(rel_path, name, include):
                continue
            if exclude and _matches_any(rel_path, name, exclude):
                continue
            if _is_ignored(matchers, path):
                continue
            found.append((rel_path, path))

    found.sort(key=lambda item: item[0])
    for _, path in found:
        yield path


__all__ = ["find_source_files"]
