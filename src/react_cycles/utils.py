"""File discovery for react-cycles."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from react_cycles.errors import InputPathError
from react_cycles.ir.syntax import SUPPORTED_EXTENSIONS

log = logging.getLogger(__name__)

# Names skipped during discovery, in addition to caller-supplied entries
DEFAULT_IGNORE = (
    "node_modules", ".git", ".svn", ".hg", "dist", "build", "ios", "android",
)


def resolve_entry(entry: str | os.PathLike | None) -> Path:
    """Expand ``~`` and check that the entry path exists."""
    if entry is None or not str(entry).strip():
        raise InputPathError("Entry path is required")
    path = Path(str(entry)).expanduser()
    if not path.exists():
        raise InputPathError(f"Entry point does not exist: {path}")
    return path


def is_source_file(path: Path) -> bool:
    return path.suffix in SUPPORTED_EXTENSIONS


def should_ignore(name: str, rel_path: Path, ignore: tuple[str, ...]) -> bool:
    """Ignored when the entry name matches, or the path runs through ``/<entry>/``.

    *rel_path* is relative to the discovery root, so a root that itself lives
    under an ignored directory name is still walked.
    """
    text = f"/{rel_path.as_posix()}/"
    for entry in ignore:
        if name == entry:
            return True
        if f"/{entry.strip('/')}/" in text:
            return True
    return False


def discover_files(
    entry: str | os.PathLike | None,
    ignore: list[str] | tuple[str, ...] = (),
) -> list[Path]:
    """List the .js/.jsx/.ts/.tsx files under *entry*.

    Directories are walked in sorted order; hidden directories are never
    descended. When *entry* is a file it comes first, followed by the other
    files of its directory.

    Raises:
        InputPathError: *entry* is empty or does not exist.
    """
    root = resolve_entry(entry)
    all_ignore = DEFAULT_IGNORE + tuple(ignore)
    files: list[Path] = []
    seen: set[Path] = set()
    visited_dirs: set[Path] = set()

    def add(path: Path) -> None:
        if path not in seen:
            seen.add(path)
            files.append(path)

    def traverse(directory: Path) -> None:
        if directory in visited_dirs:
            return
        visited_dirs.add(directory)
        try:
            items = sorted(directory.iterdir(), key=lambda p: p.name)
        except OSError as exc:
            log.warning("Cannot read directory %s: %s", directory, exc)
            return

        for item in items:
            if should_ignore(item.name, item.relative_to(base), all_ignore):
                continue
            try:
                if item.is_dir():
                    if not item.name.startswith("."):
                        traverse(item)
                elif item.is_file() and is_source_file(item):
                    add(item)
            except OSError as exc:
                log.warning("Cannot stat %s: %s", item, exc)

    base = root.parent if root.is_file() else root
    if root.is_file():
        add(root)
    traverse(base)

    log.info("Found %d React files to analyze under %s", len(files), root)
    return files
