"""Filesystem operations on vault notes.

INVARIANT: Files are truth. A note's task status lives only in its file
name, so a rename is the sole way status is persisted.
"""

from __future__ import annotations

from pathlib import Path

# Directories to skip when discovering notes.
SKIP_DIRS = frozenset({".tasknotes", ".obsidian", ".git", ".trash"})


class RenameError(Exception):
    """The file system refused or failed a rename."""

    def __init__(self, source: Path, target: Path, reason: str) -> None:
        super().__init__(reason)
        self.source = source
        self.target = target
        self.reason = reason


def read_body(path: Path) -> str:
    """Read a note's full text."""
    return path.read_text(encoding="utf-8")


def append_body(path: Path, text: str) -> None:
    """Append *text* to a note, separated from existing content by a blank line."""
    existing = path.read_text(encoding="utf-8")
    if existing and not existing.endswith("\n"):
        existing += "\n"
    if existing:
        existing += "\n"
    path.write_text(existing + text, encoding="utf-8")


def rename_note(path: Path, new_name: str) -> Path:
    """Rename *path* to *new_name* within the same directory.

    Never overwrites an existing file. Raises :class:`RenameError` when the
    target is taken, *new_name* is not a plain file name, or the OS
    refuses the rename.
    """
    if not new_name or new_name in (".", "..") or "/" in new_name or "\\" in new_name:
        raise RenameError(path, path.parent / new_name, f"Invalid file name: {new_name!r}")

    target = path.with_name(new_name)
    if target == path:
        return path
    # Case-only renames on case-insensitive file systems report the target as existing.
    if target.exists() and not _same_file(path, target):
        raise RenameError(path, target, f"Destination already exists: {new_name}")
    try:
        path.rename(target)
    except OSError as exc:
        raise RenameError(path, target, str(exc)) from exc
    return target


def _same_file(a: Path, b: Path) -> bool:
    try:
        return a.samefile(b)
    except OSError:
        return False


def find_note_files(vault_root: Path, *, extensions: list[str] | None = None) -> list[Path]:
    """Discover all notes in the vault.

    Walks the whole vault, skipping ``.tasknotes/``, ``.obsidian/``,
    ``.git/`` and ``.trash/``. Only files whose extension is in
    *extensions* (default ``["md"]``) are returned.
    """
    wanted = {f".{ext}" for ext in (extensions or ["md"])}
    results: list[Path] = []
    for path in vault_root.rglob("*"):
        if not path.is_file():
            continue
        rel_parts = path.relative_to(vault_root).parts
        if any(part in SKIP_DIRS for part in rel_parts):
            continue
        if path.suffix.lower() in wanted:
            results.append(path)
    return sorted(results)
