"""Vault: the single dependency injected into every service.

Owns the vault root, file discovery and renames, and the plugin event bus.
Notes are identified by vault-relative POSIX paths; those are also the
keys of the checklist tracker.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from tasknotes.config.discovery import STATE_DIR
from tasknotes.domain.checklist import ChecklistScan, scan_checklist
from tasknotes.infrastructure.filesystem import (
    append_body,
    find_note_files,
    read_body,
    rename_note,
)

if TYPE_CHECKING:
    from tasknotes.config.settings import TaskNotesSettings
    from tasknotes.plugins.event_bus import EventBus

logger = logging.getLogger(__name__)


class Vault:
    """A directory of markdown notes."""

    def __init__(self, settings: TaskNotesSettings) -> None:
        self._settings = settings
        self._root = settings.vault_root.resolve()
        self._event_bus: EventBus | None = None

    @property
    def root(self) -> Path:
        return self._root

    @property
    def settings(self) -> TaskNotesSettings:
        return self._settings

    @property
    def event_bus(self) -> EventBus | None:
        return self._event_bus

    # ------------------------------------------------------------------
    # Paths
    # ------------------------------------------------------------------

    def resolve_note(self, path: str | Path) -> Path:
        """Absolute path for a note given relative to the vault root (or absolute).

        Raises ValueError if the path escapes the vault.
        """
        candidate = Path(path)
        if not candidate.is_absolute():
            candidate = self._root / candidate
        resolved = candidate.resolve()
        if not resolved.is_relative_to(self._root):
            msg = f"Path escapes vault root: {path}"
            raise ValueError(msg)
        return resolved

    def relative(self, path: Path) -> str:
        """Vault-relative POSIX key for *path*."""
        return path.resolve().relative_to(self._root).as_posix()

    def is_note(self, path: Path) -> bool:
        """True if *path* has one of the configured note extensions."""
        return path.suffix.lower().lstrip(".") in self._settings.vault.extensions

    # ------------------------------------------------------------------
    # File access
    # ------------------------------------------------------------------

    def find_notes(self) -> list[Path]:
        return find_note_files(self._root, extensions=self._settings.vault.extensions)

    def read_body(self, path: Path) -> str:
        return read_body(path)

    def scan(self, path: Path) -> ChecklistScan:
        """Checklist counts for the note at *path*."""
        return scan_checklist(read_body(path))

    def append_body(self, path: Path, text: str) -> None:
        append_body(path, text)

    def rename(self, path: Path, new_name: str) -> Path:
        """Rename a note within its directory. Raises RenameError on failure."""
        target = rename_note(path, new_name)
        logger.debug("Renamed %s -> %s", path.name, target.name)
        return target

    # ------------------------------------------------------------------
    # Plugins
    # ------------------------------------------------------------------

    def init_event_bus(self, *, sync: bool = False) -> None:
        """Load plugins and create the event bus for hook dispatch."""
        from tasknotes.plugins.event_bus import EventBus
        from tasknotes.plugins.manager import PluginManager

        pm = PluginManager()
        names = pm.discover_and_load(local_dir=self._root / STATE_DIR / "plugins")
        if names:
            logger.debug("Loaded plugins: %s", ", ".join(names))
        self._event_bus = EventBus(pm, sync=sync)

    def close(self) -> None:
        if self._event_bus is not None:
            self._event_bus.shutdown()
            self._event_bus = None
