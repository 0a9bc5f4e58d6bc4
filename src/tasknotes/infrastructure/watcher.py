"""Polling vault watcher producing note lifecycle events.

Each :meth:`VaultWatcher.poll` compares a fresh snapshot of the vault's
notes against the previous one. Within one poll events are ordered
renamed, deleted, created, modified, so a note's key is moved before
anything else refers to its new path.

A file that leaves one path and shows up at another with the same device,
inode, size and mtime is reported as renamed. File systems reuse freed
inodes, so when the stamp changed too the pair is reported as deleted and
created instead: a rename combined with an edit inside one poll interval
looks exactly like a delete followed by a new file that got the old inode.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

logger = logging.getLogger(__name__)


class EventKind(StrEnum):
    CREATED = "created"
    RENAMED = "renamed"
    DELETED = "deleted"
    MODIFIED = "modified"


@dataclass(frozen=True)
class VaultEvent:
    """A note lifecycle event. Paths are vault-relative POSIX keys."""

    kind: EventKind
    path: str
    old_path: str | None = None

    def to_dict(self) -> dict[str, str]:
        data = {"kind": str(self.kind), "path": self.path}
        if self.old_path is not None:
            data["old_path"] = self.old_path
        return data


@dataclass(frozen=True)
class _Stamp:
    device: int
    inode: int
    mtime_ns: int
    size: int


class VaultWatcher:
    """Diff successive snapshots of the notes returned by *list_files*.

    Parameters:
        root: Vault root; event paths are relative to it.
        list_files: Callable returning the current note paths.
    """

    def __init__(self, root: Path, list_files: Callable[[], list[Path]]) -> None:
        self._root = root
        self._list_files = list_files
        self._snapshot: dict[str, _Stamp] = {}

    @property
    def known_paths(self) -> list[str]:
        return sorted(self._snapshot)

    def start(self) -> list[str]:
        """Take the initial snapshot without emitting events.

        Returns the vault-relative paths found.
        """
        self._snapshot = self._take_snapshot()
        return self.known_paths

    def poll(self) -> list[VaultEvent]:
        """Take a new snapshot and return the events since the last one."""
        current = self._take_snapshot()
        previous = self._snapshot
        self._snapshot = current

        removed = {p: s for p, s in previous.items() if p not in current}
        added = {p: s for p, s in current.items() if p not in previous}

        renamed: list[VaultEvent] = []
        added_by_stamp = {s: p for p, s in added.items()}
        for old_path, old_stamp in sorted(removed.items()):
            new_path = added_by_stamp.pop(old_stamp, None)
            if new_path is None:
                continue
            renamed.append(VaultEvent(EventKind.RENAMED, new_path, old_path=old_path))
            del added[new_path]
            del removed[old_path]

        deleted = [VaultEvent(EventKind.DELETED, p) for p in sorted(removed)]
        created = [VaultEvent(EventKind.CREATED, p) for p in sorted(added)]
        modified: list[VaultEvent] = []
        for path, stamp in sorted(current.items()):
            old = previous.get(path)
            if old is None:
                continue
            # Editors that save by replacing the file change the inode.
            if old.inode != stamp.inode or _content_changed(old, stamp):
                modified.append(VaultEvent(EventKind.MODIFIED, path))

        events = [*renamed, *deleted, *created, *modified]
        if events:
            logger.debug("Poll produced %d event(s)", len(events))
        return events

    def _take_snapshot(self) -> dict[str, _Stamp]:
        snapshot: dict[str, _Stamp] = {}
        for path in self._list_files():
            try:
                st = path.stat()
            except FileNotFoundError:
                continue  # vanished between listing and stat
            key = path.relative_to(self._root).as_posix()
            snapshot[key] = _Stamp(
                device=st.st_dev, inode=st.st_ino, mtime_ns=st.st_mtime_ns, size=st.st_size
            )
        return snapshot


def _content_changed(old: _Stamp, new: _Stamp) -> bool:
    return old.mtime_ns != new.mtime_ns or old.size != new.size
