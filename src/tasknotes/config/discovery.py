"""Vault discovery.

A vault is the nearest directory, walking up from the start point, that
holds a ``tasknotes.toml`` file, a ``.tasknotes/`` state directory, or an
``.obsidian/`` directory. Running a command from anywhere inside the vault
therefore acts on the whole vault, with or without a config file.

``TASKNOTES_CONFIG`` names the config file explicitly and replaces the one
found next to the vault.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import NamedTuple

CONFIG_FILENAME = "tasknotes.toml"
CONFIG_ENV_VAR = "TASKNOTES_CONFIG"
STATE_DIR = ".tasknotes"
VAULT_MARKERS = (STATE_DIR, ".obsidian")


class VaultLocation(NamedTuple):
    """Where a vault lives and which config file belongs to it."""

    root: Path
    config: Path | None


def is_vault_root(directory: Path) -> bool:
    """True if *directory* holds a config file or one of the vault marker dirs."""
    if (directory / CONFIG_FILENAME).is_file():
        return True
    return any((directory / marker).is_dir() for marker in VAULT_MARKERS)


def find_vault(start: Path | None = None) -> VaultLocation | None:
    """Walk up from *start* (default: cwd) to the enclosing vault.

    Returns None when no vault is found and ``TASKNOTES_CONFIG`` does not
    point at an existing file. A config named by the env var with no
    enclosing vault makes the file's directory the vault root.
    """
    root = _walk_up((start or Path.cwd()).resolve())
    config = root / CONFIG_FILENAME if root is not None else None
    if config is not None and not config.is_file():
        config = None

    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        candidate = Path(env_path)
        config = candidate if candidate.is_file() else None
        if root is None and config is not None:
            root = config.parent.resolve()

    if root is None:
        return None
    return VaultLocation(root=root, config=config)


def _walk_up(current: Path) -> Path | None:
    for directory in (current, *current.parents):
        if is_vault_root(directory):
            return directory
    return None
