"""Jinja2 template loading with per-vault override support."""

from __future__ import annotations

from pathlib import Path

from jinja2 import BaseLoader, ChoiceLoader, Environment, FileSystemLoader, PackageLoader


def build_template_environment(group: str, *, vault_root: Path | None = None) -> Environment:
    """Build a Jinja2 environment with user overrides before packaged defaults.

    User overrides are loaded from ``.tasknotes/templates/`` inside the vault.
    Both a namespaced directory (for example ``.tasknotes/templates/task/``)
    and the shared root are searched.
    """
    loaders: list[BaseLoader] = []
    if vault_root is not None:
        template_root = vault_root / ".tasknotes" / "templates"
        loaders.append(FileSystemLoader([str(template_root / group), str(template_root)]))

    loaders.append(PackageLoader("tasknotes", f"templates/{group}"))
    return Environment(loader=ChoiceLoader(loaders), keep_trailing_newline=True)


def template_filename(name: str) -> str:
    """Template file for a configured template *name* (``.md.j2`` is implied)."""
    if name.endswith((".j2", ".md")):
        return name
    return f"{name}.md.j2"
