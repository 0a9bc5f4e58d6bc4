"""Plugin discovery and loading.

Two sources feed the pluggy manager:

- installed distributions exposing the ``tasknotes.plugins`` entry point
  group;
- single-file plugins in the vault's ``.tasknotes/plugins/`` directory.

A local file may define hook implementations as module-level functions,
as methods of classes (one instance per class is registered), or both.
Files starting with ``_`` are skipped. A file that fails to import, or
whose hooks do not match the hook specs, is logged and skipped.
"""

from __future__ import annotations

import importlib.util
import inspect
import logging
import sys
from pathlib import Path
from types import ModuleType

import pluggy

from tasknotes.plugins.hookspecs import TaskNotesHookSpec

PROJECT_NAME = "tasknotes"
ENTRY_POINT_GROUP = "tasknotes.plugins"
LOCAL_MODULE_PREFIX = "tasknotes_local_plugin_"

logger = logging.getLogger(__name__)


class PluginManager:
    """pluggy manager preloaded with the tasknotes hook specs."""

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(TaskNotesHookSpec)

    @property
    def hook(self) -> pluggy.HookRelay:
        return self._pm.hook

    def discover_and_load(self, *, local_dir: Path | None = None) -> list[str]:
        """Load entry-point plugins, then the single-file plugins in *local_dir*.

        Returns the names of all registered plugins.
        """
        self._pm.load_setuptools_entrypoints(ENTRY_POINT_GROUP)
        self._instantiate_entry_point_classes()
        if local_dir is not None and local_dir.is_dir():
            for py_file in sorted(local_dir.glob("*.py")):
                if not py_file.name.startswith("_"):
                    self._load_local(py_file)
        return self.list_plugin_names()

    def register_plugin(self, plugin: object, name: str | None = None) -> None:
        """Register a plugin object (instance or module) under *name*."""
        resolved = name or getattr(plugin, "__name__", None) or type(plugin).__name__
        self._pm.register(plugin, name=resolved)
        logger.debug("Registered plugin: %s", resolved)

    def list_plugin_names(self) -> list[str]:
        return [name for name, _plugin in self._pm.list_name_plugin()]

    def implements_hooks(self, obj: object) -> bool:
        """True if *obj* (a module, class, or instance) carries ``@hookimpl`` routines."""
        return any(
            self._pm.parse_hookimpl_opts(obj, attr) is not None
            for attr in dir(obj)
            if not attr.startswith("_")
        )

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _load_local(self, py_file: Path) -> None:
        module_name = f"{LOCAL_MODULE_PREFIX}{py_file.stem}"
        module = _import_file(module_name, py_file)
        if module is None:
            return

        candidates: list[tuple[str, object]] = []
        if self.implements_hooks(module):
            candidates.append((module_name, module))
        for cls_name, cls in inspect.getmembers(module, inspect.isclass):
            if cls.__module__ != module_name or not self.implements_hooks(cls):
                continue
            try:
                candidates.append((f"{module_name}.{cls_name}", cls()))
            except Exception:
                logger.warning("Cannot instantiate %s from %s", cls_name, py_file, exc_info=True)

        # A file with a single plugin object keeps the plain module name.
        if len(candidates) == 1:
            candidates = [(module_name, candidates[0][1])]
        for name, plugin in candidates:
            try:
                self.register_plugin(plugin, name=name)
            except pluggy.PluginValidationError as exc:
                logger.warning("Plugin %s does not match the hook specs: %s", name, exc)
                # pluggy leaves a half-registered plugin behind.
                if self._pm.has_plugin(name):
                    self._pm.unregister(name=name)

    def _instantiate_entry_point_classes(self) -> None:
        """Swap entry points that registered a class for an instance of it.

        Hooks called on a class would run with ``self`` unbound.
        """
        for name, plugin in list(self._pm.list_name_plugin()):
            if not inspect.isclass(plugin) or not self.implements_hooks(plugin):
                continue
            self._pm.unregister(plugin)
            try:
                self._pm.register(plugin(), name=name)
            except Exception:
                logger.warning("Cannot instantiate entry-point plugin %s", name, exc_info=True)


def _import_file(module_name: str, py_file: Path) -> ModuleType | None:
    spec = importlib.util.spec_from_file_location(module_name, py_file)
    if spec is None or spec.loader is None:
        logger.warning("Cannot create a module spec for %s", py_file)
        return None
    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except Exception:
        logger.warning("Failed to load local plugin %s", py_file, exc_info=True)
        sys.modules.pop(module_name, None)
        return None
    return module
