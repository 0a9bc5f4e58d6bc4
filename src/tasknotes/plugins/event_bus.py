"""Event dispatch to plugins via pluggy + ThreadPoolExecutor.

Hooks run on a small worker pool by default, or inline with ``--sync``.
Only the most recent dispatch outcomes are kept, so a long-running watch
does not grow without limit. :meth:`EventBus.drain` reports the hooks that
failed since the previous drain and forgets them.

INVARIANT: Plugin failures are warnings, never errors.
"""

from __future__ import annotations

import itertools
import logging
import threading
from collections import deque
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from tasknotes.plugins.manager import PluginManager

logger = logging.getLogger(__name__)

MAX_RECORDS = 256


@dataclass
class DispatchRecord:
    """Outcome of one hook dispatch."""

    id: int
    hook_name: str
    status: str = "pending"
    error: str | None = None


class EventBus:
    """Async (or sync) hook dispatch.

    Parameters:
        plugin_manager: Loaded PluginManager for hook dispatch.
        sync: Force synchronous dispatch (useful for testing / ``--sync``).
        max_workers: ThreadPoolExecutor worker count.
        max_records: How many dispatch records to keep.
    """

    def __init__(
        self,
        plugin_manager: PluginManager,
        *,
        sync: bool = False,
        max_workers: int = 2,
        max_records: int = MAX_RECORDS,
    ) -> None:
        self._pm = plugin_manager
        self._sync = sync
        self._executor: ThreadPoolExecutor | None = (
            None if sync else ThreadPoolExecutor(max_workers=max_workers)
        )
        self._futures: list[Future[None]] = []
        self._records: deque[DispatchRecord] = deque(maxlen=max_records)
        self._failed: deque[DispatchRecord] = deque(maxlen=max_records)
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def dispatch(self, hook_name: str, payload: dict[str, Any]) -> int:
        """Dispatch a hook async (or sync). Returns the dispatch record id."""
        with self._lock:
            record = DispatchRecord(id=next(self._ids), hook_name=hook_name)
            self._records.append(record)
            self._futures = [f for f in self._futures if not f.done()]

        if self._sync:
            self._execute_hook(record, payload)
        else:
            assert self._executor is not None
            future = self._executor.submit(self._execute_hook, record, payload)
            with self._lock:
                self._futures.append(future)

        return record.id

    def drain(self) -> list[dict[str, Any]]:
        """Wait for in-flight hooks and return those that failed since the last drain.

        Returns a summary list of ``{id, hook_name, error}``.
        """
        self._wait_futures()
        with self._lock:
            failed = [
                {"id": r.id, "hook_name": r.hook_name, "error": r.error}
                for r in self._failed
            ]
            self._failed.clear()
        return failed

    @property
    def records(self) -> list[DispatchRecord]:
        with self._lock:
            return list(self._records)

    def shutdown(self) -> None:
        """Shutdown ThreadPoolExecutor, waiting for pending tasks."""
        self._wait_futures()
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _execute_hook(self, record: DispatchRecord, payload: dict[str, Any]) -> None:
        hook_fn = getattr(self._pm.hook, record.hook_name, None)
        if hook_fn is None:
            record.status = "completed"
            return

        try:
            hook_fn(**payload)
        except Exception as exc:
            logger.debug("Hook %s failed: %s", record.hook_name, exc)
            record.status = "failed"
            record.error = str(exc)
            with self._lock:
                self._failed.append(record)
        else:
            record.status = "completed"

    def _wait_futures(self) -> None:
        with self._lock:
            pending, self._futures = self._futures, []
        for future in pending:
            try:
                future.result(timeout=30)
            except Exception:
                pass  # recorded in _execute_hook
