"""SyncService: keeps tracked checklist state in step with vault events.

Events are handled one at a time, in the order the watcher reports them,
so evaluations for a note always see the latest scan. The tracker is only
written after a successful read and only re-keyed after a successful
rename.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from tasknotes.domain.codec import parse_name
from tasknotes.domain.status import TaskStatus
from tasknotes.domain.transitions import TransitionEngine
from tasknotes.infrastructure.filesystem import RenameError
from tasknotes.infrastructure.watcher import EventKind, VaultEvent
from tasknotes.services.base import BaseService
from tasknotes.services.result import ServiceResult, failure
from tasknotes.services.telemetry import trace_span, traced

if TYPE_CHECKING:
    from tasknotes.domain.transitions import AutoTransition
    from tasknotes.infrastructure.vault import Vault

logger = logging.getLogger(__name__)


class SyncService(BaseService):
    """Feeds vault events into a :class:`TransitionEngine` and applies its reopens."""

    def __init__(self, vault: Vault, engine: TransitionEngine | None = None) -> None:
        super().__init__(vault)
        self.engine = engine or TransitionEngine(
            reopen=vault.settings.tasks.reopen_on_unchecked
        )

    @traced
    def prime(self) -> ServiceResult:
        """Record the current checklist state of every note without firing anything."""
        op = "sync_prime"
        warnings: list[str] = []
        tracked = 0
        with trace_span("scan_notes") as span:
            for path in self._vault.find_notes():
                try:
                    scan = self._vault.scan(path)
                except (OSError, UnicodeDecodeError) as exc:
                    warnings.append(f"Cannot read {path.name}: {exc}")
                    continue
                self.engine.on_created(self._vault.relative(path), scan.has_unchecked)
                tracked += 1
            if span:
                span.annotate(tracked=tracked)
        return ServiceResult(ok=True, op=op, data={"tracked": tracked}, warnings=warnings)

    def handle_all(self, events: list[VaultEvent]) -> list[ServiceResult]:
        return [self.handle(event) for event in events]

    @traced
    def handle(self, event: VaultEvent) -> ServiceResult:
        """Apply one vault event to the tracker, reopening tasks when needed."""
        op = "sync_event"
        warnings: list[str] = []
        data: dict[str, Any] = {"event": event.to_dict()}

        if event.kind is EventKind.RENAMED:
            assert event.old_path is not None
            self.engine.on_renamed(event.old_path, event.path)
        elif event.kind is EventKind.DELETED:
            self.engine.on_deleted(event.path)
        else:
            path = self._vault.root / event.path
            try:
                with trace_span("scan", path=event.path):
                    scan = self._vault.scan(path)
            except (OSError, UnicodeDecodeError) as exc:
                # Leave the tracked value as it was; the next edit rescans.
                logger.debug("Cannot read %s: %s", path, exc)
                warnings.append(f"Cannot read {event.path}: {exc}")
                return ServiceResult(ok=True, op=op, data=data, warnings=warnings)

            if event.kind is EventKind.CREATED:
                self.engine.on_created(event.path, scan.has_unchecked)
            else:
                auto = self.engine.on_body_modified(event.path, scan.has_unchecked)
                if auto is not None:
                    result = self._reopen(auto, warnings)
                    if not result.ok:
                        return result
                    data.update(result.data)

        self._dispatch_event(
            "post_sync_event",
            {"kind": str(event.kind), "path": event.path, "old_path": event.old_path},
            warnings,
        )
        return ServiceResult(ok=True, op=op, data=data, warnings=warnings)

    def _reopen(self, auto: AutoTransition, warnings: list[str]) -> ServiceResult:
        op = "sync_event"
        path = self._vault.root / auto.path
        try:
            with trace_span("reopen", target=auto.decision.name):
                new_path = self._vault.rename(path, auto.decision.name)
        except RenameError as exc:
            logger.warning("Automatic reopen of %s failed: %s", auto.path, exc.reason)
            self.engine.on_reopen_failed(auto)
            return failure(
                op,
                "RENAME_FAILED",
                f"Failed to reopen task: {exc.reason}",
                path=auto.path,
                target=auto.decision.name,
            )

        new_rel = self._vault.relative(new_path)
        self.engine.on_renamed(auto.path, new_rel)
        logger.info("Reopened %s", new_rel)

        title = parse_name(new_path.name).title
        self._dispatch_event(
            "post_transition",
            {
                "old_path": auto.path,
                "new_path": new_rel,
                "title": title,
                "old_status": str(TaskStatus.COMPLETED),
                "new_status": str(TaskStatus.UNCHECKED),
                "automatic": True,
            },
            warnings,
        )
        return ServiceResult(
            ok=True,
            op=op,
            data={"reopened": new_rel, "notice": auto.notice},
        )
