"""TaskService: convert, mark, toggle, and unmark task notes.

Pipeline: RESOLVE -> EVALUATE -> RENAME -> NOTIFY -> RESPOND

Every status change is a rename within the note's directory. When the
rename fails the note keeps whatever name the file system reports; nothing
is assumed about the new name.
"""

from __future__ import annotations

import logging
from datetime import date
from pathlib import Path
from typing import TYPE_CHECKING, Any

from jinja2 import TemplateError, TemplateNotFound

from tasknotes.domain.checklist import has_unchecked_checklist_item
from tasknotes.domain.codec import TaskName, next_on_toggle, parse_name
from tasknotes.domain.status import TaskStatus
from tasknotes.domain.transitions import Allow, Reject, evaluate_transition
from tasknotes.infrastructure.filesystem import RenameError
from tasknotes.infrastructure.templates import build_template_environment, template_filename
from tasknotes.services.base import BaseService
from tasknotes.services.result import ServiceResult, failure
from tasknotes.services.telemetry import trace_span, traced

if TYPE_CHECKING:
    from collections.abc import Callable

    from tasknotes.domain.transitions import TransitionEngine
    from tasknotes.infrastructure.vault import Vault

logger = logging.getLogger(__name__)


class TaskService(BaseService):
    """Status operations on single notes, plus listing.

    Parameters:
        vault: The vault holding the notes.
        engine: Optional engine whose tracker is re-keyed after renames.
    """

    def __init__(self, vault: Vault, engine: TransitionEngine | None = None) -> None:
        super().__init__(vault)
        self._engine = engine

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @traced
    def convert(
        self,
        path: str | Path,
        status: TaskStatus = TaskStatus.UNCHECKED,
        *,
        template: str | None = None,
    ) -> ServiceResult:
        """Turn a plain note into a task with *status*.

        Conversion ignores the checklist; only a title that would not
        decode back unchanged is refused. A
        template, if given (or configured), is appended to the body after
        the rename; template problems are warnings.
        """
        op = "convert"
        resolved = self._resolve(op, path)
        if isinstance(resolved, ServiceResult):
            return resolved

        note = parse_name(resolved.name)
        if note.is_task:
            return failure(
                op,
                "ALREADY_A_TASK",
                f"Already a task ({note.status}): {resolved.name}",
                path=self._vault.relative(resolved),
            )

        decision = evaluate_transition(
            None, status, False, title=note.title, extension=note.extension
        )
        if isinstance(decision, Reject):
            return self._rejected(op, resolved, decision)

        warnings: list[str] = []
        result = self._rename(op, resolved, note, decision, warnings=warnings)
        if not result.ok:
            return result

        template_name = template or self._vault.settings.tasks.template
        if template_name:
            new_path = self._vault.root / result.data["path"]
            self._apply_template(template_name, new_path, decision.target, warnings)

        data = dict(result.data)
        if self._vault.settings.tasks.notify_on_convert:
            data["notice"] = f"Converted to task: {decision.target.base_name}"
        return result.model_copy(update={"data": data, "warnings": warnings})

    @traced
    def set_status(self, path: str | Path, status: TaskStatus) -> ServiceResult:
        """Change the status of an existing task.

        Completing is refused while the body has unchecked checklist items.
        """
        return self._change_status("mark", path, lambda _current: status)

    @traced
    def toggle(self, path: str | Path) -> ServiceResult:
        """Binary checkbox toggle: completed <-> unchecked, scheduled -> completed."""
        return self._change_status("toggle", path, next_on_toggle)

    @traced
    def remove_status(self, path: str | Path) -> ServiceResult:
        """Strip the task marker, leaving a plain note with the same title."""
        op = "unmark"
        resolved = self._resolve(op, path)
        if isinstance(resolved, ServiceResult):
            return resolved

        note = parse_name(resolved.name)
        decision = evaluate_transition(
            note.status, None, False, title=note.title, extension=note.extension
        )
        if isinstance(decision, Reject):
            return self._rejected(op, resolved, decision)

        result = self._rename(op, resolved, note, decision)
        if not result.ok:
            return result
        data = {**result.data, "notice": f"Removed task status from: {note.title}"}
        return result.model_copy(update={"data": data})

    @traced
    def show(self, path: str | Path) -> ServiceResult:
        """Status, title, and checklist progress of one note."""
        op = "show"
        resolved = self._resolve(op, path)
        if isinstance(resolved, ServiceResult):
            return resolved
        try:
            scan = self._vault.scan(resolved)
        except (OSError, UnicodeDecodeError) as exc:
            return failure(op, "READ_FAILED", f"Cannot read note: {exc}")
        return ServiceResult(
            ok=True,
            op=op,
            data=self._describe(resolved, parse_name(resolved.name), scan.to_dict()),
        )

    @traced
    def list_tasks(self, status: TaskStatus | None = None) -> ServiceResult:
        """All task notes in the vault, optionally filtered by *status*."""
        op = "list_tasks"
        warnings: list[str] = []
        items: list[dict[str, Any]] = []

        with trace_span("scan_notes") as span:
            for note_path in self._vault.find_notes():
                note = parse_name(note_path.name)
                if not note.is_task:
                    continue
                if status is not None and note.status is not status:
                    continue
                try:
                    checklist = self._vault.scan(note_path).to_dict()
                except (OSError, UnicodeDecodeError) as exc:
                    warnings.append(f"Cannot read {note_path.name}: {exc}")
                    checklist = None
                items.append(self._describe(note_path, note, checklist))
            if span:
                span.annotate(tasks=len(items))

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "vault": self._vault.settings.vault.name,
                "items": items,
                "count": len(items),
            },
            warnings=warnings,
        )

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _change_status(
        self, op: str, path: str | Path, pick: Callable[[TaskStatus], TaskStatus]
    ) -> ServiceResult:
        resolved = self._resolve(op, path)
        if isinstance(resolved, ServiceResult):
            return resolved

        note = parse_name(resolved.name)
        if note.status is None:
            return failure(
                op,
                "NOT_A_TASK",
                f"Note has no task status: {resolved.name}",
                path=self._vault.relative(resolved),
            )

        target: TaskStatus = pick(note.status)
        if target is note.status:
            return ServiceResult(
                ok=True,
                op=op,
                data=self._describe(resolved, note),
                warnings=[f"Already {target}: {resolved.name}"],
            )

        try:
            with trace_span("read_body"):
                body = self._vault.read_body(resolved)
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Cannot read %s: %s", resolved, exc)
            return failure(op, "READ_FAILED", f"Cannot read note: {resolved.name}")

        with trace_span("evaluate", target=str(target)) as span:
            has_unchecked = has_unchecked_checklist_item(body)
            decision = evaluate_transition(
                note.status,
                target,
                has_unchecked,
                title=note.title,
                extension=note.extension,
            )
            if span:
                span.annotate(has_unchecked=has_unchecked, allowed=isinstance(decision, Allow))
        if isinstance(decision, Reject):
            return self._rejected(op, resolved, decision)
        return self._rename(op, resolved, note, decision)

    def _resolve(self, op: str, path: str | Path) -> Path | ServiceResult:
        try:
            resolved = self._vault.resolve_note(path)
        except ValueError as exc:
            return failure(op, "INVALID_PATH", str(exc))
        if not resolved.is_file():
            return failure(op, "NOT_FOUND", f"No note found at: {path}")
        if not self._vault.is_note(resolved):
            allowed = ", ".join(self._vault.settings.vault.extensions)
            return failure(op, "NOT_A_NOTE", f"Not a note file ({allowed}): {path}")
        return resolved

    def _rejected(self, op: str, path: Path, decision: Reject) -> ServiceResult:
        logger.info("Rejected %s for %s: %s", op, path.name, decision.reason)
        return failure(
            op,
            str(decision.reason),
            decision.message,
            path=self._vault.relative(path),
        )

    def _rename(
        self,
        op: str,
        path: Path,
        note: TaskName,
        decision: Allow,
        *,
        warnings: list[str] | None = None,
    ) -> ServiceResult:
        warnings = warnings if warnings is not None else []
        old_rel = self._vault.relative(path)
        try:
            with trace_span("rename", target=decision.name):
                new_path = self._vault.rename(path, decision.name)
        except RenameError as exc:
            logger.warning("Rename failed for %s: %s", path, exc.reason)
            return failure(
                op,
                "RENAME_FAILED",
                f"Failed to rename note: {exc.reason}",
                path=old_rel,
                target=decision.name,
            )

        new_rel = self._vault.relative(new_path)
        if self._engine is not None:
            self._engine.on_renamed(old_rel, new_rel)

        self._dispatch_event(
            "post_transition",
            {
                "old_path": old_rel,
                "new_path": new_rel,
                "title": note.title,
                "old_status": None if note.status is None else str(note.status),
                "new_status": None if decision.status is None else str(decision.status),
                "automatic": False,
            },
            warnings,
        )

        data = self._describe(new_path, decision.target)
        data["old_path"] = old_rel
        data["previous_status"] = None if note.status is None else str(note.status)
        return ServiceResult(ok=True, op=op, data=data, warnings=warnings)

    def _apply_template(
        self, name: str, path: Path, note: TaskName, warnings: list[str]
    ) -> None:
        with trace_span("apply_template", template=name):
            self._render_template(name, path, note, warnings)

    def _render_template(
        self, name: str, path: Path, note: TaskName, warnings: list[str]
    ) -> None:
        env = build_template_environment("task", vault_root=self._vault.root)
        filename = template_filename(name)
        try:
            rendered = env.get_template(filename).render(
                title=note.title,
                status=str(note.status),
                status_label=note.status.label if note.status else "",
                glyph=note.status.glyph if note.status else "",
                date=date.today().isoformat(),
            )
        except TemplateNotFound:
            warnings.append(f"Template not found: {name}")
            return
        except (TemplateError, OSError, UnicodeDecodeError) as exc:
            logger.warning("Template %s failed: %s", name, exc)
            warnings.append(f"Template read failed: {name}")
            return

        try:
            self._vault.append_body(path, rendered)
        except OSError as exc:
            logger.warning("Cannot write template into %s: %s", path, exc)
            warnings.append(f"Template could not be applied: {name}")

    def _describe(
        self,
        path: Path,
        note: TaskName,
        checklist: dict[str, int] | None = None,
    ) -> dict[str, Any]:
        data: dict[str, Any] = {
            "path": self._vault.relative(path),
            "title": note.title,
            "status": None if note.status is None else str(note.status),
            "glyph": note.status.glyph if note.status else "",
        }
        if checklist is not None:
            data["checklist"] = checklist
        return data
