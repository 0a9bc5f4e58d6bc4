"""Status codec: pure conversion between a note's name and its task status.

The base name (extension excluded) of a task note is ``<glyph> <title>``.
Decoding never raises; a name that does not start with a glyph followed by
whitespace is simply a plain note.

A title that itself begins with a glyph and whitespace cannot be told apart
from a marked note. No escaping is applied. A title that begins with
whitespace would lose it on decode, so such titles are not encodable.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from tasknotes.domain.status import STATUS_GLYPHS, TaskStatus

TASK_NAME_RE = re.compile(
    r"^(" + "|".join(re.escape(g) for g in STATUS_GLYPHS.values()) + r")\s+(.+)$"
)


def decode(base_name: str) -> tuple[TaskStatus, str] | None:
    """Return ``(status, title)`` for a marked base name, or None.

    Examples:
        >>> decode("◻️ Buy milk")
        (<TaskStatus.UNCHECKED: 'unchecked'>, 'Buy milk')
        >>> decode("Buy milk") is None
        True
    """
    match = TASK_NAME_RE.match(base_name)
    if match is None:
        return None
    return TaskStatus.from_glyph(match.group(1)), match.group(2)


def encode(status: TaskStatus, title: str) -> str:
    """Build the base name ``<glyph> <title>`` for *status*."""
    return f"{STATUS_GLYPHS[status]} {title}"


def is_encodable(title: str) -> bool:
    """True if ``decode(encode(status, title))`` gives *title* back unchanged."""
    return bool(title) and not title[0].isspace() and "\n" not in title


def next_on_toggle(status: TaskStatus) -> TaskStatus:
    """Status reached by a single click on a task checkbox.

    Completed goes back to unchecked; unchecked and scheduled both
    complete. Scheduled is only ever reached by explicit selection.
    """
    if status is TaskStatus.COMPLETED:
        return TaskStatus.UNCHECKED
    return TaskStatus.COMPLETED


def split_name(name: str) -> tuple[str, str]:
    """Split a file name into ``(base_name, extension)``.

    The extension is returned without its dot. Names without a dot, or
    whose only dot is the leading one, have an empty extension.

    Examples:
        >>> split_name("Buy milk.md")
        ('Buy milk', 'md')
        >>> split_name("v1.2 notes.md")
        ('v1.2 notes', 'md')
        >>> split_name(".hidden")
        ('.hidden', '')
    """
    base, dot, ext = name.rpartition(".")
    if not dot or not base:
        return name, ""
    return base, ext


def join_name(base_name: str, extension: str) -> str:
    """Inverse of :func:`split_name`."""
    if not extension:
        return base_name
    return f"{base_name}.{extension}"


@dataclass(frozen=True)
class TaskName:
    """A file name viewed as ``(status, title, extension)``.

    ``status`` is None for plain notes, in which case ``title`` is the
    whole base name.
    """

    status: TaskStatus | None
    title: str
    extension: str = ""

    @property
    def is_task(self) -> bool:
        return self.status is not None

    @property
    def base_name(self) -> str:
        if self.status is None:
            return self.title
        return encode(self.status, self.title)

    @property
    def name(self) -> str:
        return join_name(self.base_name, self.extension)

    def with_status(self, status: TaskStatus | None) -> TaskName:
        """Same title and extension under a different marker (or none)."""
        return TaskName(status=status, title=self.title, extension=self.extension)


def parse_name(name: str) -> TaskName:
    """Parse a full file name (with extension) into a :class:`TaskName`."""
    base, ext = split_name(name)
    decoded = decode(base)
    if decoded is None:
        return TaskName(status=None, title=base, extension=ext)
    status, title = decoded
    return TaskName(status=status, title=title, extension=ext)
