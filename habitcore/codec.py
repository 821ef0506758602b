"""Line-oriented codec for the ``## Habits`` section of a daily note.

A note stores habits as checkbox lines under a fixed header:

    ## Habits

    - [ ] Habit One
    - [x] Habit Two (value: 12.5)

The section runs from the line after the header to the next line starting
with ``## `` (or the end of the note).  Everything outside it is left byte
for byte as it was.  All functions here are pure: text in, text out.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator

from habitcore.models import HabitStatus, HabitValidationError

HABITS_HEADER = "## Habits"
SECTION_PREFIX = "## "

_CHECKBOX_RE = re.compile(r"^(?P<indent>[ \t]*)- \[(?P<mark>[ xX])\] (?P<body>.*?)\s*$")
_BODY_RE = re.compile(r"^(?P<name>.+?)(?:\s*\(value: (?P<value>[^)]+)\))?$")


@dataclass
class HabitSection:
    """Line span of the habits section; ``end`` is exclusive."""

    header: int
    end: int

    @property
    def body(self) -> range:
        return range(self.header + 1, self.end)


@dataclass
class HabitLine:
    indent: str
    mark: str
    name: str
    value: str | None
    suffix: str  # verbatim text after the name (value annotation)

    @property
    def completed(self) -> bool:
        return self.mark.lower() == "x"


def _key(name: str) -> str:
    return name.strip().casefold()


def find_habit_section(lines: list[str]) -> HabitSection | None:
    """Locate the first ``## Habits`` header and the end of its body."""
    for i, line in enumerate(lines):
        if line.rstrip() == HABITS_HEADER:
            end = len(lines)
            for j in range(i + 1, len(lines)):
                if lines[j].startswith(SECTION_PREFIX):
                    end = j
                    break
            return HabitSection(header=i, end=end)
    return None


def parse_habit_line(line: str) -> HabitLine | None:
    """Parse ``- [x] Name (value: 5)``; None for anything else."""
    m = _CHECKBOX_RE.match(line)
    if not m:
        return None
    body = m.group("body")
    b = _BODY_RE.match(body)
    if not b:
        return None
    name = b.group("name").strip()
    if not name:
        return None
    value = b.group("value")
    return HabitLine(
        indent=m.group("indent"),
        mark=m.group("mark"),
        name=name,
        value=value.strip() if value is not None else None,
        suffix=body[b.end("name"):],
    )


def has_line_break(text: str) -> bool:
    return "\n" in text or "\r" in text


def format_habit_line(name: str, completed: bool, value: str | int | float | None = None) -> str:
    """Render one checkbox line; the annotation is omitted for empty values."""
    if has_line_break(name):
        raise HabitValidationError(f"Habit name cannot contain line breaks: {name!r}")
    text = "" if value is None else str(value).strip()
    if ")" in text or has_line_break(text):
        raise HabitValidationError(f"Value cannot contain ')' or line breaks: {text!r}")
    line = f"- [{'x' if completed else ' '}] {name.strip()}"
    if text:
        line += f" (value: {text})"
    return line


def iter_habit_lines(lines: list[str], section: HabitSection) -> Iterator[tuple[int, HabitLine]]:
    for i in section.body:
        parsed = parse_habit_line(lines[i])
        if parsed is not None:
            yield i, parsed


def section_names(content: str) -> list[str]:
    """Habit names in the section, top to bottom, as written."""
    lines = content.split("\n")
    section = find_habit_section(lines)
    if section is None:
        return []
    return [h.name for _, h in iter_habit_lines(lines, section)]


def read_status(content: str, name: str) -> HabitStatus:
    """Status of *name* (case-insensitive); missing line reads as not completed."""
    lines = content.split("\n")
    section = find_habit_section(lines)
    if section is None:
        return HabitStatus()
    key = _key(name)
    for _, h in iter_habit_lines(lines, section):
        if _key(h.name) == key:
            return HabitStatus(completed=h.completed, value=h.value)
    return HabitStatus()


def _insert_at(lines: list[str], section: HabitSection) -> int:
    """Index of the first body line, past the blank separator under the header."""
    i = section.header + 1
    while i < section.end and not lines[i].strip():
        i += 1
    if i < section.end:
        return i
    if section.header + 1 < section.end:
        return section.header + 2
    return section.header + 1


def _eol(text: str) -> str:
    """Carriage return to re-append to a rewritten line, so CRLF notes stay CRLF."""
    return "\r" if text.endswith("\r") else ""


def _note_eol(content: str) -> str:
    return "\r" if "\r\n" in content else ""


def _append_section(content: str, new_lines: list[str]) -> str:
    nl = _note_eol(content) + "\n"
    block = HABITS_HEADER + nl + nl + "".join(line + nl for line in new_lines)
    if not content.strip():
        return block
    return content.rstrip("\r\n") + nl + nl + block


def write_status(
    content: str,
    name: str,
    completed: bool,
    value: str | int | float | None = None,
) -> str:
    """Return *content* with the habit's line replaced or inserted.

    An existing line keeps its position and indentation.  A new line goes
    first in the section body; a missing section is appended at the end.
    """
    new_line = format_habit_line(name, completed, value)
    lines = content.split("\n")
    section = find_habit_section(lines)
    if section is None:
        return _append_section(content, [new_line])

    key = _key(name)
    for i, h in iter_habit_lines(lines, section):
        if _key(h.name) == key:
            lines[i] = h.indent + new_line + _eol(lines[i])
            return "\n".join(lines)

    lines.insert(_insert_at(lines, section), new_line + _note_eol(content))
    return "\n".join(lines)


def ensure_habit_lines(content: str, names: list[str]) -> str:
    """Add an unchecked line for every name the section lacks.

    Missing names are inserted as one block at the top of the section, in
    the given order.  Returns *content* unchanged when nothing is missing.
    """
    wanted: list[str] = []
    seen: set[str] = set()
    for n in names:
        if not n or not n.strip() or _key(n) in seen:
            continue
        seen.add(_key(n))
        wanted.append(n.strip())
    if not wanted:
        return content

    lines = content.split("\n")
    section = find_habit_section(lines)
    if section is None:
        return _append_section(content, [format_habit_line(n, False) for n in wanted])

    present = {_key(h.name) for _, h in iter_habit_lines(lines, section)}
    eol = _note_eol(content)
    missing = [format_habit_line(n, False) + eol for n in wanted if _key(n) not in present]
    if not missing:
        return content
    pos = _insert_at(lines, section)
    lines[pos:pos] = missing
    return "\n".join(lines)


def rename_in_section(content: str, old_name: str, new_name: str) -> tuple[str, int]:
    """Rewrite the name token of matching lines, keeping mark and value verbatim.

    Returns the new content and the number of lines rewritten.
    """
    if has_line_break(new_name):
        raise HabitValidationError(f"Habit name cannot contain line breaks: {new_name!r}")
    lines = content.split("\n")
    section = find_habit_section(lines)
    if section is None:
        return content, 0
    key = _key(old_name)
    replaced = 0
    for i, h in iter_habit_lines(lines, section):
        if _key(h.name) == key:
            lines[i] = f"{h.indent}- [{h.mark}] {new_name.strip()}{h.suffix}{_eol(lines[i])}"
            replaced += 1
    if not replaced:
        return content, 0
    return "\n".join(lines), replaced


def uncheck_all(content: str) -> tuple[str, int]:
    """Uncheck every completed habit line, preserving values."""
    lines = content.split("\n")
    section = find_habit_section(lines)
    if section is None:
        return content, 0
    changed = 0
    for i, h in iter_habit_lines(lines, section):
        if h.completed:
            lines[i] = f"{h.indent}- [ ] {h.name}{h.suffix}{_eol(lines[i])}"
            changed += 1
    if not changed:
        return content, 0
    return "\n".join(lines), changed
