"""Moment-style date format strings (``YYYY-MM-DD``) for note filenames.

Daily notes are named by a user-facing format such as ``YYYY-MM-DD`` or
``D.M.YYYY``.  Supported tokens:

    YYYY  4-digit year        YY    2-digit year
    MMMM  full month name     MMM   abbreviated month name
    MM    zero-padded month   M     month without padding
    DD    zero-padded day     D     day without padding
    Do    ordinal day (1st)
    dddd  full weekday name   ddd   abbreviated weekday name
    [..]  literal text

Names are English, as in moment's default locale.  Letters outside a token
or a ``[..]`` literal are rejected, and a usable format must name a year, a
month and a day so that every date gets its own note.
"""

from __future__ import annotations

import re
from datetime import date
from functools import lru_cache

DEFAULT_DATE_FORMAT = "YYYY-MM-DD"

_TOKEN_RE = re.compile(r"\[[^\]]*\]|YYYY|YY|MMMM|MMM|MM|M|Do|DD|D|dddd|ddd|[A-Za-z]")

MONTH_NAMES = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]
WEEKDAY_NAMES = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]

_YEAR_TOKENS = {"YYYY", "YY"}
_MONTH_TOKENS = {"MMMM", "MMM", "MM", "M"}
_DAY_TOKENS = {"DD", "D", "Do"}
_KNOWN = _YEAR_TOKENS | _MONTH_TOKENS | _DAY_TOKENS | {"dddd", "ddd"}


def _alternation(names: list[str]) -> str:
    return "(" + "|".join(re.escape(n) for n in names) + ")"


_PATTERNS = {
    "YYYY": r"(\d{4})",
    "YY": r"(\d{2})",
    "MMMM": _alternation(MONTH_NAMES),
    "MMM": _alternation([m[:3] for m in MONTH_NAMES]),
    "MM": r"(\d{2})",
    "M": r"(\d{1,2})",
    "DD": r"(\d{2})",
    "D": r"(\d{1,2})",
    "Do": r"(\d{1,2})(?:st|nd|rd|th)",
    "dddd": _alternation(WEEKDAY_NAMES),
    "ddd": _alternation([w[:3] for w in WEEKDAY_NAMES]),
}


def _ordinal(n: int) -> str:
    suffix = "th"
    if not 10 <= n % 100 <= 20:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(n % 10, "th")
    return f"{n}{suffix}"


def date_format_errors(fmt: str) -> list[str]:
    """Problems that make *fmt* unusable for note names (empty if usable)."""
    if not fmt or not fmt.strip():
        return ["date_format must not be empty"]
    errors = []
    tokens = [m.group(0) for m in _TOKEN_RE.finditer(fmt)]
    unknown = sorted({t for t in tokens if not t.startswith("[") and t not in _KNOWN})
    if unknown:
        errors.append(f"Unsupported date_format letters: {''.join(unknown)}")
    for label, group in (("year", _YEAR_TOKENS), ("month", _MONTH_TOKENS), ("day", _DAY_TOKENS)):
        if not group.intersection(tokens):
            errors.append(f"date_format must contain a {label} token")
    return errors


@lru_cache(maxsize=32)
def tokenize(fmt: str) -> tuple[tuple[bool, str], ...]:
    """Split *fmt* into ``(is_token, text)`` parts; raises ValueError if unusable."""
    errors = date_format_errors(fmt)
    if errors:
        raise ValueError(f"Invalid date format {fmt!r}: {'; '.join(errors)}")
    parts = []
    pos = 0
    for m in _TOKEN_RE.finditer(fmt):
        if m.start() > pos:
            parts.append((False, fmt[pos:m.start()]))
        token = m.group(0)
        if token.startswith("["):
            parts.append((False, token[1:-1]))
        else:
            parts.append((True, token))
        pos = m.end()
    if pos < len(fmt):
        parts.append((False, fmt[pos:]))
    return tuple(parts)


def _render(d: date, token: str) -> str:
    if token == "YYYY":
        return f"{d.year:04d}"
    if token == "YY":
        return f"{d.year % 100:02d}"
    if token == "MMMM":
        return MONTH_NAMES[d.month - 1]
    if token == "MMM":
        return MONTH_NAMES[d.month - 1][:3]
    if token == "MM":
        return f"{d.month:02d}"
    if token == "M":
        return str(d.month)
    if token == "DD":
        return f"{d.day:02d}"
    if token == "D":
        return str(d.day)
    if token == "Do":
        return _ordinal(d.day)
    if token == "dddd":
        return WEEKDAY_NAMES[d.weekday()]
    return WEEKDAY_NAMES[d.weekday()][:3]


def format_date(d: date, fmt: str = DEFAULT_DATE_FORMAT) -> str:
    return "".join(_render(d, text) if is_token else text for is_token, text in tokenize(fmt or DEFAULT_DATE_FORMAT))


@lru_cache(maxsize=32)
def _parser(fmt: str) -> tuple[re.Pattern[str], tuple[str, ...]]:
    regex = []
    fields = []
    for is_token, text in tokenize(fmt):
        if is_token:
            regex.append(_PATTERNS[text])
            fields.append(text)
        else:
            regex.append(re.escape(text))
    return re.compile("^" + "".join(regex) + "$"), tuple(fields)


def parse_date(text: str, fmt: str = DEFAULT_DATE_FORMAT) -> date | None:
    """Strictly parse *text*; returns None unless it round-trips exactly.

    ``2024-1-5`` is rejected under ``YYYY-MM-DD``, and ``05.1.2024`` under
    ``D.M.YYYY``.
    """
    if not text:
        return None
    pattern, fields = _parser(fmt or DEFAULT_DATE_FORMAT)
    m = pattern.match(text)
    if not m:
        return None
    year = month = day = None
    for token, raw in zip(fields, m.groups()):
        if token == "YYYY":
            year = int(raw)
        elif token == "YY":
            # moment's two-digit year pivot
            year = int(raw) + (1900 if int(raw) > 68 else 2000)
        elif token == "MMMM":
            month = MONTH_NAMES.index(raw) + 1
        elif token == "MMM":
            month = [n[:3] for n in MONTH_NAMES].index(raw) + 1
        elif token in ("MM", "M"):
            month = int(raw)
        elif token in ("DD", "D", "Do"):
            day = int(raw)
    try:
        parsed = date(year, month, day)
    except ValueError:
        return None
    if format_date(parsed, fmt) != text:
        return None
    return parsed


def is_valid_date(text: str, fmt: str = DEFAULT_DATE_FORMAT) -> bool:
    return parse_date(text, fmt) is not None


def sunday_weekday(d: date) -> int:
    """Weekday index with 0=Sunday .. 6=Saturday."""
    return d.isoweekday() % 7
