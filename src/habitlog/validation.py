"""Input sanitization for operator-supplied text.

Every validator takes the first raw read plus a ``reprompt`` callback. When
the raw text is unusable the validator calls ``reprompt(message)`` to show
the message and obtain the next raw read, and keeps doing so until it gets
a usable value. There is no attempt limit: the exit sentinel (``E``, any
case) is the only way out of a retry loop without valid data, and
validators that honour it return ``None`` in that case.

Dates are accepted in two layouts, ``MM-DD-YYYY`` and ``DD-MM-YYYY``,
tried in that order. A string such as ``03-04-2024`` is valid in both and
is read with the first layout (March 4th). Callers must not assume which
layout matched. Everything that reaches the store is normalized to
``MM-DD-YYYY``.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Collection
from datetime import date, datetime

from .global_config import CANONICAL_DATE_FORMAT, DATE_FORMATS
from .models import EntryField

logger = logging.getLogger(__name__)

Reprompt = Callable[[str], str]

EXIT_SENTINEL = "e"

INVALID_ENTRY_MESSAGE = "Invalid entry, please try again or press E to exit"
INVALID_DATE_MESSAGE = (
    "Unable to convert date, please try again.\n"
    "Enter Date completed (mm-dd-yyyy or dd-mm-yyyy), or type 'E' to exit"
)
INVALID_QUANTITY_MESSAGE = "Invalid entry, please enter a numerical quantity greater than zero or E to exit"

# Both layouts share one shape: two digits, two digits, four-digit year.
DATE_SHAPE_PATTERN = re.compile(r"^\d{2}-\d{2}-\d{4}$")
INTEGER_PATTERN = re.compile(r"^[+-]?\d+$")


def is_exit(raw: str | None) -> bool:
    """Return True if raw is the cancellation sentinel (``E`` in any case)."""
    return raw is not None and raw.strip().lower() == EXIT_SENTINEL


def require_non_blank(raw: str | None, reprompt: Reprompt) -> str:
    """Re-prompt until raw contains non-whitespace text.

    Does not interpret the exit sentinel; callers check `is_exit` on the
    returned text.

    Args:
        raw: First raw read (None is treated as blank).
        reprompt: Callback that shows a message and returns the next read.

    Returns:
        The first non-blank read, stripped of surrounding whitespace.
    """
    while raw is None or not raw.strip():
        raw = reprompt(INVALID_ENTRY_MESSAGE)
    return raw.strip()


def _try_parse_date(text: str) -> date | None:
    if not DATE_SHAPE_PATTERN.match(text):
        return None
    for layout in DATE_FORMATS:
        try:
            return datetime.strptime(text, layout).date()
        except ValueError:
            continue
    return None


def parse_date(raw: str | None, reprompt: Reprompt) -> date | None:
    """Parse a date in ``MM-DD-YYYY`` or ``DD-MM-YYYY`` form.

    Layouts are tried in that order and the first one that parses wins.
    Anything else (including ISO ``YYYY-MM-DD``) triggers a re-prompt.

    Args:
        raw: First raw read.
        reprompt: Callback that shows a message and returns the next read.

    Returns:
        The parsed date, or None if the operator entered the exit sentinel.
    """
    while True:
        if is_exit(raw):
            return None
        text = (raw or "").strip()
        parsed = _try_parse_date(text)
        if parsed is not None:
            logger.debug("Parsed date %r as %s", text, parsed.isoformat())
            return parsed
        raw = reprompt(INVALID_DATE_MESSAGE)


def format_date(value: date) -> str:
    """Render a date in the canonical stored form, ``MM-DD-YYYY``.

    Formatted field by field: ``strftime("%Y")`` does not zero-pad years
    below 1000 on every platform.
    """
    return f"{value.month:02d}-{value.day:02d}-{value.year:04d}"


def parse_stored_date(text: str) -> date:
    """Parse a date previously written by `format_date`.

    Raises:
        ValueError: If text is not in canonical form.
    """
    return datetime.strptime(text, CANONICAL_DATE_FORMAT).date()


def parse_int(raw: str | None) -> int | None:
    """Parse base-10 integer text, returning None when it is not one."""
    if raw is None:
        return None
    text = raw.strip()
    if not INTEGER_PATTERN.match(text):
        return None
    return int(text)


def parse_positive_int(raw: str | None, reprompt: Reprompt) -> int | None:
    """Re-prompt until raw is a base-10 integer strictly greater than zero.

    Returns:
        The integer, or None if the operator entered the exit sentinel.
    """
    while True:
        if is_exit(raw):
            return None
        value = parse_int(raw)
        if value is not None and value > 0:
            return value
        raw = reprompt(INVALID_QUANTITY_MESSAGE)


def select_field(raw: str | None, reprompt: Reprompt) -> EntryField | None:
    """Re-prompt until raw is exactly one of ``0``, ``1``, ``2``, ``3``.

    Returns:
        The selected field, or None if the operator entered the exit sentinel.
    """
    while True:
        if is_exit(raw):
            return None
        text = (raw or "").strip()
        try:
            return EntryField(text)
        except ValueError:
            raw = reprompt(INVALID_ENTRY_MESSAGE)


def select_entry_id(
    raw: str | None,
    valid_ids: Collection[int],
    reprompt: Reprompt,
) -> int | None:
    """Re-prompt until raw names one of valid_ids.

    Args:
        raw: First raw read.
        valid_ids: Ids the operator may choose from (usually the ids just
            listed on screen).
        reprompt: Callback that shows a message and returns the next read.

    Returns:
        The chosen id, or None if the operator entered the exit sentinel.
    """
    allowed = set(valid_ids)
    while True:
        if is_exit(raw):
            return None
        value = parse_int(raw)
        if value is not None and value in allowed:
            return value
        raw = reprompt(INVALID_ENTRY_MESSAGE)
