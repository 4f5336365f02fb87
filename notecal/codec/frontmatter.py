"""Front-matter codec: document metadata <-> calendar events.

Event documents carry a YAML block at the top of the file:

    ---
    title: Standup
    allDay: false
    date: 2024-01-05
    startTime: "09:00"
    endTime: "09:30"
    ---

``endDate`` is inclusive in metadata and only written when it differs from
``date``. Decoded all-day records use an exclusive end, the way the widget
expects it.
"""

import logging
import re
from datetime import date, datetime, time, timedelta
from pathlib import PurePosixPath
from typing import Any

import yaml
from pydantic import ValidationError as PydanticValidationError

from notecal.models.event import CalendarEvent, EventRecord

logger = logging.getLogger(__name__)

DELIMITER = "---"

# Keys owned by the codec; everything else in the block is left alone on write
EVENT_KEYS = ("date", "endDate", "allDay", "startTime", "endTime")

_TIME_RE = re.compile(r"^(\d{1,2}):(\d{2})(?::(\d{2}))?$")
_UNSAFE_NAME_CHARS = re.compile(r'[\\/:*?"<>|#^\[\]]')


def split_document(text: str) -> tuple[dict[str, Any] | None, str]:
    """Split a document into its front-matter mapping and body.

    Returns ``(None, text)`` when the document has no usable front-matter.
    """
    lines = text.splitlines(keepends=True)
    if not lines or lines[0].rstrip("\r\n") != DELIMITER:
        return None, text

    for index in range(1, len(lines)):
        if lines[index].rstrip("\r\n") == DELIMITER:
            block = "".join(lines[1:index])
            body = "".join(lines[index + 1 :])
            break
    else:
        return None, text

    try:
        data = yaml.safe_load(block) if block.strip() else {}
    except yaml.YAMLError as e:
        logger.debug("Invalid front-matter YAML: %s", e)
        return None, body
    if not isinstance(data, dict):
        return None, body
    return data, body


def join_document(metadata: dict[str, Any], body: str) -> str:
    """Render front-matter and body back into document text."""
    block = yaml.safe_dump(
        metadata, default_flow_style=False, allow_unicode=True, sort_keys=False
    )
    return f"{DELIMITER}\n{block}{DELIMITER}\n{body}"


def parse_date(value: Any) -> date | None:
    """Coerce a metadata value into a date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip())
        except ValueError:
            return None
    return None


def parse_time(value: Any) -> time | None:
    """Coerce a metadata value into a time of day.

    YAML 1.1 reads unquoted ``10:30`` as the sexagesimal integer 630, so
    integers are taken as minutes past midnight.
    """
    if isinstance(value, datetime):
        return value.time()
    if isinstance(value, time):
        return value
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        if 0 <= value < 24 * 60:
            return time(value // 60, value % 60)
        return None
    if isinstance(value, str):
        match = _TIME_RE.match(value.strip())
        if not match:
            return None
        hour, minute = int(match.group(1)), int(match.group(2))
        second = int(match.group(3) or 0)
        if hour > 23 or minute > 59 or second > 59:
            return None
        return time(hour, minute, second)
    return None


def format_time(value: time) -> str:
    """Format a time of day for metadata."""
    return value.strftime("%H:%M")


def _parse_bool(value: Any) -> bool | None:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in ("true", "false"):
        return value.strip().lower() == "true"
    return None


def decode(metadata: dict[str, Any] | None, path: str) -> EventRecord | None:
    """Decode document metadata into an event record.

    Returns ``None`` when the metadata does not describe an event. That is
    not an error: most documents in a vault are not calendar entries.
    """
    if not metadata:
        return None

    start_date = parse_date(metadata.get("date"))
    if start_date is None:
        return None

    title = metadata.get("title")
    if title is None or str(title).strip() == "":
        title = PurePosixPath(path).stem
    title = str(title)

    end_date = parse_date(metadata.get("endDate"))
    if end_date is not None and end_date < start_date:
        logger.debug("Skipping %s: endDate before date", path)
        return None

    start_time = parse_time(metadata.get("startTime"))
    all_day = _parse_bool(metadata.get("allDay"))
    if all_day is None:
        all_day = start_time is None

    color = metadata.get("color")
    color = str(color) if color else None

    try:
        if all_day:
            end = end_date + timedelta(days=1) if end_date else None
            return EventRecord(
                id=path, title=title, start=start_date, end=end, all_day=True, color=color
            )

        if start_time is None:
            logger.debug("Skipping %s: timed event without startTime", path)
            return None
        start = datetime.combine(start_date, start_time)
        end_time = parse_time(metadata.get("endTime"))
        end = None
        if end_time is not None:
            end = datetime.combine(end_date or start_date, end_time)
        elif end_date is not None and end_date > start_date:
            # No end time: the event runs through the whole of endDate
            end = datetime.combine(end_date + timedelta(days=1), time.min)
        return EventRecord(
            id=path, title=title, start=start, end=end, all_day=False, color=color
        )
    except PydanticValidationError as e:
        logger.debug("Skipping %s: %s", path, e)
        return None


def encode(
    start: date | datetime,
    end: date | datetime | None,
    all_day: bool,
) -> dict[str, Any]:
    """Metadata fragment for a date range.

    For all-day ranges ``end`` is exclusive, as the widget reports it.
    """
    start_date = start.date() if isinstance(start, datetime) else start
    metadata: dict[str, Any] = {"date": start_date}

    if all_day:
        if end is not None:
            end_date = end.date() if isinstance(end, datetime) else end
            last_day = end_date - timedelta(days=1)
            if last_day > start_date:
                metadata["endDate"] = last_day
        metadata["allDay"] = True
        return metadata

    if end is not None and isinstance(end, datetime) and end.date() != start_date:
        metadata["endDate"] = end.date()
    metadata["allDay"] = False
    if isinstance(start, datetime):
        metadata["startTime"] = format_time(start.time())
    else:
        metadata["startTime"] = format_time(time(0, 0))
    if isinstance(end, datetime):
        metadata["endTime"] = format_time(end.time())
    return metadata


def encode_from_calendar_event(event: CalendarEvent) -> dict[str, Any]:
    """Metadata for an event edited in the calendar (moved or resized)."""
    metadata: dict[str, Any] = {"title": event.title}
    metadata.update(encode(event.start, event.end, event.all_day))
    if event.event_color:
        metadata["color"] = event.event_color
    return metadata


def merge_metadata(existing: dict[str, Any] | None, encoded: dict[str, Any]) -> dict[str, Any]:
    """Overlay encoded event fields onto a document's existing metadata.

    Stale range keys are dropped first so switching between all-day and timed
    does not leave ``startTime`` behind. Unrelated keys are kept as they were.
    """
    merged = {k: v for k, v in (existing or {}).items() if k not in EVENT_KEYS}
    merged.update(encoded)
    return merged


def derive_basename(on: date | datetime, title: str) -> str:
    """File name stem used for an event document: ``YYYY-MM-DD Title``."""
    day = on.date() if isinstance(on, datetime) else on
    clean_title = _UNSAFE_NAME_CHARS.sub("", title).strip()
    return f"{day.isoformat()} {clean_title}".strip()
