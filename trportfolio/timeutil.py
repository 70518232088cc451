"""Date-time handling for CSV files and the runtime timezone."""

from __future__ import annotations

import logging
import os
import time
from datetime import datetime, timezone
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

logger = logging.getLogger(__name__)

CSV_DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"

# Older exports stored timestamps as "25 Sep 23 08:45 +0000".
_LEGACY_CSV_DATETIME_FORMAT = "%d %b %y %H:%M %z"


def format_csv_datetime(value: datetime) -> str:
    """Render a date-time the way it is stored in the CSV file."""
    return (
        f"{value.year:04d}-{value.month:02d}-{value.day:02d} "
        f"{value.hour:02d}:{value.minute:02d}:{value.second:02d}"
    )


def parse_csv_datetime(text: str) -> datetime:
    """Parse a CSV date-time; values without a zone are taken as UTC."""
    try:
        return datetime.strptime(text, CSV_DATETIME_FORMAT).replace(tzinfo=timezone.utc)
    except ValueError:
        pass

    try:
        return datetime.strptime(text, _LEGACY_CSV_DATETIME_FORMAT)
    except ValueError as exc:
        raise ValueError(f"could not parse datetime: {text!r}") from exc


def _runtime_timezone_name() -> str:
    name = os.environ.get("TZ", "").lstrip(":").strip()
    if name:
        return name

    localtime = Path("/etc/localtime")
    if localtime.exists():
        target = os.path.realpath(localtime)
        marker = "zoneinfo" + os.sep
        if marker in target:
            return target.split(marker, 1)[1]

    timezone_file = Path("/etc/timezone")
    if timezone_file.is_file():
        content = timezone_file.read_text(encoding="utf-8").strip()
        if content:
            return content

    raise RuntimeError("could not get runtime timezone")


def set_runtime_timezone() -> ZoneInfo:
    """Detect the runtime timezone, make it the process-local one and return it."""
    name = _runtime_timezone_name()

    try:
        zone = ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise RuntimeError(f"could not get timezone location: {name}") from exc

    os.environ["TZ"] = name
    if hasattr(time, "tzset"):
        time.tzset()

    logger.debug("Runtime timezone set", extra={"timezoneName": name})

    return zone