"""
ingestion.py - Reads forensic CSV logs into LogEvent records
"""

import os
import re
from typing import List, Optional

from constants import (
    CSV_COLUMNS,
    CSV_FIELD_COUNT,
    CSV_SEPARATOR,
    ENCODING_UTF8,
    FIELD_COUNT_ERROR,
    FILE_NOT_FOUND_ERROR,
    NEGATIVE_BYTES_ERROR,
)
from datamodels.events import LogEvent
from infra.errors import ErrorCodes, LogFileError, LogParseError
from infra.logging_setup import get_logger

logger = get_logger(__name__)

_INTEGER = re.compile(r"[+-]?[0-9]+")


def _is_header(line: str) -> bool:
    names = [f.strip().upper() for f in line.split(CSV_SEPARATOR)]
    return names[:CSV_FIELD_COUNT] == CSV_COLUMNS


def _to_int(value: str) -> int:
    if not _INTEGER.fullmatch(value):
        raise ValueError(f"not an integer: {value!r}")
    return int(value)


def parse_line(line: str, line_number: Optional[int] = None) -> LogEvent:
    """Convert one CSV row into a LogEvent, raising LogParseError if it does not fit the schema."""
    fields = [f.strip() for f in line.split(CSV_SEPARATOR)]
    if len(fields) < CSV_FIELD_COUNT:
        raise LogParseError(FIELD_COUNT_ERROR, line_number, line)

    try:
        timestamp = _to_int(fields[0])
        severity = _to_int(fields[5])
        bytes_transferred = _to_int(fields[6])
    except ValueError as e:
        raise LogParseError(f"invalid numeric value: {e}", line_number, line) from e

    if bytes_transferred < 0:
        raise LogParseError(NEGATIVE_BYTES_ERROR, line_number, line)

    return LogEvent(
        timestamp=timestamp,
        user_id=fields[1],
        session_id=fields[2],
        action_type=fields[3],
        target_resource=fields[4],
        severity_level=severity,
        bytes_transferred=bytes_transferred,
    )


def parse_log_text(text, strict: bool = False) -> List[LogEvent]:
    """Parse raw CSV log content into a list of LogEvent.

    A header row (first non-blank line naming the CSV columns) and
    blank lines are skipped. Malformed rows raise LogParseError when
    ``strict`` is set; otherwise they are logged and skipped. Events keep
    file order.
    """
    events = []
    seen_content = False
    for line_number, line in enumerate(str(text).splitlines(), start=1):
        if not line.strip():
            continue
        if not seen_content:
            seen_content = True
            if _is_header(line):
                continue
        try:
            events.append(parse_line(line, line_number))
        except LogParseError as e:
            if strict:
                raise
            logger.warning("Skipping malformed row: %s", e)
    return events


def validate_log_file(path) -> bool:
    """Return True if path names an existing, readable regular file."""
    if not path or not str(path).strip():
        return False
    return os.path.isfile(path) and os.access(path, os.R_OK)


def read_log_file(path, strict: bool = False) -> List[LogEvent]:
    """Read a forensic CSV log file and return its events."""
    if not validate_log_file(path):
        raise LogFileError(f"{FILE_NOT_FOUND_ERROR}: {path}")
    try:
        with open(path, "r", encoding=ENCODING_UTF8) as f:
            content = f.read()
    except (IOError, UnicodeDecodeError) as e:
        raise LogFileError(f"Failed to read {path}: {e}", ErrorCodes.FILE_UNREADABLE) from e

    events = parse_log_text(content, strict=strict)
    logger.info("Loaded %d events from %s", len(events), os.path.basename(str(path)))
    return events
