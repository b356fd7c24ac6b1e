"""
Lenient CSV reader for spreadsheet exports.

The command table is edited by hand in a spreadsheet, so the reader tolerates:
- rows with fewer or more fields than the header
- stray quotes inside unquoted fields (kept literally)
- quoted fields spanning several lines
- a record whose quoted field is never closed, or is closed by a quote
  followed by text: that record is dropped and reading resumes on the
  following physical line
"""

from __future__ import annotations

import csv
import io
import logging
import re
from typing import Dict, Iterator, List, Optional, Tuple

logger = logging.getLogger(__name__)

DELIMITER = ","
QUOTE = '"'

# Only real line breaks; str.splitlines() also breaks on form feeds and
# unicode separators that may sit inside quoted answers
LINE_BREAK = re.compile(r"\r\n|\n|\r")

# Quote scanner states, mirroring csv.reader with skipinitialspace
_FIELD_START = 0
_UNQUOTED = 1
_QUOTED = 2
_QUOTE_IN_QUOTED = 3
_AFTER_QUOTED = 4
_MALFORMED = 5


def _scan_line(line: str, state: int) -> int:
    """
    Advance the quote state machine over one physical line.

    Returns _QUOTED while a quoted field is still open, _MALFORMED when a
    closed quoted field is followed by anything but blanks and a delimiter,
    and _FIELD_START otherwise.
    """
    for char in line:
        if state == _FIELD_START:
            if char == QUOTE:
                state = _QUOTED
            elif char == DELIMITER or char == " ":
                state = _FIELD_START
            else:
                state = _UNQUOTED
        elif state == _UNQUOTED:
            if char == DELIMITER:
                state = _FIELD_START
        elif state == _QUOTED:
            if char == QUOTE:
                state = _QUOTE_IN_QUOTED
        elif state == _QUOTE_IN_QUOTED:
            if char == QUOTE:
                state = _QUOTED
            elif char == DELIMITER:
                state = _FIELD_START
            elif char.isspace():
                state = _AFTER_QUOTED
            else:
                return _MALFORMED
        else:
            if char == DELIMITER:
                state = _FIELD_START
            elif not char.isspace():
                return _MALFORMED
    if state == _QUOTED:
        return _QUOTED
    return _FIELD_START


def split_records(text: str) -> Iterator[Tuple[int, str]]:
    """
    Yield (line_number, record_text) for every logical CSV record.

    Blank lines between records are skipped. A record still inside a quoted
    field at end of input, or whose quoted field closes mid-text, is reported
    and skipped, and scanning restarts on the line after the one where that
    record began.
    """
    lines = LINE_BREAK.split(text)
    index = 0
    while index < len(lines):
        if not lines[index].strip():
            index += 1
            continue

        start = index
        state = _FIELD_START
        while index < len(lines):
            state = _scan_line(lines[index], state)
            index += 1
            if state != _QUOTED:
                break

        if state == _QUOTED:
            logger.warning(
                "Skipping malformed row at line %d: unterminated quoted field", start + 1
            )
            index = start + 1
            continue
        if state == _MALFORMED:
            logger.warning(
                "Skipping malformed row at line %d: text after closing quote", start + 1
            )
            index = start + 1
            continue

        yield start + 1, "\n".join(lines[start:index])


def _parse_record(record_text: str) -> List[str]:
    reader = csv.reader(
        io.StringIO(record_text),
        delimiter=DELIMITER,
        quotechar=QUOTE,
        skipinitialspace=True,
        strict=False,
    )
    fields = next(reader, [])
    return [value.strip() for value in fields]


def read_rows(text: str) -> Tuple[List[str], List[List[str]]]:
    """
    Parse CSV text into (header, rows) with every field trimmed.

    Rows that the csv module still refuses are skipped one at a time.
    """
    header: Optional[List[str]] = None
    rows: List[List[str]] = []
    skipped = 0

    for line_number, record_text in split_records(text):
        try:
            fields = _parse_record(record_text)
        except csv.Error as e:
            logger.warning("Skipping malformed row at line %d: %s", line_number, e)
            skipped += 1
            continue
        if header is None:
            header = fields
            continue
        rows.append(fields)

    if skipped:
        logger.info(f"Table parsed with {skipped} malformed rows skipped")
    return header or [], rows


def read_table(text: str) -> List[Dict[str, str]]:
    """Parse CSV text into dicts keyed by header column; missing fields are absent."""
    header, rows = read_rows(text)
    if not header:
        return []
    records = []
    for fields in rows:
        records.append({column: value for column, value in zip(header, fields) if column})
    return records
