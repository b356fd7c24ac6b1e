#!/usr/bin/env python3
"""
Start Row Appender

Downloads the published command table and writes a local copy with a
synthetic /start row appended. The bot prefers that local copy over the
remote table, so this is the quickest way to try /start without editing
the spreadsheet.

Usage:
    python -m sheets.append_start [config.yml]

The /start row copies the first data row and overrides the command, answer,
aliases and help columns where the header has them.
"""

import csv
import io
import logging
import sys
from pathlib import Path
from typing import List, Optional

from catalog.config import CatalogConfig, default_config, load_config, load_source_config
from catalog.loader import TableSource, decode_table, http_fetch
from catalog.table import read_rows

logger = logging.getLogger(__name__)

START_OVERRIDES = {
    "command": "/start",
    "answer": "Welcome! Use /help to see available commands.",
    "aliases": "",
    "help": "Start the bot",
}


def build_start_row(header: List[str], template: List[str]) -> List[str]:
    """Copy the template row, padded to the header width, then apply overrides."""
    row = list(template) + [""] * max(0, len(header) - len(template))
    for index, column in enumerate(header):
        if column in START_OVERRIDES:
            row[index] = START_OVERRIDES[column]
    return row


def format_row(row: List[str]) -> str:
    buffer = io.StringIO()
    csv.writer(buffer, lineterminator="").writerow(row)
    return buffer.getvalue()


def append_start_row(text: str) -> Optional[str]:
    """Return the table text with a /start row appended, or None if it has no data rows."""
    header, rows = read_rows(text)
    if not header or not rows:
        return None
    start_row = build_start_row(header, rows[0])
    return text.rstrip("\r\n") + "\n" + format_row(start_row) + "\n"


def fetch_table(source: TableSource, timeout: float) -> str:
    if source.is_local:
        return decode_table(Path(source.location).read_bytes())
    return decode_table(http_fetch(source.location, timeout))


def run(config: CatalogConfig) -> int:
    source_config = load_source_config(config.source_config_path)
    if source_config is None:
        logger.error(f"Missing or empty source config: {config.source_config_path}")
        return 1

    source = TableSource.from_url(source_config.csv_url)
    try:
        text = fetch_table(source, config.fetch_timeout_sec)
    except Exception as e:
        logger.error(f"Could not download command table: {e}")
        return 1

    appended = append_start_row(text)
    if appended is None:
        logger.error("CSV has no data rows")
        return 1

    out_path = config.local_override_path
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(appended, encoding="utf-8")
    logger.info(f"Wrote local appended CSV to {out_path}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for manual invocation."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )
    args = sys.argv[1:] if argv is None else argv

    try:
        config = load_config(args[0]) if args else load_config()
    except FileNotFoundError as e:
        if args:
            logger.error(str(e))
            return 1
        config = default_config()

    return run(config)


if __name__ == "__main__":
    sys.exit(main())
