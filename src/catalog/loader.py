"""Command table loader: source resolution, TTL cache, fetch and parse."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional

import requests

from cache import CommandCache

from .config import CatalogConfig, load_source_config
from .records import CommandRecord, record_from_row
from .table import read_table

logger = logging.getLogger(__name__)

FILE_SCHEME = "file://"


@dataclass(frozen=True)
class TableSource:
    location: str
    is_local: bool

    @classmethod
    def from_url(cls, url: str) -> "TableSource":
        if url.startswith(FILE_SCHEME):
            return cls(location=url[len(FILE_SCHEME):], is_local=True)
        return cls(location=url, is_local=False)


def decode_table(payload: bytes) -> str:
    # Spreadsheet exports often start with a BOM, which would hide the first header
    return payload.decode("utf-8-sig", errors="replace")


def http_fetch(url: str, timeout: float) -> bytes:
    response = requests.get(url, timeout=timeout)
    response.raise_for_status()
    return response.content


def parse_commands(text: str) -> List[CommandRecord]:
    """Map table text to records, skipping rows without a command."""
    commands = []
    for row in read_table(text):
        record = record_from_row(row)
        if record is not None:
            commands.append(record)
    return commands


class CommandTableLoader:
    """
    Produces the command list for the bot.

    1. Resolve the source (local override file beats the configured URL)
    2. Serve a fresh cache snapshot if there is one
    3. Otherwise fetch, parse and write the snapshot back

    "No table configured" yields an empty list. Fetch errors propagate.
    """

    def __init__(
        self,
        config: CatalogConfig,
        cache: Optional[CommandCache] = None,
        fetch: Optional[Callable[[str, float], bytes]] = None,
    ) -> None:
        self.config = config
        self.cache = cache or CommandCache(config.cache_path, ttl_sec=config.cache_ttl_sec)
        self._fetch = fetch or http_fetch
        # Reads from the table source; cache hits are not counted
        self.fetch_count = 0

    def resolve_source(self) -> Optional[TableSource]:
        source = load_source_config(self.config.source_config_path)
        if source is None:
            return None

        override = self.config.local_override_path
        if override.exists():
            logger.info(f"Using local command table {override}")
            return TableSource(location=str(override), is_local=True)
        return TableSource.from_url(source.csv_url)

    def fetch_text(self, source: TableSource) -> str:
        self.fetch_count += 1
        if source.is_local:
            logger.info(f"Reading command table from {source.location}")
            return decode_table(Path(source.location).read_bytes())

        logger.info(f"Fetching command table from {source.location}")
        return decode_table(self._fetch(source.location, self.config.fetch_timeout_sec))

    def _from_cache(self) -> Optional[List[CommandRecord]]:
        cached = self.cache.get()
        if not cached:
            return None
        try:
            return [CommandRecord.from_dict(item) for item in cached]
        except Exception as e:
            logger.error(f"Cache decode error: {e}")
            return None

    def load(self) -> List[CommandRecord]:
        source = self.resolve_source()
        if source is None:
            return []

        cached = self._from_cache()
        if cached:
            return cached

        text = self.fetch_text(source)
        commands = parse_commands(text)
        logger.info(f"Loaded {len(commands)} commands")

        self.cache.put([command.to_dict() for command in commands])
        return commands
