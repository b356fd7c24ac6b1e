#!/usr/bin/env python3
"""
Command Table Cache
JSON file snapshot of the parsed command table with TTL freshness

Implements:
- get() → list of record dicts | None
- put(records) → bool
- invalidate() → bool
- is_fresh() → bool
- get_stats() → {hits, misses, writes, errors, ...}

No expiry is stored: freshness is the file's age (now - mtime) against the TTL.
"""

import json
import logging
import time
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from jsonschema import Draft7Validator

logger = logging.getLogger(__name__)

DEFAULT_TTL_SEC = 600

RECORDS_SCHEMA: Dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "array",
    "items": {
        "type": "object",
        "required": ["name"],
        "properties": {
            "name": {"type": "string", "minLength": 1},
            "answer": {"type": "string"},
            "keyboard": {"type": "string"},
            "aliases": {"type": "array", "items": {"type": "string"}},
        },
    },
}

_validator = Draft7Validator(RECORDS_SCHEMA)


class CommandCache:
    """
    Single-file cache for the command table.

    Design principles:
    - Graceful degradation: unreadable or invalid cache = miss, not error
    - Write failures are logged and swallowed
    - No locking: one process per cache path
    """

    def __init__(
        self,
        path: Path,
        ttl_sec: int = DEFAULT_TTL_SEC,
        clock: Callable[[], float] = time.time,
    ):
        self.path = Path(path)
        self.ttl_sec = ttl_sec
        self._clock = clock
        self.stats = {
            "hits": 0,
            "misses": 0,
            "writes": 0,
            "errors": 0,
        }

    def age_seconds(self) -> Optional[float]:
        """Seconds since the artifact was last written, or None if absent."""
        try:
            return self._clock() - self.path.stat().st_mtime
        except OSError:
            return None

    def is_fresh(self) -> bool:
        age = self.age_seconds()
        return age is not None and age < self.ttl_sec

    def get(self) -> Optional[List[Dict[str, Any]]]:
        """
        Return the cached records if the artifact is fresh and non-empty.

        Returns:
            List of record dicts, or None on miss/stale/corrupt cache
        """
        try:
            if not self.is_fresh():
                self.stats["misses"] += 1
                return None

            data = json.loads(self.path.read_text(encoding="utf-8"))
            errors = list(_validator.iter_errors(data))
            if errors:
                raise ValueError(f"cache schema mismatch: {errors[0].message}")
            if not data:
                self.stats["misses"] += 1
                return None

            self.stats["hits"] += 1
            logger.info(f"Cache hit: {len(data)} commands from {self.path}")
            return data

        except Exception as e:
            self.stats["errors"] += 1
            self.stats["misses"] += 1
            logger.error(f"Cache read error: {e}")
            return None

    def put(self, records: List[Dict[str, Any]]) -> bool:
        """Write the records snapshot, creating the parent directory if needed."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(records, indent=2, ensure_ascii=False), encoding="utf-8")
            self.stats["writes"] += 1
            logger.debug(f"Cached {len(records)} commands at {self.path}")
            return True
        except Exception as e:
            self.stats["errors"] += 1
            logger.error(f"Cache write error: {e}")
            return False

    def invalidate(self) -> bool:
        """Delete the artifact. Returns True if a file was removed."""
        try:
            self.path.unlink()
            logger.info(f"Cache cleared at {self.path}")
            return True
        except FileNotFoundError:
            return False
        except OSError as e:
            self.stats["errors"] += 1
            logger.error(f"Cache clear error: {e}")
            return False

    def get_stats(self) -> Dict[str, Any]:
        total_requests = self.stats["hits"] + self.stats["misses"]
        hit_rate = (self.stats["hits"] / total_requests * 100) if total_requests > 0 else 0
        age = self.age_seconds()
        return {
            "hits": self.stats["hits"],
            "misses": self.stats["misses"],
            "hit_rate_percent": round(hit_rate, 1),
            "writes": self.stats["writes"],
            "errors": self.stats["errors"],
            "ttl_sec": self.ttl_sec,
            "age_seconds": int(age) if age is not None else None,
        }
