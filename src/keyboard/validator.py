"""Lightweight checks for spreadsheet-authored keyboard descriptors.

Findings are logged and returned; nothing here blocks a command from being
registered.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import List, Optional

from .parser import (
    INLINE_PREFIX,
    URL_PREFIX,
    callback_data_for,
    has_prefix,
    split_rows,
    split_tokens,
)

logger = logging.getLogger(__name__)

MAX_DESCRIPTOR_CHARS = 4000
MAX_LABEL_CHARS = 64
MAX_REPLY_BUTTONS = 100
# Telegram rejects callback_data longer than 64 bytes
MAX_CALLBACK_BYTES = 64
LABEL_PREVIEW_CHARS = 80

URL_PATTERN = re.compile(r"^https?://")


@dataclass(frozen=True)
class KeyboardWarning:
    command: str
    code: str
    message: str


class _Collector:
    def __init__(self, command: str) -> None:
        self.command = command
        self.items: List[KeyboardWarning] = []

    def warn(self, code: str, message: str) -> None:
        text = f"[keyboard] {message}"
        logger.warning(text)
        self.items.append(KeyboardWarning(command=self.command, code=code, message=text))

    def check_label(self, label: str) -> None:
        if len(label) > MAX_LABEL_CHARS:
            self.warn(
                "label_too_long",
                f"button label too long for /{self.command}: {label[:LABEL_PREVIEW_CHARS]}...",
            )


def _check_inline(body: str, collector: _Collector) -> None:
    for token in split_tokens(body):
        if has_prefix(token, URL_PREFIX):
            rest = token[len(URL_PREFIX):]
            if "|" not in rest:
                collector.warn(
                    "malformed_url", f"malformed url entry for /{collector.command}: {token}"
                )
                collector.check_label(rest.strip())
                continue
            label, url = (part.strip() for part in rest.split("|", 1))
            if url and not URL_PATTERN.match(url):
                collector.warn(
                    "invalid_url", f"url may be invalid for /{collector.command}: {url}"
                )
            collector.check_label(label)
            continue

        collector.check_label(token)
        callback = callback_data_for(token)
        if len(callback.encode("utf-8")) > MAX_CALLBACK_BYTES:
            collector.warn(
                "callback_too_long",
                f"callback data over {MAX_CALLBACK_BYTES} bytes for /{collector.command}: {callback[:LABEL_PREVIEW_CHARS]}",
            )


def _check_reply(raw: str, collector: _Collector) -> None:
    rows = split_rows(raw)
    if not rows:
        collector.warn("no_rows", f"no rows parsed for /{collector.command}")
        return
    total = 0
    for row in rows:
        total += len(row)
        for label in row:
            collector.check_label(label)
    if total > MAX_REPLY_BUTTONS:
        collector.warn(
            "too_many_buttons", f"very large keyboard for /{collector.command}: {total} buttons"
        )


def validate_keyboard(descriptor: Optional[str], command_name: str) -> List[KeyboardWarning]:
    """Scan a descriptor for structural problems; returns the warnings it logged."""
    collector = _Collector(command_name)
    raw = str(descriptor or "").strip()

    if not raw:
        collector.warn("empty", f"empty keyboard for /{command_name}")
        return collector.items
    if len(raw) > MAX_DESCRIPTOR_CHARS:
        collector.warn("too_large", f"keyboard too large for /{command_name}")
        return collector.items

    if has_prefix(raw, INLINE_PREFIX):
        _check_inline(raw[len(INLINE_PREFIX):], collector)
    else:
        _check_reply(raw, collector)
    return collector.items
