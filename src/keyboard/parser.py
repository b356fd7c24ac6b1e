"""Keyboard descriptor parser.

A descriptor is the free text stored in the ``keyboard`` column of the command
table. Two shapes are understood:

  inline:Ping, url:Docs|https://example.com   → inline buttons (one row)
  yes,no|maybe                                → reply keyboard rows

Reply rows are separated by newlines or ``|``, columns by ``,``. Commas inside
a label are not supported in either form.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional, Tuple, Union

INLINE_PREFIX = "inline:"
URL_PREFIX = "url:"
CALLBACK_PREFIX = "use:"
COMMAND_MARKER = "/"

ROW_SEPARATOR = re.compile(r"\r?\n|\|")


@dataclass(frozen=True)
class UrlButton:
    label: str
    url: str


@dataclass(frozen=True)
class ActionButton:
    label: str
    callback_data: str


InlineButton = Union[UrlButton, ActionButton]


@dataclass(frozen=True)
class InlineLayout:
    buttons: Tuple[InlineButton, ...] = ()


@dataclass(frozen=True)
class ReplyLayout:
    rows: Tuple[Tuple[str, ...], ...] = ()


KeyboardLayout = Union[InlineLayout, ReplyLayout]


def strip_marker(name: str) -> str:
    """Drop a single leading command marker: ``/help`` → ``help``."""
    if name.startswith(COMMAND_MARKER):
        return name[len(COMMAND_MARKER):]
    return name


def callback_data_for(label: str) -> str:
    return f"{CALLBACK_PREFIX}{strip_marker(label)}"


def has_prefix(text: str, prefix: str) -> bool:
    return text[: len(prefix)].lower() == prefix


def split_tokens(body: str) -> list[str]:
    """Split an inline body on commas, trimming and dropping empty tokens."""
    return [token.strip() for token in body.split(",") if token.strip()]


def split_rows(raw: str) -> list[list[str]]:
    """Split a reply descriptor into non-empty rows of non-empty labels."""
    rows = []
    for chunk in ROW_SEPARATOR.split(raw):
        labels = [label.strip() for label in chunk.split(",") if label.strip()]
        if labels:
            rows.append(labels)
    return rows


def _parse_url_token(token: str) -> Optional[UrlButton]:
    rest = token[len(URL_PREFIX):]
    if "|" not in rest:
        return None
    label, url = (part.strip() for part in rest.split("|", 1))
    if not label or not url:
        return None
    return UrlButton(label=label, url=url)


def _parse_inline(body: str) -> InlineLayout:
    buttons: list[InlineButton] = []
    for token in split_tokens(body):
        if has_prefix(token, URL_PREFIX):
            button = _parse_url_token(token)
            if button is not None:
                buttons.append(button)
            continue
        buttons.append(ActionButton(label=token, callback_data=callback_data_for(token)))
    return InlineLayout(buttons=tuple(buttons))


def parse_keyboard(descriptor: Optional[str]) -> Optional[KeyboardLayout]:
    """
    Turn a descriptor into a keyboard layout.

    Returns None when the descriptor describes no keyboard at all. An inline
    descriptor always yields an InlineLayout, even when every token was
    dropped as malformed.
    """
    if descriptor is None:
        return None
    raw = str(descriptor).strip()
    if not raw:
        return None

    if has_prefix(raw, INLINE_PREFIX):
        return _parse_inline(raw[len(INLINE_PREFIX):])

    rows = split_rows(raw)
    if not rows:
        return None
    return ReplyLayout(rows=tuple(tuple(row) for row in rows))
