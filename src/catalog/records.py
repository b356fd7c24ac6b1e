"""Command records built from table rows."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from keyboard.parser import strip_marker

# Telegram refuses to send an empty message
EMPTY_ANSWER = " "


@dataclass
class CommandRecord:
    name: str
    answer: str = ""
    keyboard: str = ""
    aliases: List[str] = field(default_factory=list)

    @property
    def reply_text(self) -> str:
        return self.answer or EMPTY_ANSWER

    def alias_keys(self) -> List[str]:
        return [strip_marker(alias) for alias in self.aliases if strip_marker(alias)]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "answer": self.answer,
            "keyboard": self.keyboard,
            "aliases": list(self.aliases),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CommandRecord":
        return cls(
            name=data["name"],
            answer=data.get("answer") or "",
            keyboard=data.get("keyboard") or "",
            aliases=list(data.get("aliases") or []),
        )


def split_aliases(raw: Optional[str]) -> List[str]:
    return [alias.strip() for alias in (raw or "").split(",") if alias.strip()]


def record_from_row(row: Mapping[str, Optional[str]]) -> Optional[CommandRecord]:
    """Map one table row to a record; rows without a command are skipped."""
    name = strip_marker((row.get("command") or "").strip())
    if not name:
        return None
    return CommandRecord(
        name=name,
        answer=row.get("answer") or "",
        keyboard=row.get("keyboard") or "",
        aliases=split_aliases(row.get("aliases")),
    )
