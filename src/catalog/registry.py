"""Command registry: names and aliases mapped to shared records."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

from keyboard import KeyboardLayout, KeyboardWarning, parse_keyboard, strip_marker, validate_keyboard

from .records import CommandRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Binding:
    record: CommandRecord
    layout: Optional[KeyboardLayout]
    via_alias: bool = False


@dataclass(frozen=True)
class RegistryConflict:
    key: str
    previous: str
    replacement: str


class CommandRegistry:
    """
    Lookup table built once from a record list.

    Each record's primary name and aliases become keys pointing at the same
    record instance. The keyboard layout is parsed once per record here.
    When two registrations claim one key the later one wins and the clash is
    kept in ``conflicts``.
    """

    def __init__(self) -> None:
        self._bindings: Dict[str, Binding] = {}
        self.records: List[CommandRecord] = []
        self.conflicts: List[RegistryConflict] = []
        self.warnings: List[KeyboardWarning] = []

    @classmethod
    def build(cls, records: Iterable[CommandRecord]) -> "CommandRegistry":
        registry = cls()
        for record in records:
            registry.add(record)
        if registry.conflicts:
            logger.warning(f"Registry built with {len(registry.conflicts)} key conflicts")
        return registry

    def add(self, record: CommandRecord) -> None:
        if record.keyboard:
            self.warnings.extend(validate_keyboard(record.keyboard, record.name))
        layout = parse_keyboard(record.keyboard)

        self.records.append(record)
        self._bind(record.name, Binding(record=record, layout=layout))
        for key in record.alias_keys():
            self._bind(key, Binding(record=record, layout=layout, via_alias=True))

    def _bind(self, key: str, binding: Binding) -> None:
        existing = self._bindings.get(key)
        if existing is not None:
            conflict = RegistryConflict(
                key=key,
                previous=existing.record.name,
                replacement=binding.record.name,
            )
            self.conflicts.append(conflict)
            logger.warning(
                "Command key /%s from %s overrides %s", key, conflict.replacement, conflict.previous
            )
        self._bindings[key] = binding

    def lookup(self, name: str) -> Optional[Binding]:
        return self._bindings.get(strip_marker(name.strip()))

    def get(self, name: str) -> Optional[CommandRecord]:
        binding = self.lookup(name)
        return binding.record if binding else None

    def keys(self) -> List[str]:
        return list(self._bindings)

    def __contains__(self, name: str) -> bool:
        return self.lookup(name) is not None

    def __len__(self) -> int:
        return len(self._bindings)
