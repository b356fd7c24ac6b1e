"""Owned command registry with build-then-swap reloads."""

from __future__ import annotations

import logging

from .loader import CommandTableLoader
from .registry import CommandRegistry

logger = logging.getLogger(__name__)


class CommandCatalog:
    """Holds the live registry; handlers read ``registry`` once per event."""

    def __init__(self, loader: CommandTableLoader) -> None:
        self.loader = loader
        self._registry = CommandRegistry()

    @property
    def registry(self) -> CommandRegistry:
        return self._registry

    def refresh(self) -> CommandRegistry:
        """Load (cache permitting) and install a freshly built registry."""
        records = self.loader.load()
        registry = CommandRegistry.build(records)
        self._registry = registry
        logger.info(f"Registered {len(registry.records)} commands under {len(registry)} keys")
        return registry

    def reload(self) -> CommandRegistry:
        """Drop the cache snapshot and rebuild. On error the old registry stays."""
        self.loader.cache.invalidate()
        return self.refresh()
