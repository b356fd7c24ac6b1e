"""
Command dispatch, independent of the Telegram transport.

Inbound events are a command name, an inline-button callback payload or a
plain text message. Each produces a Reply (text plus optional keyboard) that
the transport sends as a new message.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

from catalog import CommandCatalog
from keyboard import ActionButton, InlineLayout, KeyboardLayout, parse_keyboard, strip_marker
from keyboard.parser import CALLBACK_PREFIX, callback_data_for

logger = logging.getLogger(__name__)

ECHO_PREFIX = "You said: "
NO_COMMAND_NOTICE = "No command"
UNKNOWN_COMMAND_NOTICE = "Unknown command"
NO_DEMO_COMMANDS = "No demo commands available."
RELOAD_OK = "Demo commands reloaded (cache cleared)."
RELOAD_FAILED = "Failed to reload demo commands."


@dataclass(frozen=True)
class Reply:
    text: str
    keyboard: Optional[KeyboardLayout] = None


@dataclass(frozen=True)
class CallbackResult:
    notice: str
    reply: Optional[Reply] = None


def parse_command(message_text: Optional[str]) -> Optional[str]:
    """
    Extract the command name from message text.

    Examples:
        >>> parse_command("/help")
        'help'
        >>> parse_command("/help@DemoBot extra")
        'help'
        >>> parse_command("hello")
    """
    if not message_text or not message_text.startswith("/"):
        return None
    head = message_text.split()[0]
    name = strip_marker(head).split("@", 1)[0]
    return name or None


class CommandDispatcher:
    def __init__(self, catalog: CommandCatalog) -> None:
        self.catalog = catalog

    def dispatch_command(self, name: str) -> Optional[Reply]:
        """Reply for a direct or alias invocation; None if nothing is bound."""
        binding = self.catalog.registry.lookup(name)
        if binding is None:
            return None
        if binding.via_alias:
            return Reply(binding.record.reply_text)
        return Reply(binding.record.reply_text, binding.layout)

    def dispatch_callback(self, data: Optional[str]) -> CallbackResult:
        """Route an inline button payload of the form ``use:<command>``."""
        if not data or not data.startswith(CALLBACK_PREFIX):
            return CallbackResult(NO_COMMAND_NOTICE)
        name = data[len(CALLBACK_PREFIX):]
        if not name:
            return CallbackResult(NO_COMMAND_NOTICE)

        record = self.catalog.registry.get(strip_marker(name))
        if record is None:
            logger.info(f"Callback for unknown command {name!r}")
            return CallbackResult(UNKNOWN_COMMAND_NOTICE)
        return CallbackResult(f"Running {name}", Reply(record.reply_text))

    def echo(self, text: str) -> Reply:
        return Reply(ECHO_PREFIX + text)

    def demo(self) -> List[Reply]:
        """Show both keyboard styles using the first loaded command."""
        records = self.catalog.registry.records
        if not records:
            return [Reply(NO_DEMO_COMMANDS)]
        first = records[0]
        inline = InlineLayout(
            buttons=(ActionButton(label="Use command", callback_data=callback_data_for(first.name)),)
        )
        return [
            Reply(f"Reply keyboard example for /{first.name}", parse_keyboard(f"{first.name}|help")),
            Reply("Inline keyboard example:", inline),
        ]

    def reload(self) -> Reply:
        try:
            self.catalog.reload()
        except Exception:
            logger.exception("Reload of demo commands failed")
            return Reply(RELOAD_FAILED)
        return Reply(RELOAD_OK)
