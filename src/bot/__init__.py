"""
Telegram front end
Routes commands, button presses and text through the command catalog
"""

from .dispatcher import CallbackResult, CommandDispatcher, Reply, parse_command

__all__ = ['CallbackResult', 'CommandDispatcher', 'Reply', 'parse_command']
