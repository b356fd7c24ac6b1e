"""
Keyboard descriptors
Parses and validates the keyboard column of the command table.
"""

from .parser import (
    ActionButton,
    InlineLayout,
    KeyboardLayout,
    ReplyLayout,
    UrlButton,
    parse_keyboard,
    strip_marker,
)
from .validator import KeyboardWarning, validate_keyboard

__all__ = [
    'ActionButton', 'InlineLayout', 'KeyboardLayout', 'ReplyLayout', 'UrlButton',
    'parse_keyboard', 'strip_marker',
    'KeyboardWarning', 'validate_keyboard',
]
