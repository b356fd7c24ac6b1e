"""Keyboard layouts rendered as python-telegram-bot reply markup."""

from __future__ import annotations

from typing import Optional, Union

from telegram import InlineKeyboardButton, InlineKeyboardMarkup, KeyboardButton, ReplyKeyboardMarkup

from keyboard import InlineLayout, KeyboardLayout, ReplyLayout, UrlButton

Markup = Union[InlineKeyboardMarkup, ReplyKeyboardMarkup]


def to_reply_markup(layout: Optional[KeyboardLayout]) -> Optional[Markup]:
    if layout is None:
        return None

    if isinstance(layout, InlineLayout):
        # All inline buttons share one row
        row = []
        for button in layout.buttons:
            if isinstance(button, UrlButton):
                row.append(InlineKeyboardButton(text=button.label, url=button.url))
            else:
                row.append(InlineKeyboardButton(text=button.label, callback_data=button.callback_data))
        return InlineKeyboardMarkup([row])

    if isinstance(layout, ReplyLayout):
        return ReplyKeyboardMarkup(
            [[KeyboardButton(label) for label in row] for row in layout.rows],
            resize_keyboard=True,
            one_time_keyboard=True,
        )

    raise TypeError(f"Unsupported keyboard layout: {type(layout).__name__}")
