#!/usr/bin/env python3
"""
Table-driven Telegram Bot

Every command comes from the spreadsheet command table:
  /<command>  → answer text + keyboard from the row
  /<alias>    → answer text only
  use:<name>  → inline button press, answered as a new message
  anything    → echoed back

Commands:
  /demo        - Show reply and inline keyboard examples
  /reload_demo - Clear the table cache and reload commands

Usage:
  BOT_TOKEN=your_token python -m bot.telegram_bot
"""

import logging
import os
import sys
from typing import List

from telegram import Update
from telegram.ext import (
    Application,
    CallbackQueryHandler,
    CommandHandler,
    ContextTypes,
    MessageHandler,
    filters,
)

from catalog import CommandCatalog, CommandTableLoader, default_config, load_config

from .dispatcher import CommandDispatcher, Reply, parse_command
from .markup import to_reply_markup

logger = logging.getLogger(__name__)


def _dispatcher(context: ContextTypes.DEFAULT_TYPE) -> CommandDispatcher:
    return context.application.bot_data["dispatcher"]


# Telegram has a 4096 char limit per message
MAX_MESSAGE_CHARS = 4000


def split_text(text: str, size: int = MAX_MESSAGE_CHARS) -> List[str]:
    if len(text) <= size:
        return [text]
    return [text[i:i + size] for i in range(0, len(text), size)]


async def send_reply(message, reply: Reply) -> None:
    """Send a reply, chunked if long; the keyboard goes with the last chunk."""
    chunks = split_text(reply.text)
    for chunk in chunks[:-1]:
        await message.reply_text(chunk)
    await message.reply_text(chunks[-1], reply_markup=to_reply_markup(reply.keyboard))


async def demo_command(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Handle /demo command: keyboard examples for the first command."""
    for reply in _dispatcher(context).demo():
        await send_reply(update.message, reply)


async def reload_command(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Handle /reload_demo command: drop cache, rebuild registry."""
    reply = _dispatcher(context).reload()
    await send_reply(update.message, reply)


async def handle_command(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Handle any table command; unknown commands fall through to the echo."""
    if not update.message or not update.message.text:
        return
    text = update.message.text
    dispatcher = _dispatcher(context)

    name = parse_command(text)
    reply = dispatcher.dispatch_command(name) if name else None
    if reply is None:
        reply = dispatcher.echo(text)
    await send_reply(update.message, reply)


async def handle_callback(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Handle inline button presses carrying use:<command>."""
    query = update.callback_query
    result = _dispatcher(context).dispatch_callback(query.data)
    await query.answer(text=result.notice)
    if result.reply is None or update.effective_chat is None:
        return
    chat_id = update.effective_chat.id
    chunks = split_text(result.reply.text)
    for chunk in chunks[:-1]:
        await context.bot.send_message(chat_id=chat_id, text=chunk)
    await context.bot.send_message(
        chat_id=chat_id,
        text=chunks[-1],
        reply_markup=to_reply_markup(result.reply.keyboard),
    )


async def handle_message(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Echo plain text back."""
    if not update.message or not update.message.text:
        return
    await send_reply(update.message, _dispatcher(context).echo(update.message.text))


async def error_handler(update: object, context: ContextTypes.DEFAULT_TYPE) -> None:
    logger.error("Unhandled exception while processing update", exc_info=context.error)


def build_catalog() -> CommandCatalog:
    try:
        config = load_config()
    except FileNotFoundError as e:
        logger.warning("%s; using built-in defaults", e)
        config = default_config()
    return CommandCatalog(CommandTableLoader(config))


def build_application(token: str, dispatcher: CommandDispatcher) -> Application:
    app = Application.builder().token(token).build()
    app.bot_data["dispatcher"] = dispatcher

    # Built-in commands first: the first matching handler in a group wins
    app.add_handler(CommandHandler("demo", demo_command))
    app.add_handler(CommandHandler("reload_demo", reload_command))

    # Table commands and aliases
    app.add_handler(MessageHandler(filters.COMMAND, handle_command))
    app.add_handler(CallbackQueryHandler(handle_callback, pattern=r"^use:"))

    # All other text messages
    app.add_handler(MessageHandler(filters.TEXT & ~filters.COMMAND, handle_message))
    app.add_error_handler(error_handler)
    return app


def main():
    """Start the bot."""
    logging.basicConfig(
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        level=logging.INFO,
    )

    token = os.environ.get("BOT_TOKEN") or os.environ.get("TELEGRAM_BOT_TOKEN")
    if not token:
        logger.error("BOT_TOKEN not set")
        sys.exit(1)

    catalog = build_catalog()
    registry = catalog.refresh()
    logger.info("Command keys: %s", ", ".join(sorted(registry.keys())) or "(none)")

    app = build_application(token, CommandDispatcher(catalog))

    logger.info("Bot is running. Polling for messages...")
    app.run_polling(allowed_updates=Update.ALL_TYPES)


if __name__ == "__main__":
    main()
