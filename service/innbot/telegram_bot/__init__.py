"""
Telegram Bot module for the INN lookup bot.

ARCHITECTURE: Thin transport layer over the dispatcher.
- Receives updates from Telegram (long polling or webhook)
- Passes chat_id + text to the Dispatcher
- Sends the dispatcher's replies back to the chat

Command semantics (/start, /help, /hello, /inn, /last) live in
dispatcher.py and commands.py; company lookups in innbot.services.
"""

from .bot import build_application, handle_telegram_update, run_polling
from .commands import Command, parse_command, resolve_action
from .context import SessionStore
from .dispatcher import Dispatcher

__all__ = [
    "build_application",
    "handle_telegram_update",
    "run_polling",
    "Command",
    "parse_command",
    "resolve_action",
    "SessionStore",
    "Dispatcher",
]
