"""
Telegram update handlers.

Thin adapter between python-telegram-bot and the Dispatcher:
- pulls chat_id + text out of the update
- asks the dispatcher for reply texts
- sends each reply, split on line boundaries if it exceeds Telegram's
  message length limit; send failures are logged and not retried
"""

from telegram import Update
from telegram.constants import MessageLimit
from telegram.error import TelegramError
from telegram.ext import ContextTypes

from .logging_config import bot_logger as logger

DISPATCHER_KEY = "dispatcher"


def split_text(text: str, limit: int = MessageLimit.MAX_TEXT_LENGTH) -> list[str]:
    """
    Split text into chunks of at most limit characters.

    Breaks between lines where possible; a single line longer than limit
    is cut into limit-sized pieces.
    """
    if len(text) <= limit:
        return [text]

    chunks = []
    current = ""
    for line in text.split("\n"):
        while len(line) > limit:
            if current:
                chunks.append(current)
                current = ""
            chunks.append(line[:limit])
            line = line[limit:]

        if not current:
            current = line
        elif len(current) + 1 + len(line) <= limit:
            current = f"{current}\n{line}"
        else:
            chunks.append(current)
            current = line

    if current:
        chunks.append(current)
    return chunks


async def send_text(context: ContextTypes.DEFAULT_TYPE, chat_id: int, text: str) -> bool:
    """
    Send a text message to a chat.

    Returns:
        True if Telegram accepted the message, False otherwise
    """
    try:
        await context.bot.send_message(chat_id=chat_id, text=text)
        return True
    except TelegramError as e:
        logger.error(f"Failed to send message to chat_id={chat_id}: {e}")
        return False


async def handle_text_message(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle any text message, commands included."""
    message = update.effective_message
    if message is None or message.text is None:
        return

    chat_id = message.chat_id
    dispatcher = context.bot_data[DISPATCHER_KEY]

    replies = await dispatcher.handle_message(chat_id, message.text)
    for reply in replies:
        for chunk in split_text(reply):
            await send_text(context, chat_id, chunk)


async def handle_error(update: object, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Log errors raised while polling or handling updates."""
    logger.error(f"Update {update} caused error: {context.error}", exc_info=context.error)
