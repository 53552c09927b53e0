"""
Run the bot with long polling: python -m innbot

Reads tokens from tokens.json (or the environment). Missing tokens or an
unreadable tokens.json stop the process before anything connects to Telegram.
"""

import asyncio
import signal
import sys

from pydantic import ValidationError

from innbot.config import get_settings
from innbot.telegram_bot.bot import run_polling
from innbot.telegram_bot.logging_config import bot_logger as logger


async def main() -> None:
    stop_event = asyncio.Event()

    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, stop_event.set)
        except NotImplementedError:
            # Windows event loops have no signal handlers
            pass

    await run_polling(get_settings(), stop_event)


def run() -> None:
    """Check configuration, then poll until SIGINT/SIGTERM. Exits 1 on bad config."""
    try:
        get_settings()
    except (ValidationError, ValueError) as e:
        # ValueError covers malformed JSON in tokens.json
        logger.critical(f"Invalid configuration, check tokens.json: {e}")
        sys.exit(1)

    asyncio.run(main())


if __name__ == "__main__":
    run()
