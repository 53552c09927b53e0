"""
Package logger for innbot.

Handlers live on the "innbot" logger only. Modules log through either
bot_logger or logging.getLogger(__name__); names under innbot.* (e.g.
innbot.services.lookup) reach the same stdout handler.
"""

import logging
import sys

def setup_logging():
    """Attach a stdout handler to the innbot logger and return it."""

    logger = logging.getLogger("innbot")
    logger.setLevel(logging.DEBUG)

    # Re-running setup must not stack handlers
    logger.handlers.clear()

    # DEBUG records (registry responses) are dropped here
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(logging.INFO)
    handler.setFormatter(logging.Formatter(
        '[%(asctime)s] [%(name)s] [%(levelname)s] %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    ))
    logger.addHandler(handler)

    # Keep bot output out of uvicorn's root handlers
    logger.propagate = False

    return logger

bot_logger = setup_logging()
