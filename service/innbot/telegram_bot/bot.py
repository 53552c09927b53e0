"""
Main Telegram bot handler.

Uses python-telegram-bot in one of two modes:
- long polling (run_polling, used by `python -m innbot`)
- webhook (handle_telegram_update, called by the FastAPI endpoint)
"""

import asyncio
from telegram import Update
from telegram.ext import Application, MessageHandler, filters

from innbot.config import Settings, get_settings
from innbot.services.lookup import LookupEngine
from innbot.services.registry import RegistryClient
from .context import SessionStore
from .dispatcher import Dispatcher
from .handlers import DISPATCHER_KEY, handle_error, handle_text_message
from .logging_config import bot_logger as logger

REGISTRY_KEY = "registry"


# Global application instance for webhook mode (initialized once)
_application: Application | None = None


def build_application(settings: Settings) -> Application:
    """Create the bot application with its dispatcher and handlers."""
    application = (
        Application.builder()
        .token(settings.telegram_bot_token)
        .build()
    )

    registry = RegistryClient(
        api_token=settings.dadata_api_token,
        url=settings.dadata_party_url,
        timeout=settings.registry_timeout_seconds,
    )
    engine = LookupEngine(
        registry,
        timeout=settings.registry_timeout_seconds,
        max_concurrency=settings.lookup_concurrency,
    )
    application.bot_data[REGISTRY_KEY] = registry
    application.bot_data[DISPATCHER_KEY] = Dispatcher(
        engine=engine,
        sessions=SessionStore(),
        developer_info=settings.developer_info,
    )

    # New text messages only, commands included; edits and channel posts are ignored
    application.add_handler(
        MessageHandler(filters.UpdateType.MESSAGE & filters.TEXT, handle_text_message)
    )

    # Error handler
    application.add_error_handler(handle_error)

    logger.info("Telegram bot application initialized")
    return application


async def close_registry(application: Application) -> None:
    registry = application.bot_data.get(REGISTRY_KEY)
    if registry is not None:
        await registry.aclose()


async def run_polling(settings: Settings, stop_event: asyncio.Event) -> None:
    """
    Receive updates by long polling until stop_event is set.

    On stop the updater goes first (no new updates are fetched), then the
    application, which lets handlers already running finish their lookups.
    """
    application = build_application(settings)

    async with application:
        me = await application.bot.get_me()
        logger.info(f"Bot @{me.username} has launched.")

        await application.start()
        await application.updater.start_polling(allowed_updates=Update.ALL_TYPES)
        try:
            await stop_event.wait()
        finally:
            logger.info("Stopping bot...")
            await application.updater.stop()
            await application.stop()
            await close_registry(application)

    logger.info("Bot stopped")


def get_bot_application() -> Application:
    """Get or create telegram bot application (webhook mode)."""
    global _application

    if _application is None:
        _application = build_application(get_settings())

    return _application


async def handle_telegram_update(update_data: dict) -> None:
    """
    Process incoming webhook update from Telegram.

    This is called by FastAPI webhook endpoint.
    """
    try:
        app = get_bot_application()

        # Convert dict to Update object
        update = Update.de_json(update_data, app.bot)

        if update:
            await app.process_update(update)
        else:
            logger.warning("Received invalid update data")

    except Exception as e:
        logger.error(f"Failed to process update: {e}", exc_info=True)


async def initialize_bot() -> None:
    """
    Initialize bot application (call on startup).
    """
    app = get_bot_application()
    await app.initialize()
    me = await app.bot.get_me()
    logger.info(f"Bot @{me.username} has launched.")


async def shutdown_bot() -> None:
    """
    Shutdown bot application (call on shutdown).
    """
    global _application
    if _application:
        await _application.shutdown()
        await close_registry(_application)
        _application = None
        logger.info("Bot shut down")
