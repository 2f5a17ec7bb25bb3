"""
Main entry point for the Telegram bot application.
"""

import asyncio
import logging

from config.bot_config import BotConfig
from config.server_config import ServerConfig
from core.connection import ConnectionRetrier
from core.context import BotContext
from core.exceptions import ConfigurationError
from core.startup import StartupOrchestrator
from core.supervisor import EventSupervisor, install_exception_handler
from db.storage import initialize_storage
from http_adapter.health_server import HealthServer
from telegram_adapter.telegram_bot import TelegramBot

logger = logging.getLogger(__name__)

def build_orchestrator(bot_config: BotConfig, server_config: ServerConfig) -> StartupOrchestrator:
    """Wire the startup stages together"""
    context = BotContext()
    telegram_bot = TelegramBot(bot_config)
    supervisor = EventSupervisor(handler_timeout=bot_config.handler_timeout)

    retrier = ConnectionRetrier(
        telegram_bot.fetch_identity,
        max_attempts=bot_config.connect_max_retries,
        delay=bot_config.connect_retry_delay,
        context=context
    )

    return StartupOrchestrator(
        health_server=HealthServer(server_config.health_host, server_config.health_port),
        initialize_storage=lambda: initialize_storage(bot_config),
        retrier=retrier,
        attach_handlers=lambda ctx: telegram_bot.attach_handlers(ctx, supervisor),
        launch=telegram_bot.launch,
        context=context,
        # Only when explicitly enabled: drops whatever was queued while offline
        before_launch=telegram_bot.clear_pending_updates if bot_config.clear_pending_updates else None
    )

async def main():
    """Main entry point for the application"""
    try:
        # Load configuration
        bot_config = BotConfig()
        server_config = ServerConfig()

        # Validate required configuration
        if not bot_config.telegram_token:
            raise ConfigurationError("Missing Telegram token")
        if not bot_config.pg_connection:
            raise ConfigurationError("Missing PostgreSQL connection string")

        install_exception_handler()

        orchestrator = build_orchestrator(bot_config, server_config)
        await orchestrator.run()
    except ConfigurationError as e:
        logger.critical(f"Configuration error: {str(e)}")
        raise

if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Application stopped by user")
