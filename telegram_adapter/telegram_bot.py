"""
Telegram-specific bot implementation.
"""

import asyncio
import logging
from typing import Optional
from telegram import Update
from telegram.ext import Application, CommandHandler, ContextTypes, TypeHandler

from config.bot_config import BotConfig
from core.context import BotContext, BotIdentity
from core.exceptions import ConfigurationError
from core.supervisor import EventSupervisor, describe_update
from core.utils import get_error_details, log_error

logger = logging.getLogger(__name__)

UPSERT_CHAT = """
    INSERT INTO bot_chats (chat_id, chat_type)
    VALUES (%s, %s)
    ON CONFLICT (chat_id) DO UPDATE
    SET chat_type = EXCLUDED.chat_type
"""

UPSERT_USER = """
    INSERT INTO bot_users (user_id, username)
    VALUES (%s, %s)
    ON CONFLICT (user_id) DO UPDATE
    SET username = EXCLUDED.username, last_seen = now()
"""

class SupervisedApplication(Application):
    """Application that reports the processing time of every update once"""

    supervisor: Optional[EventSupervisor] = None

    async def process_update(self, update: object) -> None:
        if self.supervisor is None:
            await super().process_update(update)
            return
        async with self.supervisor.timing(update):
            await super().process_update(update)

class TelegramBot:
    """Telegram-specific bot implementation"""

    def __init__(self, config: BotConfig, application: Optional[Application] = None):
        self.config = config
        self.application = application or self.create_application()
        self.context: Optional[BotContext] = None

    def create_application(self) -> Application:
        """Configure and return Telegram application

        Building the application does not contact the Telegram API.
        """
        if not self.config.telegram_token:
            raise ConfigurationError("Telegram token is required")

        return (
            Application.builder()
            .token(self.config.telegram_token)
            .application_class(SupervisedApplication)
            .build()
        )

    async def fetch_identity(self) -> BotIdentity:
        """Ask the Telegram API who the bot is"""
        me = await self.application.bot.get_me()
        return BotIdentity(id=me.id, username=me.username, first_name=me.first_name or "")

    def attach_handlers(self, context: BotContext, supervisor: EventSupervisor) -> None:
        """Register the update handlers, each inside the supervisor's failure boundary"""
        self.context = context
        self.application.bot_data["bot_context"] = context
        self.application.supervisor = supervisor

        self.application.add_handler(TypeHandler(Update, supervisor.guard(self.track_user)), group=-1)
        self.application.add_handlers([
            CommandHandler("start", supervisor.guard(self.handle_start)),
            CommandHandler("help", supervisor.guard(self.handle_help)),
        ])
        self.application.add_error_handler(self.handle_error)
        logger.info(f"Handlers attached for {context.identity.mention}")

    async def clear_pending_updates(self) -> int:
        """Drop updates queued while the bot was offline

        Returns:
            Number of updates discarded, 0 when the call failed
        """
        bot = self.application.bot
        try:
            updates = await bot.get_updates(timeout=0)
            if not updates:
                logger.info("No pending updates to clear.")
                return 0
            last_update_id = max(update.update_id for update in updates)
            # Fetching past the last id acknowledges everything before it
            await bot.get_updates(offset=last_update_id + 1, timeout=0)
            logger.info(f"Cleared {len(updates)} pending updates.")
            return len(updates)
        except Exception as e:
            logger.error(f"Failed to clear pending updates: {get_error_details(e)}")
            return 0

    async def launch(self) -> None:
        """Start polling for updates and run until cancelled"""
        app = self.application
        await app.initialize()
        await app.start()
        await app.updater.start_polling()

        logger.info("Telegram bot started")

        # Keep the application running
        try:
            await asyncio.Event().wait()
        finally:
            if app.updater.running:
                await app.updater.stop()
            if app.running:
                await app.stop()
            await app.shutdown()
            logger.info("Telegram bot stopped")

    async def track_user(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        """Remember every user and chat that talks to the bot"""
        storage = self.context.storage if self.context else None
        if storage is None:
            return
        user = update.effective_user
        chat = update.effective_chat
        if user is None and chat is None:
            return
        async with storage.pool.connection() as conn:
            if user is not None:
                await conn.execute(UPSERT_USER, (user.id, user.username))
            if chat is not None:
                await conn.execute(UPSERT_CHAT, (chat.id, chat.type))

    async def handle_start(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        """Handle /start command"""
        await update.message.reply_text(f'Hello! I am {self.context.identity.mention}. How can I help you today?')

    async def handle_help(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        """Handle /help command"""
        help_text = (
            f'I am {self.context.identity.mention}.\n\n'
            '/start - say hello\n'
            '/help - show this message'
        )
        await update.message.reply_text(help_text)

    async def handle_error(self, update: object, context: ContextTypes.DEFAULT_TYPE) -> None:
        """Log errors raised by the framework outside the handler callbacks"""
        log_error(context.error, {"update_type": describe_update(update), "operation": "dispatch"})
