"""
Ordered startup sequence for the bot process.
"""

import enum
import logging
from typing import Any, Awaitable, Callable, Optional

from core.connection import Connected, ConnectionRetrier
from core.context import BotContext
from core.exceptions import StartupError
from core.utils import get_error_details

logger = logging.getLogger(__name__)

class StartupStage(enum.Enum):
    """Stages of the startup sequence, in the order they are reached"""
    IDLE = "idle"
    HEALTH_UP = "health_up"
    STORAGE_READY = "storage_ready"
    REMOTE_CONNECTED = "remote_connected"
    HANDLERS_ATTACHED = "handlers_attached"
    RUNNING = "running"
    FAILED = "failed"

class StartupOrchestrator:
    """Brings the bot online once, one stage after another

    1. health endpoint (first, independent of everything else)
    2. persistent storage
    3. Telegram handshake, with retries
    4. handler registry
    5. update polling

    A failure in stages 2-5 marks the sequence as failed and propagates to
    the caller; the sequence itself is never retried.
    """

    def __init__(
        self,
        health_server,
        initialize_storage: Callable[[], Awaitable[Any]],
        retrier: ConnectionRetrier,
        attach_handlers: Callable[[BotContext], None],
        launch: Callable[[], Awaitable[None]],
        context: BotContext,
        before_launch: Optional[Callable[[], Awaitable[None]]] = None
    ):
        self.health_server = health_server
        self.initialize_storage = initialize_storage
        self.retrier = retrier
        self.attach_handlers = attach_handlers
        self.launch = launch
        self.context = context
        self.before_launch = before_launch
        self.stage = StartupStage.IDLE
        self.started = False
        self.connection: Optional[Connected] = None

    def _advance(self, stage: StartupStage) -> None:
        logger.info(f"Startup stage: {self.stage.value} -> {stage.value}")
        self.stage = stage

    async def run(self) -> None:
        """Execute the startup sequence

        Raises:
            StartupError: If the sequence was already run
            ConnectionExhaustedError: If the Telegram handshake never succeeded
            Exception: Whatever storage initialization or launch raised
        """
        if self.started:
            raise StartupError(f"Startup sequence already run (stage: {self.stage.value})")
        self.started = True

        try:
            await self.health_server.start()
        except Exception as e:
            logger.critical(f"Health check server failed to start: {get_error_details(e)}")
            raise
        self._advance(StartupStage.HEALTH_UP)

        try:
            storage = await self.initialize_storage()
            self.context.bind_storage(storage)
            logger.info("Database initialization complete. Starting bot...")
            self._advance(StartupStage.STORAGE_READY)

            self.connection = await self.retrier.connect()
            self._advance(StartupStage.REMOTE_CONNECTED)

            self.attach_handlers(self.context)
            self._advance(StartupStage.HANDLERS_ATTACHED)

            if self.before_launch is not None:
                await self.before_launch()

            self._advance(StartupStage.RUNNING)
            logger.info("Bot started")
            await self.launch()
        except Exception as e:
            failed_at = self.stage
            self._advance(StartupStage.FAILED)
            logger.critical(f"Startup failed after stage {failed_at.value}: {get_error_details(e)}")
            raise
