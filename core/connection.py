"""
Telegram API handshake with bounded, fixed-delay retries.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional

from core.context import BotContext, BotIdentity
from core.exceptions import ConnectionExhaustedError
from core.utils import get_error_details

logger = logging.getLogger(__name__)

MAX_RETRIES = 10
RETRY_DELAY = 5.0  # seconds

@dataclass(frozen=True)
class Connected:
    """Successful handshake result"""
    identity: BotIdentity
    attempts: int

class ConnectionRetrier:
    """Performs the startup handshake, retrying every failure after a fixed delay"""

    def __init__(
        self,
        handshake: Callable[[], Awaitable[BotIdentity]],
        max_attempts: int = MAX_RETRIES,
        delay: float = RETRY_DELAY,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        context: Optional[BotContext] = None
    ):
        """Initialize the retrier

        Args:
            handshake: Async callable that asks the API who the bot is
            max_attempts: Total number of handshake attempts, at least 1
            delay: Pause in seconds between two failed attempts
            sleep: Coroutine used to pause between attempts
            context: Context that receives the confirmed identity
        """
        if max_attempts < 1:
            raise ValueError(f"max_attempts must be at least 1, got {max_attempts}")
        if delay < 0:
            raise ValueError(f"delay must not be negative, got {delay}")
        self.handshake = handshake
        self.max_attempts = max_attempts
        self.delay = delay
        self.sleep = sleep
        self.context = context

    async def connect(self) -> Connected:
        """Run the handshake until it succeeds or the attempts run out

        Returns:
            Connected: The confirmed identity and the attempt it succeeded on

        Raises:
            ConnectionExhaustedError: If every attempt failed
        """
        last_error_detail = ""

        for attempt in range(1, self.max_attempts + 1):
            logger.info(f"Connecting to Telegram API (attempt {attempt}/{self.max_attempts})...")
            try:
                identity = await self.handshake()
            except Exception as e:
                last_error_detail = get_error_details(e)
                logger.error(f"Connection attempt {attempt} failed: {last_error_detail}")
                if attempt < self.max_attempts:
                    logger.info(f"Retrying in {self.delay:g} seconds...")
                    await self.sleep(self.delay)
                continue

            if self.context is not None:
                self.context.bind_identity(identity)
            logger.info(f"Connected to Telegram as {identity.mention}")
            return Connected(identity=identity, attempts=attempt)

        logger.error(f"Giving up on the Telegram API after {self.max_attempts} attempts")
        raise ConnectionExhaustedError(self.max_attempts, last_error_detail)
