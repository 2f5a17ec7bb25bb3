"""
Startup results shared with the handlers once the bot is connected.
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional

from core.exceptions import BotError, IdentityAlreadyBoundError

logger = logging.getLogger(__name__)

@dataclass(frozen=True)
class BotIdentity:
    """The bot's own account as confirmed by the Telegram API"""
    id: int
    username: str
    first_name: str = ""

    @property
    def mention(self) -> str:
        return f"@{self.username}"

class BotContext:
    """Read-only context handed to handlers when they are attached

    The identity is written exactly once, by the connection retrier, after a
    confirmed handshake. Storage is set by the startup sequence before the
    handshake begins.
    """

    def __init__(self):
        self._identity: Optional[BotIdentity] = None
        self._storage: Any = None

    @property
    def is_connected(self) -> bool:
        return self._identity is not None

    @property
    def identity(self) -> BotIdentity:
        if self._identity is None:
            raise BotError("Bot identity is not available before the Telegram handshake")
        return self._identity

    @property
    def storage(self) -> Any:
        return self._storage

    def bind_identity(self, identity: BotIdentity) -> None:
        """Record the confirmed identity

        Raises:
            IdentityAlreadyBoundError: If an identity was already recorded
        """
        if self._identity is not None:
            raise IdentityAlreadyBoundError(
                f"Bot identity already bound to {self._identity.mention}"
            )
        self._identity = identity
        logger.debug(f"Bound bot identity {identity.mention}")

    def bind_storage(self, storage: Any) -> None:
        self._storage = storage
