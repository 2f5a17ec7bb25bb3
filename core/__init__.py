"""
Core bot framework package.
"""

from core.exceptions import (
    BotError,
    RedisConnectionError,
    DatabaseError,
    ConfigurationError,
    TelegramAPIError,
    ConnectionExhaustedError,
    IdentityAlreadyBoundError,
    StartupError
)

from core.utils import get_error_details, log_error
from core.context import BotContext, BotIdentity
from core.connection import ConnectionRetrier, Connected
from core.supervisor import EventSupervisor, install_exception_handler
from core.startup import StartupOrchestrator, StartupStage

__all__ = [
    # Exceptions
    'BotError',
    'RedisConnectionError',
    'DatabaseError',
    'ConfigurationError',
    'TelegramAPIError',
    'ConnectionExhaustedError',
    'IdentityAlreadyBoundError',
    'StartupError',
    
    # Utilities
    'get_error_details',
    'log_error',

    # Startup
    'BotContext',
    'BotIdentity',
    'ConnectionRetrier',
    'Connected',
    'EventSupervisor',
    'install_exception_handler',
    'StartupOrchestrator',
    'StartupStage'
]
