"""
Core exception classes for the bot framework.
"""

class BotError(Exception):
    """Base class for bot-specific errors"""
    def __init__(self, message: str = "An error occurred in the bot"):
        self.message = message
        super().__init__(self.message)

class RedisConnectionError(BotError):
    """Raised when Redis connection fails or times out"""
    def __init__(self, message: str = "Failed to connect to Redis"):
        super().__init__(message)

class DatabaseError(BotError):
    """Raised when database operations fail"""
    def __init__(self, message: str = "Database operation failed"):
        super().__init__(message)

class ConfigurationError(BotError):
    """Raised when configuration is missing or invalid"""
    def __init__(self, message: str = "Invalid or missing configuration"):
        super().__init__(message)

class TelegramAPIError(BotError):
    """Raised when Telegram API calls fail"""
    def __init__(self, message: str = "Telegram API error"):
        super().__init__(message)

class ConnectionExhaustedError(TelegramAPIError):
    """Raised when every handshake attempt against the Telegram API failed"""
    def __init__(self, attempts: int, last_error_detail: str = ""):
        self.attempts = attempts
        self.last_error_detail = last_error_detail
        super().__init__(f"Failed to connect to Telegram API after {attempts} attempts")

class IdentityAlreadyBoundError(BotError):
    """Raised when the connected bot identity is written a second time"""
    def __init__(self, message: str = "Bot identity is already bound"):
        super().__init__(message)

class StartupError(BotError):
    """Raised when the startup sequence is misused"""
    def __init__(self, message: str = "Startup sequence failed"):
        super().__init__(message)
