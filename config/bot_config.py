"""
Bot-specific configuration settings.
"""

import os
from dataclasses import dataclass
from config.base_config import BaseConfig, env_flag

@dataclass
class BotConfig(BaseConfig):
    """Bot-specific configuration settings loaded from environment variables"""
    telegram_token: str = os.getenv("TELEGRAM_TOKEN")
    connect_max_retries: int = int(os.getenv("CONNECT_MAX_RETRIES", "10"))
    connect_retry_delay: float = float(os.getenv("CONNECT_RETRY_DELAY", "5.0"))
    handler_timeout: float = float(os.getenv("HANDLER_TIMEOUT", "540"))
    clear_pending_updates: bool = env_flag("CLEAR_PENDING_UPDATES")
