"""
Configuration package.
"""

from config.base_config import BaseConfig, env_flag, logger
from config.bot_config import BotConfig
from config.server_config import ServerConfig

__all__ = [
    'BaseConfig',
    'BotConfig',
    'ServerConfig',
    'env_flag',
    'logger'
]
