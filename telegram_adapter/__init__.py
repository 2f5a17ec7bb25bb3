"""
Telegram-specific implementation package.
"""

from telegram_adapter.telegram_bot import TelegramBot

__all__ = [
    'TelegramBot'
]
