"""
Telegram Bot Services.

Delivery of backend notifications through the running bot.
"""

from habit_tracker.telegram.services.notifications import SendResult, TelegramTransport

__all__ = [
    "SendResult",
    "TelegramTransport",
]
