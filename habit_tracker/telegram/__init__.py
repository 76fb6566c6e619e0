"""
Telegram Bot Module.

aiogram v3 integration used for two things: linking a chat to a
HabitTracker account (/start, /connect <username>) and delivering
notifications produced by the backend.

Architecture:
- Bot runs on the same event loop as FastAPI (shared Uvicorn process)
- Long polling by default, webhook mode when configured
- The bot token can be replaced at runtime by an administrator;
  TelegramChannel restarts the bot and swaps the dispatcher's transport

Structure:
    habit_tracker/telegram/
    ├── __init__.py          # This file
    ├── bot.py               # Bot and dispatcher setup
    ├── channel.py           # Start/stop/restart of the running bot
    ├── webhook.py           # Webhook endpoint for FastAPI
    ├── handlers/
    │   └── linking.py       # /start, /connect
    ├── middlewares/
    │   ├── logging.py       # Update logging
    │   └── storage.py       # Storage injection per update
    └── services/
        └── notifications.py # MessageTransport implementation

Environment Variables:
    TELEGRAM_BOT_TOKEN: Bot token from BotFather (fallback when none is saved
        in the admin settings)
    TELEGRAM_WEBHOOK_SECRET: Secret for webhook validation
"""

from habit_tracker.telegram.bot import create_bot, create_dispatcher
from habit_tracker.telegram.channel import TelegramChannel

__all__ = [
    "TelegramChannel",
    "create_bot",
    "create_dispatcher",
]
