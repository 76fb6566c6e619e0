"""
Habit Tracker.

- backend/: API, storage, notification dispatcher, configuration
- telegram/: Telegram bot (account linking and message delivery, aiogram v3)
"""
