"""
Telegram Bot Handlers.

Adding New Handlers:
1. Create a new file in this directory with a `create_router()` factory
2. Add it to get_all_routers()
"""

from aiogram import Router

from habit_tracker.telegram.handlers.linking import create_router as create_linking_router

__all__ = [
    "get_all_routers",
]


def get_all_routers() -> list[Router]:
    """Fresh routers to include in a new dispatcher."""
    return [
        create_linking_router(),
    ]
