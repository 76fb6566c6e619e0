"""
Webhook Endpoint for Telegram Bot.

Provides the FastAPI router for Telegram webhook requests. The router is
mounted once; each request is fed to whichever bot the channel is running
at that moment.
"""

import hmac

from fastapi import APIRouter, Request, Response

from habit_tracker.backend.core.logging import get_logger
from habit_tracker.telegram.channel import TelegramChannel

logger = get_logger(__name__)


def get_webhook_router(channel: TelegramChannel) -> APIRouter:
    """
    Create a FastAPI router for handling Telegram webhook requests.

    Usage:
        app.include_router(get_webhook_router(channel))
    """
    from aiogram.types import Update

    router = APIRouter(tags=["telegram"])
    webhook_path = channel.config.webhook_path

    @router.post(webhook_path, include_in_schema=False)
    async def telegram_webhook(request: Request) -> Response:
        """Validate the secret token header and feed the update to the bot."""
        webhook_secret = channel.webhook_secret
        if webhook_secret:
            secret_header = request.headers.get("X-Telegram-Bot-Api-Secret-Token")
            if not secret_header or not hmac.compare_digest(secret_header, webhook_secret):
                logger.warning(
                    "Invalid webhook secret token",
                    extra={"client_ip": request.client.host if request.client else None},
                )
                return Response(status_code=403)

        bot, dp = channel.bot, channel.dispatcher
        if bot is None or dp is None:
            logger.warning("Webhook update received while no bot is running")
            return Response(status_code=404)

        try:
            update = Update.model_validate(await request.json(), context={"bot": bot})
            await dp.feed_update(bot, update)
        except Exception as e:
            # Telegram retries non-200 responses; a broken update would loop forever.
            logger.error(
                "Error processing Telegram update",
                extra={"error": str(e)},
                exc_info=True,
            )
        return Response(status_code=200)

    @router.get(webhook_path + "/health")
    async def telegram_webhook_health() -> dict:
        """Health check for the Telegram webhook endpoint."""
        return {"status": "healthy" if channel.running else "idle", "webhook_path": webhook_path}

    return router
