"""Telegram Bot API client.

Wraps the Bot API calls the relay needs: sending chat messages and
registering the webhook URL.
"""

import httpx
import structlog

from config import settings
from tracking.errors import ConfigurationError

logger = structlog.get_logger()

_http_client: httpx.AsyncClient | None = None


def _get_client() -> httpx.AsyncClient:
    """Get or create the shared httpx async client."""
    global _http_client
    if not settings.telegram_bot_token:
        raise ConfigurationError("TELEGRAM_BOT_TOKEN is not configured")
    if _http_client is None:
        _http_client = httpx.AsyncClient(
            base_url=f"{settings.telegram_api_url}/bot{settings.telegram_bot_token}",
            headers={"Content-Type": "application/json"},
            timeout=30.0,
        )
    return _http_client


async def close_client() -> None:
    """Close the shared client (application shutdown)."""
    global _http_client
    if _http_client is not None:
        await _http_client.aclose()
        _http_client = None


async def send_message(chat_id: int, text: str) -> dict:
    """Send an HTML-formatted message to a Telegram chat.

    Args:
        chat_id: Telegram chat ID.
        text: Message text with Telegram HTML markup.

    Returns:
        Telegram ``result`` message dict.
    """
    client = _get_client()
    payload = {
        "chat_id": chat_id,
        "text": text,
        "parse_mode": "HTML",
        "disable_web_page_preview": True,
    }
    response = await client.post("/sendMessage", json=payload)
    response.raise_for_status()
    body = response.json()
    logger.info(
        "telegram_message_sent",
        chat_id=chat_id,
        message_id=(body.get("result") or {}).get("message_id"),
    )
    return body.get("result") or {}


async def set_webhook(url: str, secret_token: str = "") -> dict:
    """Point the bot's webhook at ``url``.

    Args:
        url: Public HTTPS URL of the webhook endpoint.
        secret_token: Sent back by Telegram in X-Telegram-Bot-Api-Secret-Token.

    Returns:
        Telegram response dict with ``ok`` and ``description``.
    """
    client = _get_client()
    payload = {
        "url": url,
        "max_connections": 100,
        "allowed_updates": ["message"],
    }
    if secret_token:
        payload["secret_token"] = secret_token
    response = await client.post("/setWebhook", json=payload)
    body = response.json()
    logger.info("telegram_webhook_set", url=url, ok=body.get("ok"))
    return body
