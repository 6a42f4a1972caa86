"""FastAPI routes for the tracking relay.

POST /api/webhook/telegram — Telegram webhook: parse command → track → reply.
GET  /api/setup-webhook    — register this service's webhook URL with Telegram.
GET  /api/health           — service health check.
"""

import time

from fastapi import APIRouter, Header, HTTPException, Request
from fastapi.responses import PlainTextResponse
import httpx
from pydantic import BaseModel, ConfigDict, Field
import structlog

from config import settings
from tg.client import send_message, set_webhook
from tg.commands import CommandKind, parse_command
from tracking.errors import ConfigurationError
from tracking.render import (
    GENERIC_ERROR_MESSAGE,
    HELP_MESSAGE,
    INVALID_NUMBER_MESSAGE,
    UNRECOGNIZED_MESSAGE,
    render_searching,
    render_welcome,
)
from tracking.service import TrackingService, build_tracking_service, is_valid_tracking_number

logger = structlog.get_logger()
router = APIRouter()

WEBHOOK_PATH = "/api/webhook/telegram"


# --- Response Models ---


class HealthResponse(BaseModel):
    status: str
    services: dict
    version: str


# --- Tracking service ---

_tracking_service: TrackingService | None = None


def get_tracking_service() -> TrackingService:
    """Get or build the shared tracking service.

    Raises:
        ConfigurationError: credentials or resolver options are missing.
    """
    global _tracking_service
    if _tracking_service is None:
        _tracking_service = build_tracking_service(settings)
    return _tracking_service


async def close_tracking_service() -> None:
    global _tracking_service
    if _tracking_service is not None:
        provider = _tracking_service.resolver.provider
        if hasattr(provider, "aclose"):
            await provider.aclose()
        _tracking_service = None


# --- Endpoints ---


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Service health check."""
    telegram_status = "configured" if settings.telegram_bot_token else "missing_token"
    if settings.use_mock_apis:
        provider_status = "mock"
    else:
        provider_status = "configured" if settings.track17_api_key else "missing_key"

    healthy = telegram_status == "configured" and provider_status != "missing_key"
    return HealthResponse(
        status="healthy" if healthy else "degraded",
        services={
            "telegram": telegram_status,
            "tracking_provider": provider_status,
        },
        version=settings.app_version,
    )


@router.get("/setup-webhook", response_class=PlainTextResponse)
async def setup_webhook(request: Request):
    """Register <origin>/api/webhook/telegram as the bot's webhook."""
    webhook_url = f"{str(request.base_url).rstrip('/')}{WEBHOOK_PATH}"

    try:
        result = await set_webhook(webhook_url, settings.telegram_webhook_secret)
    except ConfigurationError as e:
        return PlainTextResponse(f"❌ Error: {e}", status_code=500)
    except (httpx.HTTPError, ValueError) as e:
        logger.error("telegram_setup_webhook_failed", error=str(e))
        return PlainTextResponse(f"⚠️ Error: {e}", status_code=500)

    if result.get("ok"):
        return PlainTextResponse(
            "✅ Webhook configurado exitosamente!\n\n"
            f"🔗 URL: {webhook_url}\n"
            f"📊 Estado: {result.get('description', '')}\n"
            "🤖 Bot: Activo y listo\n\n"
            "🎯 Prueba enviando /start en Telegram"
        )
    return PlainTextResponse(f"❌ Error: {result.get('description', 'unknown')}", status_code=400)


# --- Telegram Webhook ---


# Idempotency: track recently processed update IDs (TTL 5 min)
_processed_updates: dict[int, float] = {}
_DEDUP_TTL_SECONDS = 300


def _is_duplicate(update_id: int) -> bool:
    """Check if update was already processed. Prunes stale entries."""
    now = time.time()
    stale = [k for k, v in _processed_updates.items() if now - v > _DEDUP_TTL_SECONDS]
    for k in stale:
        del _processed_updates[k]
    if update_id in _processed_updates:
        return True
    _processed_updates[update_id] = now
    return False


class TelegramUser(BaseModel):
    id: int | None = None
    first_name: str | None = None
    username: str | None = None


class TelegramChat(BaseModel):
    id: int
    type: str | None = None


class TelegramMessage(BaseModel):
    message_id: int | None = None
    chat: TelegramChat
    text: str | None = None
    from_: TelegramUser | None = Field(default=None, alias="from")

    model_config = ConfigDict(populate_by_name=True)


class TelegramUpdate(BaseModel):
    update_id: int
    message: TelegramMessage | None = None


@router.post("/webhook/telegram")
async def telegram_webhook(
    update: TelegramUpdate,
    x_telegram_bot_api_secret_token: str | None = Header(default=None),
):
    """Handle incoming Telegram updates.

    Only text messages are processed. Every reply is sent back through the
    Bot API; delivery failures are logged and reported in the response body.
    """
    if (
        settings.telegram_webhook_secret
        and x_telegram_bot_api_secret_token != settings.telegram_webhook_secret
    ):
        raise HTTPException(status_code=403, detail="invalid secret token")

    message = update.message
    if message is None or not message.text or not message.text.strip():
        return {"status": "ignored", "reason": "not a text message"}

    if _is_duplicate(update.update_id):
        logger.info("telegram_duplicate_update", update_id=update.update_id)
        return {"status": "duplicate", "update_id": update.update_id}

    chat_id = message.chat.id
    first_name = (message.from_.first_name if message.from_ else None) or "Usuario"
    command = parse_command(message.text)

    logger.info(
        "telegram_message_received",
        chat_id=chat_id,
        update_id=update.update_id,
        command=command.kind.value,
    )

    try:
        delivered = await _dispatch_command(chat_id, command.kind, command.argument, first_name)
    except Exception as e:
        logger.error("telegram_command_failed", chat_id=chat_id, error=str(e))
        await _reply(chat_id, GENERIC_ERROR_MESSAGE)
        return {"status": "error", "reason": str(e)}

    return {
        "status": "processed",
        "command": command.kind.value,
        "delivered": delivered,
    }


async def _dispatch_command(
    chat_id: int,
    kind: CommandKind,
    argument: str | None,
    first_name: str,
) -> bool:
    if kind == CommandKind.START:
        return await _reply(chat_id, render_welcome(first_name))
    if kind == CommandKind.HELP:
        return await _reply(chat_id, HELP_MESSAGE)
    if kind == CommandKind.TRACK:
        return await _handle_track(chat_id, argument or "")
    return await _reply(chat_id, UNRECOGNIZED_MESSAGE)


async def _handle_track(chat_id: int, tracking_number: str) -> bool:
    """Run one lookup and send the report. Returns delivery pass/fail."""
    if not is_valid_tracking_number(tracking_number):
        return await _reply(chat_id, INVALID_NUMBER_MESSAGE)

    try:
        service = get_tracking_service()
    except ConfigurationError as e:
        logger.error("tracking_configuration_error", chat_id=chat_id, error=str(e))
        await _reply(chat_id, GENERIC_ERROR_MESSAGE)
        return False

    await _reply(chat_id, render_searching(tracking_number))
    report = await service.report(tracking_number)
    return await _reply(chat_id, report)


async def _reply(chat_id: int, text: str) -> bool:
    """Send a message; report delivery as pass/fail without retrying."""
    try:
        await send_message(chat_id, text)
        return True
    except (httpx.HTTPError, ConfigurationError) as e:
        logger.error("telegram_delivery_failed", chat_id=chat_id, error=str(e))
        return False
