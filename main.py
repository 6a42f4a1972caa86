"""Parcel Relay — Entry Point.

FastAPI application bridging Telegram chats with the 17TRACK tracking API.
"""

import logging
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.responses import PlainTextResponse

from config import settings

# --- Logging ---

structlog.configure(
    processors=[
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.add_log_level,
        structlog.processors.JSONRenderer(),
    ],
    wrapper_class=structlog.make_filtering_bound_logger(
        logging.getLevelName(settings.log_level.upper())
    ),
)
logger = structlog.get_logger()


# --- FastAPI App ---


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    logger.info(
        "starting_parcel_relay",
        version=settings.app_version,
        mock_apis=settings.use_mock_apis,
    )
    yield
    from api.routes import close_tracking_service
    from tg.client import close_client

    await close_tracking_service()
    await close_client()
    logger.info("stopped_parcel_relay")


app = FastAPI(
    title="Parcel Relay",
    version=settings.app_version,
    lifespan=lifespan,
)

# Include API routes
from api.routes import router as api_router  # noqa: E402

app.include_router(api_router, prefix="/api")


@app.get("/", response_class=PlainTextResponse)
async def index():
    """Liveness banner."""
    return (
        "🚚 Telegram Tracking Bot está activo!\n\n"
        "Para configurar el webhook, visita: /api/setup-webhook"
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=settings.debug)
