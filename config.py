"""Application configuration via environment variables."""

from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """App settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Telegram (message delivery)
    telegram_bot_token: str = ""
    telegram_api_url: str = "https://api.telegram.org"
    telegram_webhook_secret: str = ""

    # 17TRACK (tracking provider)
    track17_api_key: str = ""
    track17_base_url: str = "https://api.17track.net/track/v2.2"

    # Carrier resolution
    register_before_query: bool | None = None  # No default for the real provider
    fallback_carriers: list[int] = [2, 7041, 100842]  # DHL, DHL Paket, DHL Supply Chain
    register_initial_delay: float = 2.0
    register_hint_delay: float = 1.5
    register_backoff_factor: float = 1.0
    register_max_delay: float = 5.0

    # Rendering
    display_timezone: str = "America/Mexico_City"

    # App
    debug: bool = False
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    app_version: str = "0.1.0"

    # Mock APIs (for demo/development)
    use_mock_apis: bool = False


settings = Settings()
