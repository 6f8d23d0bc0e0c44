import os
import sys
import logging
import logging.config
from functools import lru_cache
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Deployment secrets and fixed presentation values, read from the environment."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    app_env: str = "production"
    log_level: str = "INFO"
    cors_origins: List[str] = ["*"]

    # Datastore
    database_url: str = "sqlite+aiosqlite:///./frameboard.db"

    # Pinata
    pinata_jwt: Optional[str] = None
    gateway_url: Optional[str] = None
    pinata_uploads_url: str = "https://uploads.pinata.cloud/v3"
    signed_url_expires: int = 60

    # Sign in with Farcaster
    sign_in_domain: str = "localhost"
    hub_url: str = "https://hub.pinata.cloud"
    public_boards_by_fid: bool = True

    # Embeds
    app_url: str = "http://localhost:5173"
    embed_title: str = "Frameboard"
    embed_description: str = "Share your image boards on Farcaster"
    embed_site_image_url: str = "https://frameboard.app/og.png"
    embed_fallback_image_url: str = "https://frameboard.app/fallback.png"
    embed_button_title: str = "View Board"
    embed_splash_image_url: str = "https://frameboard.app/splash.png"
    embed_splash_background_color: str = "#ffffff"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


def configure_logging(level: str = "INFO"):
    # Load logging config if present
    if os.path.exists("logging.conf"):
        logging.config.fileConfig("logging.conf", disable_existing_loggers=False)
        return

    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        stream=sys.stdout,
        force=True,
    )
