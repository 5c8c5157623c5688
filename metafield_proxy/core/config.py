from functools import lru_cache
from typing import List, Optional
import os

from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    PROJECT_NAME: str = "Metafield Translation Proxy"
    DEBUG: bool = False
    PORT: int = 3000

    # CORS settings
    CORS_ALLOWED_ORIGIN: str = "http://localhost:3000"
    CORS_ALLOWED_METHODS: List[str] = ["GET", "HEAD", "PUT", "PATCH", "POST", "DELETE"]

    # Shopify Admin API
    SHOPIFY_SHOP_NAME: str = ""
    SHOPIFY_ADMIN_TOKEN: str = ""
    SHOPIFY_API_VERSION: str = "2025-07"

    # Machine translation
    GOOGLE_TRANSLATE_API_KEY: Optional[str] = None
    GOOGLE_TRANSLATE_URL: str = "https://translation.googleapis.com/language/translate/v2"
    MACHINE_TRANSLATION_ENABLED: bool = True

    # Locales
    SOURCE_LOCALE: str = "en"
    DEFAULT_TARGET_LOCALE: str = "de"

    # Wait before re-checking after an auto-translation was triggered
    AUTO_TRANSLATE_SETTLE_SECONDS: float = 5.0

    # External API timeout in seconds
    DEFAULT_TIMEOUT: float = 30.0

    # Logging settings
    LOG_LEVEL: str = "INFO"
    ENABLE_STRUCTURED_LOGGING: bool = True

    @property
    def shopify_admin_url(self) -> str:
        """Base URL of the versioned Admin API."""
        return f"https://{self.SHOPIFY_SHOP_NAME}/admin/api/{self.SHOPIFY_API_VERSION}"

    @property
    def missing_shopify_settings(self) -> List[str]:
        """Names of required Shopify settings that are unset."""
        return [
            name for name in ("SHOPIFY_SHOP_NAME", "SHOPIFY_ADMIN_TOKEN")
            if not getattr(self, name).strip()
        ]

    @property
    def machine_translation_active(self) -> bool:
        """Machine translation runs only when enabled and a key is configured."""
        return self.MACHINE_TRANSLATION_ENABLED and bool(self.GOOGLE_TRANSLATE_API_KEY)


def load_env_file(env_file: str = ".env") -> None:
    """
    Load environment variables from specified .env file.

    Args:
        env_file: Path to the .env file. Defaults to ".env".
    """
    env_path = os.path.join(os.getcwd(), env_file)
    if os.path.exists(env_path):
        load_dotenv(env_path)


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings, read once per process.

    Returns:
        Settings: Application settings instance
    """
    return Settings()
