from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache

from .exceptions import ConfigurationError


class Settings(BaseSettings):
    # App
    APP_NAME: str = "BFHL Compute Service"
    DEBUG: bool = False
    HOST: str = "0.0.0.0"
    PORT: int = 3000
    LOG_LEVEL: str = "INFO"

    # Identity reported on every successful response
    OFFICIAL_EMAIL: str = ""

    # AI answer service
    GEMINI_API_KEY: str = ""
    GEMINI_MODEL: str = "gemini-1.5-flash"
    GEMINI_BASE_URL: str = "https://generativelanguage.googleapis.com/v1beta"
    AI_TIMEOUT_SECONDS: float = 10.0

    # HTTP
    MAX_BODY_BYTES: int = 10 * 1024
    CORS_ALLOW_ORIGINS: str = "*"

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    @property
    def cors_origins(self) -> list[str]:
        return [item.strip() for item in self.CORS_ALLOW_ORIGINS.split(",") if item.strip()]


@lru_cache()
def get_settings() -> Settings:
    return Settings()


def require_official_email(settings: Settings) -> str:
    """Return the configured identity or raise ConfigurationError."""
    email = settings.OFFICIAL_EMAIL.strip()
    if not email:
        raise ConfigurationError(setting="OFFICIAL_EMAIL")
    return email
