"""Client settings and configuration"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional


class Settings(BaseSettings):
    """Client settings loaded from environment variables"""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",  # Ignore extra fields in .env
    )

    # Giphy API
    GIPHY_API_KEY: Optional[str] = None
    GIPHY_API_BASE_URL: str = "https://api.giphy.com/v1"
    GIPHY_REQUEST_TIMEOUT_SECONDS: float = 10.0

    # HTTP
    USER_AGENT: str = "giphy-core/1.0 (+https://developers.giphy.com)"

    # Logging
    LOG_LEVEL: str = "INFO"


settings = Settings()
