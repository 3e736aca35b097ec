import logging
from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from pydantic import AnyHttpUrl, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger("hedge_tracker.config")

ALLOWED_RATE_PROVIDERS = {"static", "external-http"}
_DEV_JWT_SECRET = "dev-insecure-jwt-secret-change-me"


class Settings(BaseSettings):
    """Application settings loaded from environment with defaults.

    Environment variable mapping follows pydantic's rules (e.g., JWT_SECRET,
    EXCHANGE_RATE_API_KEY, DATA_DIR, FALLBACK_USD_INR_RATE).
    """

    model_config = SettingsConfigDict(
        env_file=".env", case_sensitive=False, extra="ignore"
    )

    # Basic app metadata
    app_name: str = "Hedge Investment Tracker"
    debug: bool = False
    version: str = "1.0.0"
    environment: str = "development"

    # Data & persistence
    data_dir: Path = Path("data")
    db_filename: str = "hedge.sqlite3"
    db_path: Optional[Path] = None  # derived if not provided

    # Auth
    jwt_secret: str = ""
    jwt_algorithm: str = "HS256"
    jwt_expires_minutes: int = Field(60, gt=0)
    enable_registration: bool = False

    # Exchange rates
    # Allowed: 'static' (always the fallback rate), 'external-http' (open.er-api.com)
    exchange_rate_provider: str = "static"
    exchange_rate_api_url: AnyHttpUrl = "https://open.er-api.com/v6/latest/USD"
    exchange_rate_api_key: str = ""
    http_timeout_seconds: float = 5.0
    fallback_usd_inr_rate: float = Field(83.0, gt=0)
    rates_cache_ttl_seconds: int = 3600
    enable_rate_override: bool = True

    # CORS
    cors_origins: List[str] = [
        "http://localhost:3000",
        "https://investment-tracker-frontend-neon.vercel.app",
    ]

    def init_post_load(self) -> None:
        """Finalize derived fields and ensure directories exist."""
        if self.db_path is None:
            self.db_path = self.data_dir / self.db_filename
        # Ensure persistence directory exists
        Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
        if self.exchange_rate_provider not in ALLOWED_RATE_PROVIDERS:
            raise ValueError(
                f"Unsupported exchange_rate_provider '{self.exchange_rate_provider}'. Allowed: {ALLOWED_RATE_PROVIDERS}"
            )
        if not self.jwt_secret:
            if self.environment != "development":
                raise ValueError("JWT_SECRET must be set outside development")
            logger.warning("JWT_SECRET not set; using insecure development key")
            self.jwt_secret = _DEV_JWT_SECRET


@lru_cache
def get_settings() -> Settings:
    settings = Settings()
    settings.init_post_load()
    return settings
