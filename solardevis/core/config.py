# solardevis/core/config.py

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
import json
from typing import Optional
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parents[2]  # project root
ENV_PATH = BASE_DIR / ".env"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(ENV_PATH),
        extra="ignore",
    )

    DEBUG: bool = Field(default=False)
    ENVIRONMENT: str = Field(default="production")

    # Frontend / CORS
    FRONTEND_URL: Optional[str] = None
    CORS_ORIGINS: Optional[str] = None

    def get_cors_origins(self) -> list[str]:
        if not self.CORS_ORIGINS:
            return []
        raw = (self.CORS_ORIGINS or "").strip()
        if not raw:
            return []
        if raw.startswith("["):
            try:
                items = json.loads(raw)
            except json.JSONDecodeError:
                return []
            return [str(x).strip().rstrip("/") for x in items if str(x).strip()]
        return [x.strip().rstrip("/") for x in raw.split(",") if x.strip()]

    # Gemini (narrative analysis)
    GEMINI_API_KEY: Optional[str] = None
    GEMINI_MODEL: str = Field(default="gemini-1.5-flash")

    # Google Solar API (peak-sun-hours lookup)
    GOOGLE_SOLAR_API_KEY: Optional[str] = None
    SOLAR_API_URL: str = Field(default="https://solar.googleapis.com/v1")
    SOLAR_API_TIMEOUT: float = Field(default=15.0)

    # Sizing defaults
    DEFAULT_PEAK_SUN_HOURS: float = Field(default=3.5)
    DEFAULT_PANEL_WATTAGE: float = Field(default=425.0)

    @property
    def analysis_enabled(self) -> bool:
        return bool((self.GEMINI_API_KEY or "").strip())


settings = Settings()
