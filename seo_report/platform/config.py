from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # ── App ─────────────────────────────────────
    APP_NAME: str = "SEO Report Builder"
    ENVIRONMENT: Literal["local", "staging", "production"] = "local"
    DEBUG: bool = True
    API_V1_PREFIX: str = "/api/v1"

    # ── Logging ─────────────────────────────────
    LOG_DIR: str = "logs"
    LOG_LEVEL: str = "INFO"

    # ── Report output ───────────────────────────
    REPORT_DIR: str = "storage/reports"
    REPORT_TITLE: str = "SEO Analysis Report"
    BRAND_COLOR: str = "#667eea"

    # ── PDF export (headless Chrome) ────────────
    PDF_EXPORT_ENABLED: bool = True
    PDF_RENDER_TIMEOUT: int = 30  # seconds
    CHROME_BINARY: Optional[str] = None

    model_config = SettingsConfigDict(
        env_file=str(Path(__file__).parent.parent.parent / ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("LOG_LEVEL")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.upper()


settings = Settings()


@lru_cache()
def get_settings() -> Settings:
    return settings
