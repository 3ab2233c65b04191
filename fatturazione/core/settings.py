"""
Configurazione applicativa per Fatturazione API
"""

from typing import List
from pydantic_settings import BaseSettings
from pydantic import Field
from functools import lru_cache


class AppSettings(BaseSettings):
    """Application settings"""

    app_title: str = Field(default="Fatturazione API")
    app_version: str = Field(default="1.0.0")

    # Logging
    log_level: str = Field(default="INFO")
    log_requests: bool = Field(default=True)
    slow_request_threshold: float = Field(default=1.0, description="Secondi oltre i quali una richiesta è segnalata come lenta")

    # CORS
    cors_origins: List[str] = Field(default=["*"])

    # Note di credito/debito: giorni di scadenza dalla data documento
    correction_note_due_days: int = Field(default=30)

    # Paginazione
    limit_default: int = Field(default=10)
    max_limit: int = Field(default=500)

    class Config:
        env_prefix = "FATTURAZIONE_"
        env_file = ".env"
        case_sensitive = False
        extra = "ignore"  # Ignore extra environment variables


@lru_cache()
def get_settings() -> AppSettings:
    """Get cached application settings instance"""
    return AppSettings()
