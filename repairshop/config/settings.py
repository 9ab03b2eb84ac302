"""
Application settings.

Each section reads its own environment prefix (``STORAGE_``, ``API_``,
``INVENTORY_``, ``PDF_``); top-level values and a ``.env`` file are read by
``Settings`` itself.
"""

from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    """Where the shop database lives and how it is opened."""

    model_config = SettingsConfigDict(env_prefix="STORAGE_")

    data_dir: Path = Path("data")
    db_name: str = "repairshop.db"
    pool_size: int = Field(default=5, ge=1, le=64)
    busy_timeout: int = Field(default=30000, ge=0, description="SQLite lock wait in ms")

    @property
    def db_path(self) -> Path:
        return self.data_dir / self.db_name


class APISettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="API_")

    host: str = "0.0.0.0"
    port: int = Field(default=8000, ge=1, le=65535)
    debug: bool = False
    cors_origins: list[str] = ["*"]


class InventorySettings(BaseSettings):
    """Dashboard limits and the fallback low-stock threshold."""

    model_config = SettingsConfigDict(env_prefix="INVENTORY_")

    # Used until a business profile has been saved
    default_low_stock_threshold: int = Field(default=5, ge=0, le=999)
    low_stock_alert_limit: int = Field(default=20, ge=1)

    recent_activity_limit: int = Field(default=10, ge=1)
    top_products_limit: int = Field(default=5, ge=1)
    trend_days: int = Field(default=30, ge=1, le=366)


class PdfSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="PDF_")

    footer_text: str = "Generated by Repair Shop Manager"
    currency_symbol: str = ""
    default_shop_name: str = "Repair Shop"

    # Unicode TTF for names and descriptions outside Latin-1, e.g. DejaVuSans.ttf
    font_path: Path | None = None
    bold_font_path: Path | None = None


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "Repair Shop Manager"
    app_version: str = "1.0.0"
    environment: Literal["development", "staging", "production"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    storage: StorageSettings = Field(default_factory=StorageSettings)
    api: APISettings = Field(default_factory=APISettings)
    inventory: InventorySettings = Field(default_factory=InventorySettings)
    pdf: PdfSettings = Field(default_factory=PdfSettings)

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: object) -> object:
        return v.upper() if isinstance(v, str) else v


_settings: Settings | None = None


def get_settings() -> Settings:
    """Settings loaded once per process."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Forget the loaded settings so the next call re-reads the environment."""
    global _settings
    _settings = None
