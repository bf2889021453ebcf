"""Centralized configuration management using Pydantic Settings.

This module provides a single source of truth for all configuration values.
All settings can be overridden via environment variables.
"""

from pathlib import Path
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    """Application settings with environment variable support.

    All settings can be overridden via environment variables.
    For example, GST_RATE=0.12 will override the default GST fraction.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # ========== Google Sheets Configuration ==========
    google_sheets_api_key: str = Field(
        default="",
        description="API key for the Google Sheets values API"
    )
    google_sheets_base_url: str = Field(
        default="https://sheets.googleapis.com/v4/spreadsheets",
        description="Base URL of the Google Sheets values API"
    )
    google_sheets_range: str = Field(
        default="A:Z",
        description="Cell range fetched from every sheet"
    )
    google_sheets_timeout_seconds: float = Field(
        default=10.0,
        description="Timeout for a single sheet request"
    )
    zone_chart_sheet_id: str = Field(
        default="",
        description="Sheet ID of the country/carrier zone chart"
    )
    ups_rates_sheet_id: str = Field(
        default="",
        description="Sheet ID of the UPS weight/zone rate chart"
    )
    dhl_rates_sheet_id: str = Field(
        default="",
        description="Sheet ID of the DHL weight/zone rate chart"
    )
    fedex_rates_sheet_id: str = Field(
        default="",
        description="Sheet ID of the FedEx weight/zone rate chart"
    )
    fsc_sheet_id: str = Field(
        default="",
        description="Sheet ID of the fuel surcharge schedule"
    )
    interior_delivery_sheet_id: str = Field(
        default="",
        description="Sheet ID of the interior delivery charges"
    )

    # ========== File Paths Configuration ==========
    snapshot_path: Optional[Path] = Field(
        default=None,
        description="Optional JSON table snapshot used instead of Google Sheets"
    )

    # ========== Business Logic Constants ==========
    demand_surcharge_rate: float = Field(
        default=0.10,
        description="Demand surcharge as a fraction of air freight (0.10 = 10%)"
    )
    gst_rate: float = Field(
        default=0.18,
        description="GST as a fraction of total freight (0.18 = 18%)"
    )
    cushion_rate: float = Field(
        default=0.13,
        description="Cushion as a fraction of total freight plus GST (0.13 = 13%)"
    )

    # ========== Currency Configuration ==========
    display_currency: str = Field(
        default="INR",
        description="Currency code all quotes are displayed in"
    )
    display_currency_symbol: str = Field(
        default="₹",
        description="Symbol prefixed to formatted amounts"
    )

    # ========== Server Configuration ==========
    server_host: str = Field(
        default="0.0.0.0",
        description="Server host address"
    )
    server_port: int = Field(
        default=7860,
        description="Server port number"
    )

    # ========== Logging ==========
    log_level: str = Field(
        default="INFO",
        description="Root logging level"
    )

    def sheets_configured(self) -> bool:
        """Whether an API key is available for live sheet fetches."""
        return bool(self.google_sheets_api_key)

    def get_snapshot_path(self, project_dir: Path) -> Optional[Path]:
        """Get absolute path to the configured table snapshot.

        Args:
            project_dir: Project root directory

        Returns:
            Absolute path to the snapshot JSON file, or None if not configured
        """
        if self.snapshot_path is None:
            return None
        if self.snapshot_path.is_absolute():
            return self.snapshot_path
        return project_dir / self.snapshot_path


_settings: Settings | None = None


def get_settings() -> Settings:
    """Get the global settings instance.

    Creates and caches a Settings instance on first call.
    Subsequent calls return the cached instance.

    Returns:
        Settings instance
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Drop the cached settings so the next call re-reads the environment."""
    global _settings
    _settings = None
