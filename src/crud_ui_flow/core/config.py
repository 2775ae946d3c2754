"""Configuration for CRUD UI flows and the list data broker."""

import logging

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from crud_ui_flow.logging import configure_logging
from crud_ui_flow.ui.models import ToastPosition


class UIConfig(BaseSettings):
    """Configuration for the UI side of the broker."""

    pagination_enabled: bool = Field(
        default=True,
        description="Whether list views should paginate",
    )
    swipe_refresh_enabled: bool = Field(
        default=True,
        description="Whether list views allow swipe-to-refresh",
    )
    toast_duration_ms: int = Field(
        default=2000,
        ge=0,
        description="Default toast duration for flow messages",
    )
    toast_position: ToastPosition = Field(
        default="bottom",
        description="Default toast position for flow messages",
    )

    model_config = SettingsConfigDict(
        env_prefix="CRUD_FLOW_UI_",
        env_file=".env",
        extra="ignore",
    )


class CacheConfig(BaseSettings):
    """Configuration for the record cache."""

    id_field: str = Field(
        default="id",
        min_length=1,
        description="Key used to read a record's identifier",
    )
    per_page: int = Field(
        default=20,
        gt=0,
        description="Page size used by list views",
    )
    fetch_one_result_as_latest: bool = Field(
        default=True,
        description="Treat a single fetched record as the most recent copy",
    )

    model_config = SettingsConfigDict(
        env_prefix="CRUD_FLOW_CACHE_",
        env_file=".env",
        extra="ignore",
    )


class FlowConfig(BaseSettings):
    """Main configuration for CRUD UI flows."""

    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode",
    )
    json_logs: bool = Field(
        default=False,
        description="Emit structured JSON log lines",
    )

    ui: UIConfig = Field(
        default_factory=UIConfig,
        description="UI configuration",
    )
    cache: CacheConfig = Field(
        default_factory=CacheConfig,
        description="Cache configuration",
    )

    model_config = SettingsConfigDict(
        env_prefix="CRUD_FLOW_",
        env_file=".env",
        extra="ignore",
    )

    def setup_logging(self) -> None:
        """Configure logging based on settings."""
        configure_logging(self.log_level, json_output=self.json_logs)

        if self.debug:
            logging.getLogger("crud_ui_flow").setLevel(logging.DEBUG)
