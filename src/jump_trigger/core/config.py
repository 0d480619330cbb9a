"""Application configuration via Pydantic Settings."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

SENSITIVITY_MIN = 10
SENSITIVITY_MAX = 100


class CaptureSettings(BaseSettings):
    """Camera acquisition and analysis resolution."""

    model_config = SettingsConfigDict(env_prefix="CAMERA_")

    device: int | str = 0
    capture_width: int = Field(default=640, gt=0)
    capture_height: int = Field(default=480, gt=0)
    analysis_width: int = Field(default=320, ge=3)
    analysis_height: int = Field(default=240, ge=3)
    target_fps: float = Field(default=60.0, gt=0)
    max_read_failures: int = Field(default=60, gt=0)


class DetectionSettings(BaseSettings):
    """Motion scoring and jump decision parameters."""

    model_config = SettingsConfigDict(env_prefix="JUMP_")

    sensitivity_percent: int = Field(default=50, ge=SENSITIVITY_MIN, le=SENSITIVITY_MAX)
    sensitivity_step: int = Field(default=5, gt=0)
    cooldown_ms: int = Field(default=250, ge=0)
    retention_ms: int = Field(default=1000, gt=0)
    min_history: int = Field(default=6, ge=6)
    region_fraction: float = Field(default=0.6, gt=0.0, le=1.0)


class OutputSettings(BaseSettings):
    """Jump event output settings."""

    model_config = SettingsConfigDict(env_prefix="OUTPUT_")

    keypress_enabled: bool = True
    key: str = "space"


class UISettings(BaseSettings):
    """Preview window and overlay settings."""

    model_config = SettingsConfigDict(env_prefix="")

    display_width: int = Field(default=640, alias="DISPLAY_WIDTH")
    display_height: int = Field(default=480, alias="DISPLAY_HEIGHT")
    show_preview: bool = Field(default=True, alias="SHOW_PREVIEW")
    show_debug_info: bool = Field(default=False, alias="SHOW_DEBUG_INFO")


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(env_prefix="LOG_")

    level: str = "INFO"
    file: str | None = None


class Settings(BaseSettings):
    """Root settings aggregating all configuration sections."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    capture: CaptureSettings = Field(default_factory=CaptureSettings)
    detection: DetectionSettings = Field(default_factory=DetectionSettings)
    output: OutputSettings = Field(default_factory=OutputSettings)
    ui: UISettings = Field(default_factory=UISettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings instance."""
    return Settings()
