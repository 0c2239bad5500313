import json
import logging
import os
import tempfile
from typing import Optional

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


def default_binary() -> str:
    """yt-dlp executable name for the current platform"""
    return "yt-dlp.exe" if os.name == "nt" else "yt-dlp"


class ExtractorConfig(BaseModel):
    binary: str = Field(default_factory=default_binary, description="yt-dlp executable path")
    timeout_seconds: Optional[float] = Field(default=None, gt=0, description="Per-invocation timeout (None = wait for yt-dlp)")
    socket_timeout: Optional[int] = Field(default=None, ge=1, description="Socket timeout passed to yt-dlp")
    retries: Optional[int] = Field(default=None, ge=0, description="Retries passed to yt-dlp")


class DownloadConfig(BaseModel):
    temp_dir: str = Field(default_factory=tempfile.gettempdir, description="Directory for temporary artifacts")
    merge_output_format: str = Field(default="mp4", description="Container used when merging streams")
    filename: str = Field(default="video.mp4", description="Filename offered to the client")
    media_type: str = Field(default="video/mp4", description="Content type of downloaded media")


class LoggingConfig(BaseModel):
    level: str = Field(default="INFO", description="Log level (DEBUG, INFO, WARNING, ERROR)")
    format: str = Field(default="%(message)s", description="Log format")
    enable_rich: bool = Field(default=True, description="Enable rich console logging")

    @field_validator("level")
    @classmethod
    def validate_log_level(cls, v):
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of {valid_levels}")
        return v.upper()


class I18nConfig(BaseModel):
    default_locale: str = Field(default="en", description="Default locale")
    supported_locales: list = Field(default=["en", "ja"], description="Supported locales")


class ApiConfig(BaseModel):
    title: str = Field(default="clipfetch API", description="API title")
    description: str = Field(default="Video info and download API backed by yt-dlp", description="API description")
    version: str = Field(default="1.0.0", description="API version")
    cors_origins: list = Field(default=["*"], description="CORS allowed origins")
    debug: bool = Field(default=False, description="Enable debug mode")


class Config(BaseSettings):
    """Main configuration model"""

    model_config = SettingsConfigDict(env_prefix="CLIPFETCH_", env_nested_delimiter="__")

    extractor: ExtractorConfig = Field(default_factory=ExtractorConfig)
    download: DownloadConfig = Field(default_factory=DownloadConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    i18n: I18nConfig = Field(default_factory=I18nConfig)
    api: ApiConfig = Field(default_factory=ApiConfig)

    @classmethod
    def load_from_file(cls, config_path: str = "config.json") -> "Config":
        """Load configuration from JSON file, falling back to env and defaults"""
        try:
            with open(config_path, "r", encoding="utf-8") as f:
                config_data = json.load(f)
            logger.info(f"Configuration loaded from {config_path}")
            return cls(**config_data)
        except (OSError, ValueError) as e:
            logger.error(f"Failed to load config from {config_path}: {str(e)}")
            logger.info("Using environment/default configuration")
            return cls()


CONFIG_PATH = os.getenv("CLIPFETCH_CONFIG_PATH", "config.json")


def load_config() -> Config:
    """Load configuration with priority: config file > env vars > defaults"""
    if os.path.exists(CONFIG_PATH):
        return Config.load_from_file(CONFIG_PATH)
    logger.info(f"Config file not found at {CONFIG_PATH}, checking environment variables")
    return Config()


# Global config instance
config = load_config()
