"""
Configuration management for tubecast.

Provides centralized configuration using Pydantic for validation and
environment variable support. Supports tubecast.yaml for per-project settings.
"""

from pathlib import Path
from typing import Optional, Tuple, Type

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict


PROJECT_YAML = "tubecast.yaml"

# Default data path relative to the working directory
DATA_DIR = Path("data")


def load_project_yaml(search_dir: Optional[Path] = None) -> dict:
    """
    Load tubecast.yaml configuration file.

    Searches for tubecast.yaml starting from search_dir (or the current
    working directory) and walking up to 3 parent directories.

    Args:
        search_dir: Directory to start searching from

    Returns:
        Dictionary with tubecast.yaml contents, or empty dict if not found
    """
    start = (search_dir or Path.cwd()).resolve()
    for parent in [start] + list(start.parents)[:3]:
        candidate = parent / PROJECT_YAML
        if candidate.exists():
            with open(candidate, "r", encoding="utf-8") as f:
                return yaml.safe_load(f) or {}
    return {}


class Config(BaseSettings):
    """
    Application configuration with environment variable support.

    Configuration can be provided via:
    1. Environment variables (prefixed with TUBECAST_)
    2. .env file
    3. tubecast.yaml
    4. Default values

    Example:
        export TUBECAST_CHANNEL_URL="https://www.youtube.com/@example"
        export TUBECAST_DATA_DIR="/srv/podcasts/example"
    """

    model_config = SettingsConfigDict(
        env_prefix="TUBECAST_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Source channel
    channel_url: str = Field(
        default="",
        description="URL of the video channel to republish"
    )

    # Storage paths
    data_dir: Path = Field(
        default=DATA_DIR,
        description="Directory holding downloaded metadata and the generated feed"
    )
    metadata_filename: str = Field(
        default="channel.json",
        description="File name of the channel metadata document"
    )
    media_urls_filename: str = Field(
        default="media_urls.csv",
        description="File name of the id,url media table"
    )
    feed_filename: str = Field(
        default="feed.xml",
        description="File name of the generated RSS feed"
    )

    # Logging
    log_dir: Optional[Path] = Field(
        default=None,
        description="Directory for log files (defaults to <data_dir>/logs)"
    )
    log_retention_days: int = Field(
        default=30,
        ge=1,
        description="Days of log files to keep"
    )

    # Downloader settings
    ytdlp_binary: str = Field(
        default="yt-dlp",
        description="yt-dlp executable name or path"
    )
    audio_format: str = Field(
        default="bestaudio[ext=m4a]/bestaudio",
        description="yt-dlp format selector for the enclosure media URL"
    )
    playlist_end: Optional[int] = Field(
        default=None,
        ge=1,
        description="Only process the first N channel entries"
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: Type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> Tuple[PydanticBaseSettingsSource, ...]:
        """Rank environment and .env values above init values (tubecast.yaml)."""
        return (env_settings, dotenv_settings, init_settings, file_secret_settings)

    @property
    def metadata_path(self) -> Path:
        """Path of the channel metadata JSON document."""
        return self.data_dir / self.metadata_filename

    @property
    def media_urls_path(self) -> Path:
        """Path of the id,url media table."""
        return self.data_dir / self.media_urls_filename

    @property
    def feed_path(self) -> Path:
        """Path of the generated feed."""
        return self.data_dir / self.feed_filename

    @property
    def resolved_log_dir(self) -> Path:
        return self.log_dir or self.data_dir / "logs"

    def ensure_directories(self) -> None:
        """Create necessary directories if they don't exist."""
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self.resolved_log_dir.mkdir(parents=True, exist_ok=True)


def get_config(search_dir: Optional[Path] = None) -> Config:
    """
    Get the application configuration instance.

    Merges settings from environment variables, .env file,
    and tubecast.yaml (if present). Environment values win.

    Args:
        search_dir: Directory to start the tubecast.yaml search from

    Returns:
        Config: Application configuration
    """
    yaml_values = load_project_yaml(search_dir)
    return Config(**yaml_values)
