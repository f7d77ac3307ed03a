"""
Metadata-to-feed pipeline.

Ties the stages together: optionally fetch the two inputs with yt-dlp,
build the Channel aggregate, and write the feed. Building always
completes before the feed file is opened, so a fatal input error leaves
any previous feed untouched.

Example:
    >>> from tubecast.pipeline import run
    >>> result = run(get_config(), fetch=False)
    >>> print(result.to_json())
"""

import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Dict

from tubecast.config import Config
from tubecast.feed.serializer import serialize
from tubecast.ingestion.builder import build_from_files
from tubecast.ingestion.downloader import download_channel
from tubecast.models.entities import Channel

logger = logging.getLogger(__name__)


@dataclass
class PipelineResult:
    """
    Result of a pipeline run.

    Attributes:
        channel_title: Title of the channel the feed was built for
        entry_count: Number of feed items written
        missing_audio_count: Items written without an enclosure URL
        feed_path: Where the feed was written
    """

    channel_title: str
    entry_count: int
    missing_audio_count: int
    feed_path: str

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return asdict(self)

    def to_json(self, indent: int = 2) -> str:
        """Serialize to JSON string."""
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)


def generate_feed(metadata_path: Path, media_urls_path: Path, feed_path: Path) -> Channel:
    """
    Build the Channel from downloaded inputs and write its feed.

    Args:
        metadata_path: Channel metadata JSON document
        media_urls_path: id,url media URL table
        feed_path: Output feed path

    Returns:
        The Channel the feed was rendered from
    """
    channel = build_from_files(metadata_path, media_urls_path)
    feed_path.parent.mkdir(parents=True, exist_ok=True)
    serialize(channel, feed_path)
    return channel


def run(config: Config, fetch: bool = True) -> PipelineResult:
    """
    Run the full pipeline for the configured channel.

    Args:
        config: Application configuration
        fetch: If True, download fresh inputs with yt-dlp first

    Returns:
        PipelineResult describing the written feed
    """
    config.ensure_directories()

    if fetch:
        download_channel(config)

    channel = generate_feed(config.metadata_path, config.media_urls_path, config.feed_path)
    missing = sum(1 for entry in channel.entries if entry.audio_url is None)
    if missing:
        logger.warning("%d of %d items have no enclosure URL", missing, len(channel.entries))

    return PipelineResult(
        channel_title=channel.title,
        entry_count=len(channel.entries),
        missing_audio_count=missing,
        feed_path=str(config.feed_path),
    )
