"""
Read back a generated feed.

Parses a feed document with feedparser and reports what a podcast client
would see: channel title and artwork, and per item the GUID, publication
date, duration, cover image and enclosure URL. Used by ``tubecast inspect``
to check a freshly written feed.
"""

import json
import logging
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Union

import feedparser
from dateutil import parser as date_parser

from tubecast.exceptions import MalformedInputError

logger = logging.getLogger(__name__)


@dataclass
class FeedItemSummary:
    """
    One item of a parsed feed.

    Attributes:
        guid: Item GUID (the channel entry id)
        title: Item title
        published: Publication date as ISO-8601 string, empty if absent
        duration: iTunes duration text, empty if absent
        audio_url: Enclosure URL, empty if absent
        image_url: Item artwork URL, empty if absent
    """

    guid: str
    title: str = ""
    published: str = ""
    duration: str = ""
    audio_url: str = ""
    image_url: str = ""


@dataclass
class FeedSummary:
    """Summary of a parsed feed."""

    title: str = ""
    link: str = ""
    image_url: str = ""
    items: List[FeedItemSummary] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def missing_audio_count(self) -> int:
        return sum(1 for item in self.items if not item.audio_url)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        data = asdict(self)
        data["item_count"] = len(self.items)
        data["missing_audio_count"] = self.missing_audio_count
        return data

    def to_json(self, indent: int = 2) -> str:
        """Serialize to JSON string."""
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)


def normalize_date(raw_date: str) -> str:
    """
    Normalize a feed date string to ISO-8601.

    Unparseable dates are returned unchanged.

    Example:
        >>> normalize_date("Wed, 15 Mar 2023 13:20:00 GMT")
        '2023-03-15T13:20:00+00:00'
    """
    if not raw_date:
        return ""
    try:
        return date_parser.parse(raw_date).isoformat()
    except (ValueError, OverflowError):
        logger.warning("Could not parse feed date '%s'", raw_date)
        return raw_date


def _extract_audio_url(entry: Any) -> str:
    for enc in entry.get("enclosures", []) or []:
        url = enc.get("href") or enc.get("url")
        if url:
            return url
    return ""


def _extract_image_url(node: Any) -> str:
    image = node.get("image")
    if image:
        return image.get("href", "") or ""
    return ""


def read_feed(source: Union[str, Path, bytes]) -> FeedSummary:
    """
    Parse a feed and summarize its channel and items.

    Args:
        source: Path to a feed file, a URL, or raw feed bytes

    Returns:
        FeedSummary with one FeedItemSummary per item, in document order

    Raises:
        MalformedInputError: If the document is not a usable feed
    """
    if isinstance(source, Path):
        source = str(source)

    feed = feedparser.parse(source)
    channel = feed.get("feed", {})

    if feed.bozo and not feed.entries and not channel.get("title"):
        raise MalformedInputError(f"Failed to parse feed: {feed.bozo_exception}")

    summary = FeedSummary(
        title=channel.get("title", ""),
        link=channel.get("link", ""),
        image_url=_extract_image_url(channel),
    )
    if feed.bozo:
        summary.warnings.append(f"Feed is not well-formed: {feed.bozo_exception}")

    for entry in feed.entries:
        summary.items.append(
            FeedItemSummary(
                guid=entry.get("id", ""),
                title=entry.get("title", ""),
                published=normalize_date(entry.get("published", "")),
                duration=entry.get("itunes_duration", ""),
                audio_url=_extract_audio_url(entry),
                image_url=_extract_image_url(entry),
            )
        )

    logger.debug("Parsed %d items from feed '%s'", len(summary.items), summary.title)
    return summary
