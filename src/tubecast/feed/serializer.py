"""
RSS 2.0 feed serialization.

Renders a Channel aggregate as an RSS 2.0 document with the iTunes and
Atom namespaces declared. The whole document is assembled in memory and
written to the sink in one call, so a failure while rendering never
leaves a partial feed behind.

Two text-safety mechanisms are used and must not be mixed up:

- Free text (``title``, ``description``) is wrapped in a CDATA section
  verbatim. Text that itself contains ``]]>`` ends the section early and
  produces an unparsable document; this is a known limitation.
- URL-bearing values (``href``, ``enclosure url``, ``guid``, ``link``)
  only have ``&`` replaced by ``&amp;``. Quotes and angle brackets are
  left untouched.

Example:
    >>> from tubecast.feed.serializer import serialize
    >>> serialize(channel, Path("data/feed.xml"))
"""

import io
import logging
import os
import re
from datetime import datetime, timezone
from email.utils import format_datetime
from pathlib import Path
from typing import IO, List, Optional, Union

from tubecast.exceptions import FeedWriteError
from tubecast.models.entities import Channel, ChannelEntry

logger = logging.getLogger(__name__)

ITUNES_NS = "http://www.itunes.com/dtds/podcast-1.0.dtd"
ATOM_NS = "http://www.w3.org/2005/Atom"
ENCLOSURE_TYPE = "audio/mpeg"

_INVALID_XML_CHARS = re.compile(
    r"[^\u0009\u000a\u000d\u0020-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]"
)

Sink = Union[str, "os.PathLike[str]", IO[str], IO[bytes]]


# ---------------------------------------------------------------------------
#  Field rendering
# ---------------------------------------------------------------------------

def strip_invalid_chars(text: str) -> str:
    """Drop characters outside the XML 1.0 Char production."""
    return _INVALID_XML_CHARS.sub("", text)


def cdata(text: Optional[str]) -> str:
    """Wrap free text in a CDATA section; None renders as an empty section."""
    return f"<![CDATA[{strip_invalid_chars(text or '')}]]>"


def escape_url(url: Optional[str]) -> str:
    """
    Escape a URL for use in element text or a double-quoted attribute.

    Only ``&`` is escaped. None renders as an empty string.

    Example:
        >>> escape_url("https://cdn.example.com/a?x=1&y=2")
        'https://cdn.example.com/a?x=1&amp;y=2'
    """
    if not url:
        return ""
    return strip_invalid_chars(url).replace("&", "&amp;")


def format_pub_date(timestamp: Optional[int]) -> str:
    """
    Format epoch seconds as an RFC 1123 date in GMT.

    Timestamps outside the platform's datetime range render as "".

    Example:
        >>> format_pub_date(1678886400)
        'Wed, 15 Mar 2023 13:20:00 GMT'
        >>> format_pub_date(None)
        ''
    """
    if timestamp is None:
        return ""
    try:
        moment = datetime.fromtimestamp(timestamp, tz=timezone.utc)
    except (ValueError, OverflowError, OSError) as exc:
        logger.warning("Timestamp %s cannot be formatted: %s", timestamp, exc)
        return ""
    return format_datetime(moment, usegmt=True)


def format_duration(duration: Optional[float]) -> str:
    """Render a duration in seconds as decimal text (125 -> "125.0")."""
    if duration is None:
        return ""
    return str(float(duration))


# ---------------------------------------------------------------------------
#  Document assembly
# ---------------------------------------------------------------------------

def _render_item(entry: ChannelEntry) -> List[str]:
    cover = entry.largest_cover_image
    image_url = cover.url if cover is not None else None

    return [
        "    <item>",
        f"      <guid>{escape_url(entry.id)}</guid>",
        f"      <title>{cdata(entry.title)}</title>",
        f"      <description>{cdata(entry.description)}</description>",
        f"      <pubDate>{format_pub_date(entry.timestamp)}</pubDate>",
        f"      <itunes:duration>{format_duration(entry.duration)}</itunes:duration>",
        f'      <itunes:image href="{escape_url(image_url)}"/>',
        f'      <enclosure url="{escape_url(entry.audio_url)}" type="{ENCLOSURE_TYPE}"/>',
        "    </item>",
    ]


def render_feed(channel: Channel) -> str:
    """
    Render the complete feed document as text.

    Items follow ``channel.entries`` order.

    Args:
        channel: Channel aggregate to render

    Returns:
        The XML document, newline terminated
    """
    lines = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        f'<rss xmlns:itunes="{ITUNES_NS}" xmlns:atom="{ATOM_NS}" version="2.0">',
        "  <channel>",
        f"    <title>{cdata(channel.title)}</title>",
        f"    <description>{cdata(channel.description)}</description>",
        f"    <link>{escape_url(channel.url)}</link>",
        f'    <itunes:image href="{escape_url(channel.avatar_url)}"/>',
    ]
    for entry in channel.entries:
        lines.extend(_render_item(entry))
    lines.extend([
        "  </channel>",
        "</rss>",
    ])
    return "\n".join(lines) + "\n"


def serialize(channel: Channel, sink: Sink) -> None:
    """
    Write the feed for a channel to a sink.

    Args:
        channel: Channel aggregate to render
        sink: Filesystem path, text stream, or binary stream. Paths are
            written as UTF-8; binary streams receive UTF-8 bytes.

    Raises:
        FeedWriteError: If the sink cannot be opened or written
    """
    document = render_feed(channel)

    try:
        if isinstance(sink, (str, os.PathLike)):
            path = Path(sink)
            with open(path, "w", encoding="utf-8", newline="\n") as f:
                f.write(document)
            logger.info("Wrote feed with %d items to %s", len(channel.entries), path)
        elif isinstance(sink, (io.RawIOBase, io.BufferedIOBase)):
            sink.write(document.encode("utf-8"))
        else:
            sink.write(document)
    except (OSError, ValueError) as exc:
        raise FeedWriteError(f"Could not write feed: {exc}") from exc
