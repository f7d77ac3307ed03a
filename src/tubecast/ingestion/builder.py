"""
Channel model construction from downloaded metadata.

Joins the channel metadata document produced by ``yt-dlp
--dump-single-json`` with the ``id,url`` media URL table produced by a
second yt-dlp run, and returns one immutable Channel aggregate.

Example:
    >>> from tubecast.ingestion.builder import build_from_files
    >>> channel = build_from_files(Path("data/channel.json"), Path("data/media_urls.csv"))
    >>> print(f"{channel.title}: {len(channel.entries)} entries")
"""

import csv
import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from pydantic import ValidationError

from tubecast.exceptions import MalformedInputError, MissingFieldError
from tubecast.models.entities import Channel, ChannelEntry, CoverImage
from tubecast.models.metadata import (
    AVATAR_THUMBNAIL_ID,
    REQUIRED_CHANNEL_FIELDS,
    ChannelMetadata,
    EntryRecord,
    ThumbnailRecord,
)

logger = logging.getLogger(__name__)

MetadataDoc = Union[str, bytes, Mapping[str, Any]]


# ---------------------------------------------------------------------------
#  Media URL table
# ---------------------------------------------------------------------------

def parse_media_url_table(rows: Iterable[Tuple[str, str]]) -> Dict[str, str]:
    """
    Build the entry id -> media URL mapping.

    Rows are applied in order, so when an id appears more than once the
    last row wins.

    Args:
        rows: (id, url) pairs in table order

    Returns:
        Mapping of entry id to media URL

    Example:
        >>> parse_media_url_table([("a", "u1"), ("a", "u2")])
        {'a': 'u2'}
    """
    mapping: Dict[str, str] = {}
    for entry_id, url in rows:
        if entry_id in mapping:
            logger.debug("Duplicate media URL row for %s, keeping the last one", entry_id)
        mapping[entry_id] = url
    return mapping


def read_media_url_table(path: Path) -> List[Tuple[str, str]]:
    """
    Read the headerless two-column media URL CSV.

    Blank lines are skipped. Media URLs may themselves contain commas,
    so every column after the first is joined back into the URL.

    Args:
        path: Path to the CSV file

    Returns:
        List of (id, url) pairs in file order

    Raises:
        MalformedInputError: If a row has fewer than two columns
    """
    rows: List[Tuple[str, str]] = []
    with open(path, "r", encoding="utf-8-sig", newline="") as f:
        for line_no, row in enumerate(csv.reader(f), 1):
            if not row or not any(cell.strip() for cell in row):
                continue
            if len(row) < 2:
                raise MalformedInputError(
                    f"{path}:{line_no}: expected 'id,url', got {row!r}"
                )
            rows.append((row[0].strip(), ",".join(row[1:]).strip()))
    return rows


# ---------------------------------------------------------------------------
#  Metadata document
# ---------------------------------------------------------------------------

def parse_metadata_document(metadata_doc: MetadataDoc) -> ChannelMetadata:
    """
    Decode and validate the channel metadata document.

    Args:
        metadata_doc: JSON text/bytes, or an already decoded mapping

    Returns:
        Validated ChannelMetadata

    Raises:
        MalformedInputError: If the document is not JSON, not an object,
            or has fields of the wrong type
        MissingFieldError: If channel_id, channel or channel_url is absent
    """
    if isinstance(metadata_doc, (str, bytes)):
        try:
            data = json.loads(metadata_doc)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise MalformedInputError(f"Channel metadata is not valid JSON: {exc}") from exc
    else:
        data = metadata_doc

    if not isinstance(data, Mapping):
        raise MalformedInputError(
            f"Channel metadata must be a JSON object, got {type(data).__name__}"
        )

    missing = [name for name in REQUIRED_CHANNEL_FIELDS if data.get(name) is None]
    if missing:
        raise MissingFieldError(missing)

    try:
        return ChannelMetadata.model_validate(dict(data))
    except ValidationError as exc:
        raise MalformedInputError(f"Channel metadata has an unexpected shape: {exc}") from exc


def select_avatar_url(thumbnails: Iterable[ThumbnailRecord]) -> Optional[str]:
    """Return the URL of the first uncropped avatar thumbnail, if any."""
    for thumbnail in thumbnails:
        if thumbnail.id == AVATAR_THUMBNAIL_ID:
            return thumbnail.url
    return None


def _build_entry(record: EntryRecord, media_urls: Mapping[str, str]) -> ChannelEntry:
    audio_url = media_urls.get(record.id)
    if audio_url is None:
        logger.warning("No media URL for entry %s (%s)", record.id, record.title)

    return ChannelEntry(
        id=record.id,
        title=record.title,
        description=record.description,
        timestamp=record.timestamp,
        duration=record.duration,
        url=record.url,
        cover_images=tuple(
            CoverImage(url=thumb.url, width=thumb.width, height=thumb.height)
            for thumb in record.thumbnails
        ),
        audio_url=audio_url,
    )


def build(
    metadata_doc: MetadataDoc,
    media_url_table: Iterable[Tuple[str, str]],
) -> Channel:
    """
    Join channel metadata and media URLs into a Channel aggregate.

    Entries keep the order of the metadata document. An entry whose id has
    no media URL row is still included, with ``audio_url`` set to None.

    Args:
        metadata_doc: Channel metadata as JSON text/bytes or decoded mapping
        media_url_table: (id, url) pairs; the last row wins for repeated ids

    Returns:
        Immutable Channel

    Raises:
        MalformedInputError: If the metadata document cannot be used
        MissingFieldError: If a required top-level channel field is absent

    Example:
        >>> channel = build(json_text, [("dQw4w9WgXcQ", "https://cdn.example.com/a.m4a")])
        >>> channel.entries[0].audio_url
        'https://cdn.example.com/a.m4a'
    """
    media_urls = parse_media_url_table(media_url_table)
    metadata = parse_metadata_document(metadata_doc)

    entries = [_build_entry(record, media_urls) for record in metadata.entries]

    try:
        channel = Channel(
            id=metadata.channel_id,
            title=metadata.channel,
            description=metadata.description,
            url=metadata.channel_url,
            avatar_url=select_avatar_url(metadata.thumbnails),
            entries=entries,
        )
    except ValidationError as exc:
        raise MalformedInputError(f"Channel metadata is inconsistent: {exc}") from exc

    matched = sum(1 for entry in channel.entries if entry.audio_url is not None)
    logger.info(
        "Built channel '%s' with %d entries (%d with media URL, %d without)",
        channel.title,
        len(channel.entries),
        matched,
        len(channel.entries) - matched,
    )
    return channel


def build_from_files(metadata_path: Path, media_urls_path: Path) -> Channel:
    """
    Read both downloaded inputs from disk and build the Channel.

    Args:
        metadata_path: Path to the channel metadata JSON document
        media_urls_path: Path to the id,url media table

    Returns:
        Immutable Channel

    Raises:
        OSError: If either file cannot be read
        MalformedInputError: If either input has the wrong shape
    """
    logger.debug("Reading channel metadata from %s", metadata_path)
    with open(metadata_path, "r", encoding="utf-8-sig") as f:
        metadata_text = f.read()

    logger.debug("Reading media URL table from %s", media_urls_path)
    rows = read_media_url_table(media_urls_path)

    return build(metadata_text, rows)
