"""
Data models.

Provides the typed schema of the downloaded channel metadata document
and the immutable Channel aggregate built from it.
"""

from tubecast.models.entities import Channel, ChannelEntry, CoverImage
from tubecast.models.metadata import (
    AVATAR_THUMBNAIL_ID,
    REQUIRED_CHANNEL_FIELDS,
    ChannelMetadata,
    EntryRecord,
    EntryThumbnail,
    ThumbnailRecord,
)

__all__ = [
    "Channel",
    "ChannelEntry",
    "CoverImage",
    "AVATAR_THUMBNAIL_ID",
    "REQUIRED_CHANNEL_FIELDS",
    "ChannelMetadata",
    "EntryRecord",
    "EntryThumbnail",
    "ThumbnailRecord",
]
