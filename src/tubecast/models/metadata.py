"""
Typed schema for the channel metadata document written by yt-dlp.

The document is validated against these models in one pass before any
domain object is built, so a shape violation is reported upfront instead
of surfacing field by field. Keys yt-dlp emits that the feed does not use
are ignored.
"""

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


# Thumbnail id yt-dlp assigns to the full channel avatar
AVATAR_THUMBNAIL_ID = "avatar_uncropped"

# Top-level fields a channel document must carry
REQUIRED_CHANNEL_FIELDS = ("channel_id", "channel", "channel_url")


class ThumbnailRecord(BaseModel):
    """Channel-level thumbnail (avatar, banner) variant."""
    model_config = ConfigDict(extra="ignore")

    id: Optional[str] = None
    url: str


class EntryThumbnail(BaseModel):
    """Per-entry thumbnail, listed from smallest to largest resolution."""
    model_config = ConfigDict(extra="ignore")

    url: str
    width: Optional[int] = Field(None, ge=0)
    height: Optional[int] = Field(None, ge=0)


class EntryRecord(BaseModel):
    """One video entry of the channel playlist."""
    model_config = ConfigDict(extra="ignore")

    id: str
    title: Optional[str] = None
    description: Optional[str] = None
    timestamp: Optional[int] = None
    duration: Optional[float] = None
    url: Optional[str] = None
    thumbnails: List[EntryThumbnail] = Field(default_factory=list)

    @field_validator("thumbnails", mode="before")
    @classmethod
    def null_as_empty(cls, v: Any) -> Any:
        """yt-dlp writes null for entries without thumbnails."""
        return [] if v is None else v


class ChannelMetadata(BaseModel):
    """
    Channel metadata document.

    Mirrors the subset of ``yt-dlp --dump-single-json`` output for a
    channel URL that the feed needs.
    """
    model_config = ConfigDict(extra="ignore")

    channel_id: str
    channel: str
    description: Optional[str] = None
    channel_url: str
    thumbnails: List[ThumbnailRecord] = Field(default_factory=list)
    entries: List[EntryRecord] = Field(default_factory=list)

    @field_validator("thumbnails", "entries", mode="before")
    @classmethod
    def null_as_empty(cls, v: Any) -> Any:
        """Treat a null list as an empty one."""
        return [] if v is None else v
