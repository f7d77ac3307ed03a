"""
Immutable domain models for a channel and its entries.

A Channel is built once from the downloaded metadata and the media URL
table, then only read by the feed serializer. Optional fields keep None
for absent values so that "missing" and "empty" stay distinguishable.
"""

from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CoverImage(BaseModel):
    """A single cover image variant of an entry."""
    model_config = ConfigDict(frozen=True)

    url: str
    width: Optional[int] = Field(None, ge=0)
    height: Optional[int] = Field(None, ge=0)


class ChannelEntry(BaseModel):
    """
    One publishable entry (an episode in the feed).

    Attributes:
        id: Identifier unique within the channel, used as join key and GUID
        title: Entry title
        description: Entry description, None if the source had none
        timestamp: Upload time in epoch seconds
        duration: Length in seconds
        url: Canonical page URL of the entry
        cover_images: Cover images ordered from smallest to largest
        audio_url: Resolved media URL, None when no media row matched
    """
    model_config = ConfigDict(frozen=True)

    id: str
    title: Optional[str] = None
    description: Optional[str] = None
    timestamp: Optional[int] = None
    duration: Optional[float] = None
    url: Optional[str] = None
    cover_images: Tuple[CoverImage, ...] = ()
    audio_url: Optional[str] = None

    @property
    def largest_cover_image(self) -> Optional[CoverImage]:
        """Highest resolution cover image, or None if there are none."""
        return self.cover_images[-1] if self.cover_images else None


class Channel(BaseModel):
    """
    Channel aggregate, the source of one generated feed.

    Entries keep the order of the metadata document (most recent first),
    which is also the feed item order.
    """
    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    description: Optional[str] = None
    url: str
    avatar_url: Optional[str] = None
    entries: Tuple[ChannelEntry, ...] = ()

    @field_validator("entries")
    @classmethod
    def validate_unique_ids(cls, v: Tuple[ChannelEntry, ...]) -> Tuple[ChannelEntry, ...]:
        """Validate that entry ids are unique within the channel."""
        seen = set()
        for entry in v:
            if entry.id in seen:
                raise ValueError(f"duplicate entry id: {entry.id}")
            seen.add(entry.id)
        return v
