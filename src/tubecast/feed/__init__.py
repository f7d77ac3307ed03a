"""
Feed serialization and read-back.
"""

from tubecast.feed.reader import read_feed
from tubecast.feed.serializer import render_feed, serialize

__all__ = ["read_feed", "render_feed", "serialize"]
