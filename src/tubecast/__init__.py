"""
tubecast

Republishes a video channel's audio as a podcast: joins the channel
metadata and media URLs downloaded by yt-dlp into one Channel model and
serializes it as an RSS 2.0 / iTunes feed.
"""

__version__ = "0.1.0"

from tubecast.config import Config

__all__ = ["Config", "__version__"]
