"""
Ingestion module for yt-dlp downloads and Channel model construction.
"""

from tubecast.ingestion.builder import build, build_from_files
from tubecast.ingestion.downloader import download_channel

__all__ = ["build", "build_from_files", "download_channel"]
