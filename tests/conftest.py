"""
Shared test fixtures.

Provides pytest fixtures for common test resources including:
- Temporary directories and configuration
- A yt-dlp style channel metadata document
- A matching media URL table
- A ready-built Channel aggregate
"""

import json
import tempfile
from pathlib import Path
from typing import Any, Dict, List, Tuple

import pytest

from tubecast.config import Config
from tubecast.models.entities import Channel, ChannelEntry, CoverImage


@pytest.fixture
def temp_dir():
    """
    Create temporary directory for test files.

    Yields:
        Path: Temporary directory path
    """
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def test_config(temp_dir: Path) -> Config:
    """Configuration with all paths under the temporary directory."""
    return Config(
        channel_url="https://www.youtube.com/@example/videos",
        data_dir=temp_dir / "data",
    )


@pytest.fixture
def metadata_doc() -> Dict[str, Any]:
    """Channel metadata as dumped by yt-dlp, most recent entry first."""
    return {
        "id": "UCabc123",
        "channel_id": "UCabc123",
        "channel": "Example Channel",
        "description": "Talks & tutorials <weekly>",
        "channel_url": "https://www.youtube.com/channel/UCabc123",
        "_type": "playlist",
        "thumbnails": [
            {"id": "banner_uncropped", "url": "https://yt3.example.com/banner.jpg"},
            {"id": "avatar_uncropped", "url": "https://yt3.example.com/avatar.jpg?a=1&b=2"},
        ],
        "entries": [
            {
                "id": "vid003",
                "title": "Episode 3: Q&A",
                "description": "Answers to <your> questions",
                "timestamp": 1678886400,
                "duration": 125,
                "url": "https://www.youtube.com/watch?v=vid003",
                "view_count": 42,
                "thumbnails": [
                    {"url": "https://i.example.com/vid003/small.jpg", "width": 168, "height": 94},
                    {"url": "https://i.example.com/vid003/large.jpg", "width": 1280, "height": 720},
                ],
            },
            {
                "id": "vid002",
                "title": "Episode 2",
                "description": None,
                "timestamp": None,
                "duration": None,
                "url": "https://www.youtube.com/watch?v=vid002",
                "thumbnails": [],
            },
            {
                "id": "vid001",
                "title": "Episode 1",
                "description": "",
                "timestamp": 1672531200,
                "duration": 3600.5,
                "url": "https://www.youtube.com/watch?v=vid001",
                "thumbnails": [
                    {"url": "https://i.example.com/vid001/only.jpg"},
                ],
            },
        ],
    }


@pytest.fixture
def media_rows() -> List[Tuple[str, str]]:
    """Media URL table rows; vid002 has no row."""
    return [
        ("vid003", "https://media.example.com/vid003.m4a?sig=x&expire=1"),
        ("vid001", "https://media.example.com/vid001.m4a"),
    ]


@pytest.fixture
def input_files(temp_dir: Path, metadata_doc, media_rows):
    """Write the metadata document and media table to disk."""
    metadata_path = temp_dir / "channel.json"
    metadata_path.write_text(json.dumps(metadata_doc), encoding="utf-8")

    media_urls_path = temp_dir / "media_urls.csv"
    media_urls_path.write_text(
        "".join(f"{entry_id},{url}\n" for entry_id, url in media_rows),
        encoding="utf-8",
    )
    return metadata_path, media_urls_path


@pytest.fixture
def sample_channel() -> Channel:
    """A small Channel with one complete and one incomplete entry."""
    return Channel(
        id="UCabc123",
        title="Example Channel",
        description="About <things> & stuff",
        url="https://www.youtube.com/channel/UCabc123",
        avatar_url="https://yt3.example.com/avatar.jpg",
        entries=[
            ChannelEntry(
                id="vid002",
                title="Second",
                description="Second episode",
                timestamp=1678886400,
                duration=125.0,
                url="https://www.youtube.com/watch?v=vid002",
                cover_images=[
                    CoverImage(url="small", width=168, height=94),
                    CoverImage(url="large", width=1280, height=720),
                ],
                audio_url="https://media.example.com/vid002.m4a",
            ),
            ChannelEntry(id="vid001", title="First"),
        ],
    )
