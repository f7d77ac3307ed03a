"""
yt-dlp invocation for the two pipeline inputs.

Runs the external ``yt-dlp`` CLI twice against the configured channel:
once to dump the channel metadata as a single JSON document, once to
print one ``id,url`` row per entry with the resolved audio media URL.
Each run is a single blocking call with no retries.
"""

import logging
import subprocess
from pathlib import Path
from typing import List, Tuple

from tubecast.config import Config
from tubecast.exceptions import DownloaderError

logger = logging.getLogger(__name__)

# Output template producing one CSV row per entry
MEDIA_URL_TEMPLATE = "%(id)s,%(url)s"

# Lines of yt-dlp stderr kept on a DownloaderError
STDERR_TAIL_LINES = 20


def _base_command(config: Config) -> List[str]:
    command = [config.ytdlp_binary, "--ignore-errors", "--no-warnings"]
    if config.playlist_end is not None:
        command += ["--playlist-end", str(config.playlist_end)]
    return command


def build_metadata_command(config: Config) -> List[str]:
    """
    Build the yt-dlp command that dumps channel metadata as JSON.

    Args:
        config: Application configuration

    Returns:
        Argument list for subprocess
    """
    return _base_command(config) + [
        "--skip-download",
        "--dump-single-json",
        config.channel_url,
    ]


def build_media_urls_command(config: Config) -> List[str]:
    """
    Build the yt-dlp command that prints one ``id,url`` row per entry.

    Args:
        config: Application configuration

    Returns:
        Argument list for subprocess
    """
    return _base_command(config) + [
        "--skip-download",
        "--format", config.audio_format,
        "--print", MEDIA_URL_TEMPLATE,
        config.channel_url,
    ]


def _run(command: List[str], output_path: Path) -> Path:
    logger.info("Running %s", " ".join(command))
    try:
        completed = subprocess.run(
            command,
            capture_output=True,
            text=True,
            encoding="utf-8",
            check=False,
        )
    except FileNotFoundError as exc:
        raise DownloaderError(f"yt-dlp executable not found: {command[0]}") from exc

    # With --ignore-errors yt-dlp exits non-zero when single entries fail
    # but still prints the rest; only an empty output is fatal.
    if completed.returncode != 0:
        tail = "\n".join((completed.stderr or "").splitlines()[-STDERR_TAIL_LINES:])
        if not (completed.stdout or "").strip():
            raise DownloaderError(
                f"yt-dlp exited with status {completed.returncode}",
                returncode=completed.returncode,
                stderr=tail,
            )
        logger.warning(
            "yt-dlp exited with status %d, keeping partial output:\n%s",
            completed.returncode,
            tail,
        )

    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", encoding="utf-8", newline="") as f:
        f.write(completed.stdout)

    logger.debug("Wrote %d bytes to %s", len(completed.stdout), output_path)
    return output_path


def _require_channel_url(config: Config) -> None:
    if not config.channel_url:
        raise DownloaderError(
            "No channel URL configured. Set TUBECAST_CHANNEL_URL or add channel_url to tubecast.yaml."
        )


def fetch_channel_metadata(config: Config) -> Path:
    """
    Download the channel metadata document.

    Args:
        config: Application configuration

    Returns:
        Path the JSON document was written to

    Raises:
        DownloaderError: If no channel URL is configured or yt-dlp fails
    """
    _require_channel_url(config)
    return _run(build_metadata_command(config), config.metadata_path)


def fetch_media_urls(config: Config) -> Path:
    """
    Download the id,url media URL table.

    Args:
        config: Application configuration

    Returns:
        Path the CSV table was written to

    Raises:
        DownloaderError: If no channel URL is configured or yt-dlp fails
    """
    _require_channel_url(config)
    return _run(build_media_urls_command(config), config.media_urls_path)


def download_channel(config: Config) -> Tuple[Path, Path]:
    """
    Fetch both pipeline inputs for the configured channel.

    Args:
        config: Application configuration

    Returns:
        (metadata_path, media_urls_path)
    """
    metadata_path = fetch_channel_metadata(config)
    media_urls_path = fetch_media_urls(config)
    return metadata_path, media_urls_path
