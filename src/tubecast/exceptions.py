"""
Exception hierarchy for the tubecast pipeline.

Fatal errors abort the whole metadata-to-feed run before any feed bytes
are written. Soft-missing values (no audio URL, no timestamp, no cover
images) are never reported through these exceptions.
"""

from typing import Iterable, Optional


class TubecastError(Exception):
    """Base class for all tubecast errors."""


class MalformedInputError(TubecastError, ValueError):
    """The channel metadata or media URL table does not have the expected shape."""


class MissingFieldError(MalformedInputError):
    """
    A required top-level channel field is absent.

    Attributes:
        fields: Names of the missing fields, in document order
    """

    def __init__(self, fields: Iterable[str]):
        self.fields = list(fields)
        super().__init__(
            f"Channel metadata is missing required field(s): {', '.join(self.fields)}"
        )


class FeedWriteError(TubecastError, OSError):
    """The feed document could not be written to its sink."""


class DownloaderError(TubecastError):
    """
    The external yt-dlp process failed.

    Attributes:
        returncode: Process exit status, or None if it never started
        stderr: Tail of the process error output
    """

    def __init__(self, message: str, returncode: Optional[int] = None, stderr: str = ""):
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(message)
