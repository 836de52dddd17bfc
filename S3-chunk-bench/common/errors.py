"""
Error types raised while downloading an object in chunks.
"""

from typing import Optional


class ChunkBenchError(Exception):
    """Base class for benchmark errors."""


class RemoteFetchError(ChunkBenchError):
    """A ranged read against the object store failed."""

    def __init__(
        self,
        key: str,
        start: int,
        end: int,
        reason: str,
        code: Optional[str] = None,
        status: Optional[int] = None,
    ):
        self.key = key
        self.start = start
        self.end = end
        self.reason = reason
        self.code = code
        self.status = status
        super().__init__(f"Failed to fetch {key} range {start}-{end}: {reason}")


class MalformedRangeHeader(ChunkBenchError):
    """The Content-Range returned by the store could not be parsed."""

    def __init__(self, header: Optional[str], reason: str):
        self.header = header
        self.reason = reason
        super().__init__(f"Malformed content range {header!r}: {reason}")


class SinkWriteError(ChunkBenchError):
    """Writing a downloaded chunk to the output file failed."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to write {path}: {reason}")
