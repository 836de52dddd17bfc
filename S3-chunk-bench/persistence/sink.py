"""
Append-only file sink for downloaded chunks.
"""

import os
import logging

from common.errors import SinkWriteError

logger = logging.getLogger(__name__)


def output_filename(chunk_size_mb: float, object_key: str) -> str:
    """Name of the artifact for one chunk size, e.g. ``0.1MB_data.txt``."""
    return f"{chunk_size_mb:g}MB_{object_key.replace('/', '_')}"


class FileSink:
    """Writes chunks to a local file in the order they are received.

    Any previous file at ``path`` is truncated when the sink is opened.
    Write failures are logged and raised as SinkWriteError.
    """

    def __init__(self, path: str):
        self.path = path
        self.bytes_written = 0
        self._file = None

    def open(self):
        directory = os.path.dirname(self.path)
        try:
            if directory:
                os.makedirs(directory, exist_ok=True)
            self._file = open(self.path, "wb")
        except OSError as e:
            logger.error(f"Failed to open {self.path}: {e}")
            raise SinkWriteError(self.path, str(e)) from e
        return self

    def write(self, data: bytes) -> None:
        if self._file is None:
            raise RuntimeError("Sink is not open")
        try:
            self._file.write(data)
        except OSError as e:
            logger.error(f"Failed to write {len(data)} bytes to {self.path}: {e}")
            raise SinkWriteError(self.path, str(e)) from e
        self.bytes_written += len(data)

    def close(self) -> None:
        if self._file is None:
            return
        file, self._file = self._file, None
        try:
            file.close()
        except OSError as e:
            logger.error(f"Failed to close {self.path}: {e}")
            raise SinkWriteError(self.path, str(e)) from e

    def __enter__(self):
        return self.open()

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is None:
            self.close()
            return
        # An error is already propagating, keep it as the reported failure
        try:
            self.close()
        except SinkWriteError as e:
            logger.error(f"Ignoring close failure of {self.path} after {exc_type.__name__}: {e}")
