"""
Sequential chunked download of a single object.
"""

import os
import time
import logging

from algorithms.range_tracker import (
    chunk_size_bytes,
    is_complete,
    next_range,
    parse_content_range,
)
from configuration import ChunkConfig, PROGRESS_INTERVAL
from persistence.parquet import ParquetPersistence
from persistence.record import ChunkRecord, DownloadResult
from persistence.sink import FileSink, output_filename

logger = logging.getLogger(__name__)


class ChunkedDownloader:
    """Downloads an object one byte range at a time into a local file.

    Exactly one request is in flight: each chunk is read in full and
    written before the next range is computed, so at most one chunk is
    held in memory regardless of the object size.
    """

    def __init__(self, storage_system, output_dir: str, persistence: ParquetPersistence = None):
        self.storage_system = storage_system
        self.output_dir = output_dir
        self.persistence = persistence

    async def run(self, object_key: str, chunk_config: ChunkConfig) -> DownloadResult:
        """Download ``object_key`` using ``chunk_config.chunk_size_mb`` sized ranges.

        Errors from the store, the Content-Range parser or the sink
        propagate and abort the session.
        """
        chunk_bytes = chunk_size_bytes(chunk_config.chunk_size_mb)
        if chunk_bytes <= 0:
            raise ValueError(f"Chunk size must be positive: {chunk_config.label}")

        output_path = os.path.join(
            self.output_dir, output_filename(chunk_config.chunk_size_mb, object_key)
        )
        state = None
        requests = 0

        start_ts = time.time()
        with FileSink(output_path) as sink:
            while not is_complete(state):
                request_start, request_end = next_range(state, chunk_bytes)

                request_ts = time.time()
                response = await self.storage_system.get_range(
                    object_key, request_start, request_end
                )
                sink.write(response.body)
                state = parse_content_range(response.content_range)
                requests += 1

                if self.persistence is not None:
                    self.persistence.store_record(ChunkRecord(
                        object_key=object_key,
                        label=chunk_config.label,
                        chunk_size_mb=chunk_config.chunk_size_mb,
                        request_start=request_start,
                        request_end=request_end,
                        range_start=state.start,
                        range_end=state.end,
                        object_length=state.length,
                        bytes_downloaded=len(response.body),
                        latency_ms=response.latency_ms,
                        rtt_ms=response.rtt_ms,
                        start_ts=request_ts,
                        end_ts=time.time(),
                    ))

                if requests % PROGRESS_INTERVAL == 0:
                    logger.info(
                        f"{chunk_config.label}: {requests} requests, "
                        f"{state.end + 1}/{state.length} bytes"
                    )

        end_ts = time.time()

        return DownloadResult(
            object_key=object_key,
            label=chunk_config.label,
            chunk_size_mb=chunk_config.chunk_size_mb,
            output_path=output_path,
            requests=requests,
            bytes_downloaded=sink.bytes_written,
            start_ts=start_ts,
            end_ts=end_ts,
        )
