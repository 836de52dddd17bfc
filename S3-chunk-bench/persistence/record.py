"""
Basic data structures for the chunked download benchmark.
"""

import time


class ChunkRecord:
    """One range request issued during a download session."""

    def __init__(self, object_key, label, chunk_size_mb, request_start, request_end,
                 range_start, range_end, object_length, bytes_downloaded,
                 latency_ms, rtt_ms: float = 0.0, start_ts: float = None, end_ts: float = None):
        self.object_key = object_key
        self.label = label
        self.chunk_size_mb = chunk_size_mb
        self.request_start = request_start
        self.request_end = request_end
        self.range_start = range_start
        self.range_end = range_end
        self.object_length = object_length
        self.bytes = bytes_downloaded
        self.latency_ms = latency_ms
        self.rtt_ms = rtt_ms
        self.start_ts = start_ts or time.time()
        self.end_ts = end_ts or time.time()

    def to_dict(self):
        return {
            'object_key': self.object_key,
            'label': self.label,
            'chunk_size_mb': self.chunk_size_mb,
            'request_start': self.request_start,
            'request_end': self.request_end,
            'range_start': self.range_start,
            'range_end': self.range_end,
            'object_length': self.object_length,
            'bytes': self.bytes,
            'latency_ms': self.latency_ms,
            'rtt_ms': self.rtt_ms,
            'start_ts': self.start_ts,
            'end_ts': self.end_ts,
        }


class DownloadResult:
    """Outcome of downloading one object with one chunk size."""

    def __init__(self, object_key, label, chunk_size_mb, output_path,
                 requests, bytes_downloaded, start_ts, end_ts):
        self.object_key = object_key
        self.label = label
        self.chunk_size_mb = chunk_size_mb
        self.output_path = output_path
        self.requests = requests
        self.bytes = bytes_downloaded
        self.start_ts = start_ts
        self.end_ts = end_ts

    @property
    def elapsed_ms(self) -> float:
        return (self.end_ts - self.start_ts) * 1000
