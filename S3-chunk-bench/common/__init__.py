"""
Common utilities for the chunked download benchmark.
"""

from .errors import ChunkBenchError, MalformedRangeHeader, RemoteFetchError, SinkWriteError

__all__ = ['ChunkBenchError', 'MalformedRangeHeader', 'RemoteFetchError', 'SinkWriteError']
