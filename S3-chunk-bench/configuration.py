"""
Configuration constants for the chunked range download benchmark.

This module contains all configuration parameters including:
- Cloud credentials and endpoints
- The chunk size benchmark matrix
- Client timeouts
- File size constants and conversion factors
"""

import os
from dataclasses import dataclass
from typing import Tuple

# =============================================================================
# CLOUD STORAGE CONFIGURATION
# =============================================================================

# Object storage configuration
BUCKET_NAME: str = os.getenv("BUCKET_NAME", "benchmark-mb")

# AWS S3 credentials and configuration
S3_ENDPOINT: str = os.getenv("S3_ENDPOINT", "")
AWS_ACCESS_KEY_ID: str = os.getenv("AWS_ACCESS_KEY_ID", "")
AWS_SECRET_ACCESS_KEY: str = os.getenv("AWS_SECRET_ACCESS_KEY", "")
AWS_REGION: str = os.getenv("AWS_REGION", "us-east-1")

# Cloudflare R2 credentials and configuration
R2_ENDPOINT: str = os.getenv("R2_ENDPOINT", "")
R2_ACCESS_KEY_ID: str = os.getenv("R2_ACCESS_KEY_ID", "")
R2_SECRET_ACCESS_KEY: str = os.getenv("R2_SECRET_ACCESS_KEY", "")

# =============================================================================
# BENCHMARK MATRIX
# =============================================================================


@dataclass(frozen=True)
class ChunkConfig:
    """One entry of the benchmark matrix."""

    chunk_size_mb: float
    label: str


DEFAULT_OBJECT_KEY: str = "data.txt"

# Executed in this order, one after another
CHUNK_CONFIGS: Tuple[ChunkConfig, ...] = (
    ChunkConfig(chunk_size_mb=100, label="100MB"),
    ChunkConfig(chunk_size_mb=10, label="10MB"),
    ChunkConfig(chunk_size_mb=1, label="1MB"),
    ChunkConfig(chunk_size_mb=0.1, label="0.1MB"),
)

# =============================================================================
# CLIENT CONFIGURATION
# =============================================================================

CONNECT_TIMEOUT_SECONDS: int = 5
READ_TIMEOUT_SECONDS: int = 60  # Longer timeout for 100MB chunks
MAX_ATTEMPTS: int = 1  # A single attempt, failed fetches are not retried
MAX_POOL_CONNECTIONS: int = 10

PROGRESS_INTERVAL: int = 50  # Log progress every N requests

# =============================================================================
# FILE SIZE CONSTANTS
# =============================================================================

BYTES_PER_MB: int = 1024 * 1024
BYTES_PER_GB: int = 1024 * 1024 * 1024

# =============================================================================
# CLI DEFAULTS
# =============================================================================

DEFAULT_OUTPUT_DIR: str = "downloads"
DEFAULT_RESULTS_DIR: str = "results"
