"""
Async base class for object storage systems serving ranged reads.
"""

import aioboto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError
import logging
import time
from dataclasses import dataclass
from typing import Optional

# aiohttp is a required dependency of aioboto3, so it's always available
from aiohttp.client_exceptions import ClientPayloadError

from common.errors import RemoteFetchError
from configuration import (
    CONNECT_TIMEOUT_SECONDS,
    READ_TIMEOUT_SECONDS,
    MAX_ATTEMPTS,
    MAX_POOL_CONNECTIONS,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RangeRequest:
    """Inclusive byte range [start, end] of one object."""

    bucket: str
    key: str
    start: int
    end: int

    def __post_init__(self):
        if not self.bucket or not self.key:
            raise ValueError("Bucket and object key must not be empty")
        if self.start < 0 or self.end < self.start:
            raise ValueError(f"Invalid range {self.start}-{self.end}")

    @property
    def range_header(self) -> str:
        return f"bytes={self.start}-{self.end}"


@dataclass
class RangeResponse:
    """Result of a single ranged GetObject.

    Attributes:
        content_range: Content-Range header exactly as returned by the store
        body: Bytes returned for the range
        latency_ms: Time from request start until the body was fully read
        rtt_ms: Time from request start until the response headers arrived
    """

    content_range: Optional[str]
    body: bytes
    latency_ms: float
    rtt_ms: float


class ObjectStorageSystem:
    """Async base class for object storage systems."""

    def __init__(self, endpoint: str, bucket_name: str, credentials: dict):
        self.endpoint = endpoint
        self.bucket_name = bucket_name
        self.credentials = credentials

        self._config = self._create_config()

        self.session = aioboto3.Session(
            aws_access_key_id=credentials.get("access_key_id") or None,
            aws_secret_access_key=credentials.get("secret_access_key") or None,
            region_name=credentials.get("region_name", "auto"),
        )

        self.client = None
        self._request_count = 0

        logger.info(f"Initialized async storage for {endpoint or 'default endpoint'} (bucket={bucket_name})")

    def _create_config(self) -> Config:
        """Create the botocore client config."""
        return Config(
            max_pool_connections=MAX_POOL_CONNECTIONS,
            connect_timeout=CONNECT_TIMEOUT_SECONDS,
            read_timeout=READ_TIMEOUT_SECONDS,
            # Failed range reads surface immediately
            retries={
                'max_attempts': MAX_ATTEMPTS,
                'mode': 'standard',
            },
            s3={
                'addressing_style': 'virtual',
            },
            tcp_keepalive=True,
        )

    async def __aenter__(self):
        """Async context manager entry."""
        self.client = await self.session.client(
            "s3",
            endpoint_url=self.endpoint or None,
            config=self._config,
        ).__aenter__()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        if self.client:
            await self.client.__aexit__(exc_type, exc_val, exc_tb)
            self.client = None

    async def get_range(self, key: str, start: int, end: int) -> RangeResponse:
        """Fetch the inclusive byte range [start, end] of an object.

        The store clamps ``end`` to the object's last byte and reports what
        it actually returned in the Content-Range header.

        Args:
            key: Object key
            start: First byte requested
            end: Last byte requested (may exceed the object length)

        Returns:
            RangeResponse with the raw Content-Range header and body

        Raises:
            ValueError: If the range is negative or empty
            RuntimeError: If called outside the async context manager
            RemoteFetchError: If the request or the body read fails
        """
        request = RangeRequest(self.bucket_name, key, start, end)
        if not self.client:
            raise RuntimeError("Storage client not initialized. Use async context manager.")

        self._request_count += 1
        range_header = request.range_header

        try:
            start_time = time.time()
            response = await self.client.get_object(
                Bucket=request.bucket,
                Key=request.key,
                Range=range_header,
            )
            rtt_ms = (time.time() - start_time) * 1000

            body = response["Body"]
            data = await body.read()
            latency_ms = (time.time() - start_time) * 1000

        except ClientError as e:
            error_code = e.response.get('Error', {}).get('Code', 'Unknown')
            status_code = e.response.get('ResponseMetadata', {}).get('HTTPStatusCode', 0)

            if status_code in (429, 503):
                logger.error(
                    f"Throttled: {error_code} (HTTP {status_code}) for {key} range {start}-{end}"
                )
            else:
                logger.error(
                    f"S3 error {error_code} (HTTP {status_code}) for {key} range {start}-{end}"
                )
            raise RemoteFetchError(
                key, start, end, f"{error_code} (HTTP {status_code})",
                code=error_code, status=status_code,
            ) from e

        except ClientPayloadError as e:
            logger.error(
                f"Incomplete payload for {key} range {start}-{end}: "
                f"Connection closed before all data received"
            )
            raise RemoteFetchError(key, start, end, f"incomplete payload: {e}") from e

        except BotoCoreError as e:
            logger.error(f"Request for {key} range {start}-{end} failed: {e}")
            raise RemoteFetchError(key, start, end, str(e)) from e

        logger.debug(
            f"Request #{self._request_count}: {key} {range_header} -> "
            f"{response.get('ContentRange')} ({len(data)} bytes, {latency_ms:.1f} ms)"
        )
        return RangeResponse(
            content_range=response.get("ContentRange"),
            body=data,
            latency_ms=latency_ms,
            rtt_ms=rtt_ms,
        )

    async def verify_connection(self) -> bool:
        """Verify storage connection and configuration."""
        if not self.client:
            logger.error("Client not initialized. Use async context manager.")
            return False

        try:
            logger.info("Verifying storage connection...")
            await self.client.head_bucket(Bucket=self.bucket_name)
            logger.info(f"Successfully connected to bucket: {self.bucket_name}")
            logger.info(f"Endpoint: {self.endpoint or 'default'}")
            return True

        except (ClientError, BotoCoreError) as e:
            logger.error(f"Connection verification failed: {e}")
            return False

    @property
    def request_count(self) -> int:
        """Number of range requests issued by this client."""
        return self._request_count
