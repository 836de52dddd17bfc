"""
Tests for the ranged GetObject wrapper.
"""

import os
import sys
import unittest
from unittest.mock import AsyncMock, patch

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from botocore.exceptions import ClientError, EndpointConnectionError

from common.errors import RemoteFetchError
from common.storage_factory import create_storage_system
from systems.aws import AWSSystem
from systems.base import ObjectStorageSystem, RangeRequest
from systems.r2 import R2System


def client_error(code, status):
    return ClientError(
        {"Error": {"Code": code, "Message": code}, "ResponseMetadata": {"HTTPStatusCode": status}},
        "GetObject",
    )


class TestObjectStorageSystem(unittest.IsolatedAsyncioTestCase):
    """Test get_range against a mocked S3 client."""

    def setUp(self):
        self.system = ObjectStorageSystem(
            endpoint="",
            bucket_name="benchmark-mb",
            credentials={"region_name": "us-east-1"},
        )
        self.client = AsyncMock()
        self.system.client = self.client

    def _respond(self, content_range, data):
        body = AsyncMock()
        body.read.return_value = data
        self.client.get_object.return_value = {"ContentRange": content_range, "Body": body}

    async def test_sends_inclusive_range_header(self):
        self._respond("bytes 0-3/10", b"abcd")

        response = await self.system.get_range("data.txt", 0, 3)

        self.client.get_object.assert_awaited_once_with(
            Bucket="benchmark-mb", Key="data.txt", Range="bytes=0-3"
        )
        self.assertEqual(response.content_range, "bytes 0-3/10")
        self.assertEqual(response.body, b"abcd")
        self.assertGreaterEqual(response.latency_ms, response.rtt_ms)
        self.assertEqual(self.system.request_count, 1)

    async def test_overshooting_end_is_passed_through(self):
        self._respond("bytes 8-9/10", b"ij")

        response = await self.system.get_range("data.txt", 8, 1048583)

        self.assertEqual(self.client.get_object.await_args.kwargs["Range"], "bytes=8-1048583")
        self.assertEqual(response.body, b"ij")

    async def test_missing_key_raises_remote_fetch_error(self):
        self.client.get_object.side_effect = client_error("NoSuchKey", 404)

        with self.assertRaises(RemoteFetchError) as ctx:
            await self.system.get_range("missing", 0, 99)

        self.assertEqual(ctx.exception.code, "NoSuchKey")
        self.assertEqual(ctx.exception.status, 404)
        self.assertEqual((ctx.exception.start, ctx.exception.end), (0, 99))
        self.assertIsInstance(ctx.exception.__cause__, ClientError)

    async def test_throttling_raises_remote_fetch_error(self):
        self.client.get_object.side_effect = client_error("SlowDown", 503)

        with self.assertRaises(RemoteFetchError) as ctx:
            await self.system.get_range("data.txt", 0, 99)
        self.assertEqual(ctx.exception.status, 503)

    async def test_network_failure_raises_remote_fetch_error(self):
        self.client.get_object.side_effect = EndpointConnectionError(endpoint_url="https://s3.example")

        with self.assertRaises(RemoteFetchError):
            await self.system.get_range("data.txt", 0, 99)
        self.client.get_object.assert_awaited_once()

    async def test_invalid_range_rejected_locally(self):
        with self.assertRaises(ValueError):
            await self.system.get_range("data.txt", -1, 10)
        with self.assertRaises(ValueError):
            await self.system.get_range("data.txt", 10, 9)
        with self.assertRaises(ValueError):
            await self.system.get_range("", 0, 9)
        self.client.get_object.assert_not_awaited()

    async def test_requires_context_manager(self):
        self.system.client = None
        with self.assertRaises(RuntimeError):
            await self.system.get_range("data.txt", 0, 9)

    async def test_verify_connection(self):
        self.assertTrue(await self.system.verify_connection())

        self.client.head_bucket.side_effect = client_error("NoSuchBucket", 404)
        self.assertFalse(await self.system.verify_connection())

    def test_retries_disabled(self):
        self.assertEqual(self.system._config.retries["max_attempts"], 1)


class TestRangeRequest(unittest.TestCase):
    """Test range request validation."""

    def test_range_header(self):
        request = RangeRequest("benchmark-mb", "data.txt", 1048576, 2097151)
        self.assertEqual(request.range_header, "bytes=1048576-2097151")

    def test_single_byte_range(self):
        self.assertEqual(RangeRequest("b", "k", 5, 5).range_header, "bytes=5-5")

    def test_rejects_invalid(self):
        for args in [("", "k", 0, 1), ("b", "", 0, 1), ("b", "k", -1, 1), ("b", "k", 2, 1)]:
            with self.subTest(args=args):
                with self.assertRaises(ValueError):
                    RangeRequest(*args)


class TestStorageFactory(unittest.TestCase):
    """Test storage system selection."""

    def test_creates_s3_system(self):
        system = create_storage_system("S3", bucket_name="other-bucket")
        self.assertIsInstance(system, AWSSystem)
        self.assertEqual(system.bucket_name, "other-bucket")

    def test_creates_r2_system(self):
        with patch("systems.r2.BUCKET_NAME", "r2-bucket"):
            system = create_storage_system("r2")
        self.assertIsInstance(system, R2System)
        self.assertEqual(system.bucket_name, "r2-bucket")
        self.assertEqual(system.credentials["region_name"], "auto")

    def test_rejects_unknown_type(self):
        with self.assertRaises(ValueError):
            create_storage_system("gcs")


if __name__ == '__main__':
    unittest.main()
