"""
Chunk size benchmark: download the same object once per chunk size and time it.
"""

import os
import sys
import logging
import argparse
from typing import List, Sequence

# Required: Use uvloop for better performance
import uvloop

# Ensure project root is in path (for running as script)
# When run as module (python -m cli.benchmark), this is not needed
_project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

from configuration import (
    CHUNK_CONFIGS,
    DEFAULT_OBJECT_KEY,
    DEFAULT_OUTPUT_DIR,
    DEFAULT_RESULTS_DIR,
    ChunkConfig,
)
from algorithms.chunked_download import ChunkedDownloader
from persistence.parquet import ParquetPersistence
from persistence.record import DownloadResult

logger = logging.getLogger(__name__)


class BenchmarkRunner:
    """Runs one full chunked download per configuration, strictly in order."""

    def __init__(
        self,
        storage_system,
        object_key: str = None,
        output_dir: str = None,
        results_dir: str = None,
        configs: Sequence[ChunkConfig] = CHUNK_CONFIGS,
    ):
        self.storage_system = storage_system
        self.object_key = object_key or DEFAULT_OBJECT_KEY
        self.output_dir = output_dir or DEFAULT_OUTPUT_DIR
        self.configs = tuple(configs)
        self.persistence = ParquetPersistence(results_dir or DEFAULT_RESULTS_DIR)
        self.downloader = ChunkedDownloader(
            storage_system, self.output_dir, persistence=self.persistence
        )

        logger.info(
            f"Initialized benchmark runner for {self.object_key} "
            f"with {len(self.configs)} chunk sizes: {', '.join(c.label for c in self.configs)}"
        )

    async def run_benchmark(self) -> List[DownloadResult]:
        """Execute every configuration and return the timing of each.

        The first failure aborts the whole run.
        """
        results = []
        try:
            for config in self.configs:
                logger.info(f"Starting download of {self.object_key} with chunk size {config.label}")
                result = await self.downloader.run(self.object_key, config)
                logger.info(
                    f"Download of {self.object_key} with chunk size {config.label} is complete. "
                    f"Time: {result.elapsed_ms:.0f}"
                )
                results.append(result)
        finally:
            # Requests of finished and aborted sessions are kept either way
            parquet_file = self.persistence.save_to_file("chunked_download")
            if parquet_file:
                logger.info(f"Detailed results saved to: {parquet_file}")

        self._log_summary(results)
        return results

    def _log_summary(self, results: List[DownloadResult]) -> None:
        logger.info("=== Chunk Size Benchmark Results ===")
        for result in results:
            logger.info(
                f"{result.label:>8}: {result.elapsed_ms:10.0f} ms, "
                f"{result.requests} requests, {result.bytes} bytes -> {result.output_path}"
            )


async def main_async(args) -> int:
    """Main async entry point."""
    from common.storage_factory import create_storage_system

    storage_system = create_storage_system(args.storage, bucket_name=args.bucket)

    async with storage_system:
        if not await storage_system.verify_connection():
            logger.error(f"Cannot reach bucket {storage_system.bucket_name}, aborting benchmark")
            return 1

        runner = BenchmarkRunner(
            storage_system,
            object_key=args.object_key,
            output_dir=args.output_dir,
            results_dir=args.results_dir,
        )
        await runner.run_benchmark()

    return 0


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Chunked range download benchmark")
    parser.add_argument(
        "--storage", choices=["s3", "r2"], default="s3", help="Storage type (default: s3)"
    )
    parser.add_argument("--bucket", help="Bucket name (default: BUCKET_NAME)")
    parser.add_argument(
        "--object-key", default=DEFAULT_OBJECT_KEY,
        help=f"Object key to download (default: {DEFAULT_OBJECT_KEY})",
    )
    parser.add_argument(
        "--output-dir", default=DEFAULT_OUTPUT_DIR,
        help=f"Directory for downloaded files (default: {DEFAULT_OUTPUT_DIR})",
    )
    parser.add_argument(
        "--results-dir", default=DEFAULT_RESULTS_DIR,
        help=f"Directory for timing records (default: {DEFAULT_RESULTS_DIR})",
    )

    args = parser.parse_args()

    # Set up logging (only if not already configured)
    if not logging.root.handlers:
        logging.basicConfig(
            level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s"
        )

    try:
        exit_code = uvloop.run(main_async(args))
    except KeyboardInterrupt:
        logger.info("Benchmark interrupted by user")
        exit_code = 1
    except Exception as e:
        logger.error(f"Benchmark failed: {e}")
        exit_code = 1
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
