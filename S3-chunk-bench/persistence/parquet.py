"""
Parquet persistence for per-request timing records.
"""

import os
import logging
from typing import List, Optional
from datetime import datetime

import pandas as pd

from persistence.record import ChunkRecord

logger = logging.getLogger(__name__)


class ParquetPersistence:
    """Parquet file persistence for chunk request records.

    This class stores records in memory and provides functionality
    to save them to Parquet files for later analysis.

    Attributes:
        output_dir: Directory where Parquet files will be saved
        records: List of records accumulated during the benchmark
    """

    def __init__(self, output_dir: str = "results"):
        """Initialize Parquet persistence.

        Args:
            output_dir: Directory for saving Parquet files (default: 'results')
        """
        self.output_dir: str = output_dir
        self.records: List[ChunkRecord] = []

        os.makedirs(output_dir, exist_ok=True)

    def store_record(self, record: ChunkRecord) -> None:
        """Store a record in memory.

        Args:
            record: Chunk record to store
        """
        self.records.append(record)

    def to_dataframe(self) -> pd.DataFrame:
        """Return the stored records as a DataFrame, one row per request."""
        return pd.DataFrame([record.to_dict() for record in self.records])

    def save_to_file(self, filename_prefix: str = "chunked_download") -> Optional[str]:
        """Save all records to a Parquet file.

        Args:
            filename_prefix: Prefix for the generated filename (default: 'chunked_download')

        Returns:
            Path to the saved file, or None if no records to save
        """
        if not self.records:
            return None

        logger.info(f"Saving {len(self.records)} records to file")
        df = self.to_dataframe()

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        filename = f"{filename_prefix}_{timestamp}.parquet"
        filepath = os.path.join(self.output_dir, filename)

        df.to_parquet(filepath, index=False)

        return filepath
