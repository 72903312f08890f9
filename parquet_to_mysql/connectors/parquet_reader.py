"""
Parquet source: opens a Parquet file and streams it as Arrow record batches.
"""
import logging
import os
from typing import Iterator, List, Optional

import pyarrow as pa
import pyarrow.parquet as pq

from parquet_to_mysql.config import DEFAULT_READ_BATCH_SIZE
from parquet_to_mysql.exceptions import ConfigurationError, IoError

logger = logging.getLogger(__name__)


class ParquetSource:
    """Reads a Parquet file batch by batch."""

    def __init__(self, path: str, read_batch_size: int = DEFAULT_READ_BATCH_SIZE,
                 columns: Optional[List[str]] = None):
        """
        Open a Parquet file.

        Args:
            path: Path to the Parquet file
            read_batch_size: Maximum number of rows per record batch
            columns: Names of the columns to read (default: all, in file order)

        Raises:
            ConfigurationError: If read_batch_size is not positive, the column selection
                is empty or a column is unknown
            IoError: If the file cannot be opened or is not valid Parquet
        """
        if isinstance(read_batch_size, bool) or not isinstance(read_batch_size, int) or read_batch_size <= 0:
            raise ConfigurationError(f"read batch size must be a positive integer, got {read_batch_size!r}")

        self.path = path
        self.read_batch_size = read_batch_size

        if not os.path.exists(path):
            raise IoError("Unable to open file", path=path)
        try:
            self._file = pq.ParquetFile(path)
        except OSError as e:
            raise IoError("Unable to open file", path=path, cause=e) from e
        except pa.ArrowException as e:
            raise IoError("Invalid parquet file", path=path, cause=e) from e

        file_schema = self._file.schema_arrow
        if columns is not None:
            if not columns:
                raise ConfigurationError(f"No columns selected from {path}")
            missing = [name for name in columns if file_schema.get_field_index(name) < 0]
            if missing:
                raise ConfigurationError(f"Columns not found in {path}: {', '.join(missing)}")
            # Batches come back in file order, whatever order was requested
            wanted = set(columns)
            self.schema = pa.schema([field for field in file_schema if field.name in wanted])
            self.columns = self.schema.names
        else:
            self.columns = None
            self.schema = file_schema

        logger.info(f"Opened Parquet file {path}: {self.num_rows} rows, "
                    f"{self._file.num_row_groups} row groups, {len(self.schema)} columns")

    @property
    def num_rows(self) -> int:
        return self._file.metadata.num_rows

    def iter_batches(self) -> Iterator[pa.RecordBatch]:
        """
        Yield the file's record batches in order.

        Raises:
            IoError: If reading fails part way through the file
        """
        try:
            for batch in self._file.iter_batches(batch_size=self.read_batch_size, columns=self.columns):
                yield batch
        except (OSError, pa.ArrowException) as e:
            raise IoError("Error reading parquet file", path=self.path, cause=e) from e

    def close(self) -> None:
        self._file.close()

    def __enter__(self) -> "ParquetSource":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
