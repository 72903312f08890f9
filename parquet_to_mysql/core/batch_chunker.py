"""
Batch chunking: splits the rows of one batch into groups of at most N rows.

Each group becomes one INSERT statement. Chunking restarts for every batch, so
a batch of R rows always yields ceil(R / N) groups and batch boundaries always
fall on statement boundaries.
"""
from itertools import islice
from typing import Iterable, Iterator, List, TypeVar

from parquet_to_mysql.config import validate_rows_per_statement

T = TypeVar("T")

__all__ = ["chunk_rows", "count_chunks", "validate_rows_per_statement"]


def chunk_rows(rows: Iterable[T], rows_per_statement: int) -> Iterator[List[T]]:
    """
    Split rows into consecutive groups of at most ``rows_per_statement`` rows.

    Args:
        rows: Rows of a single batch
        rows_per_statement: Maximum group size, a positive integer

    Returns:
        Iterator over non-empty lists of rows; only the last may be shorter than the maximum

    Raises:
        ConfigurationError: If rows_per_statement is not a positive integer; checked
            before any row is consumed
    """
    validate_rows_per_statement(rows_per_statement)
    return _iter_chunks(iter(rows), rows_per_statement)


def _iter_chunks(iterator: Iterator[T], size: int) -> Iterator[List[T]]:
    while True:
        chunk = list(islice(iterator, size))
        if not chunk:
            return
        yield chunk


def count_chunks(row_count: int, rows_per_statement: int) -> int:
    """Number of statements a batch of ``row_count`` rows produces."""
    validate_rows_per_statement(rows_per_statement)
    return -(-row_count // rows_per_statement)
