"""
Pytest configuration and fixtures for Parquet to MySQL tests.
"""
import datetime
import logging
from decimal import Decimal

import pyarrow as pa
import pyarrow.parquet as pq
import pytest


# Define test markers
def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "core: tests of the in-memory conversion core"
    )
    config.addinivalue_line(
        "markers", "parquet: tests that read or write Parquet files"
    )


@pytest.fixture
def users_table():
    """Small table covering the common column types."""
    return pa.table({
        "id": pa.array([1, 2, 3, 4, 5], type=pa.int64()),
        "name": pa.array(["alice", "b'ob", None, "dave", "eve\\"], type=pa.string()),
        "active": pa.array([True, False, None, True, False], type=pa.bool_()),
        "balance": pa.array(
            [Decimal("10.50"), Decimal("-3.25"), None, Decimal("0.00"), Decimal("99.99")],
            type=pa.decimal128(10, 2),
        ),
        "joined": pa.array(
            [datetime.date(2024, 1, 5), None, datetime.date(2023, 12, 31),
             datetime.date(2020, 2, 29), datetime.date(1999, 1, 1)],
            type=pa.date32(),
        ),
    })


@pytest.fixture
def write_parquet(tmp_path):
    """Factory writing a table to a Parquet file under tmp_path."""
    def _write(table, name="users.parquet", **kwargs):
        path = tmp_path / name
        pq.write_table(table, str(path), **kwargs)
        return str(path)
    return _write


@pytest.fixture(autouse=True)
def restore_logging():
    """Undo logging configuration done by CLI commands."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
