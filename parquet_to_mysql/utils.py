"""
Utility functions for the Parquet to MySQL converter.
"""
import logging
import os
import sys
from typing import Iterable


def setup_logging(verbose: bool = False) -> logging.Logger:
    """
    Set up logging configuration.

    Log records go to stderr; stdout is reserved for the generated SQL.

    Args:
        verbose: Enable DEBUG level logging

    Returns:
        Logger instance for the package
    """
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
        force=True,
    )
    return logging.getLogger("parquet_to_mysql")


def quote_identifier(name: str) -> str:
    """Quote a MySQL identifier with backticks, doubling embedded backticks."""
    return "`" + str(name).replace("`", "``") + "`"


def build_column_clause(names: Iterable[str]) -> str:
    """
    Build the column-list clause of an INSERT statement.

    Args:
        names: Column names in schema order

    Returns:
        Comma-joined quoted names, e.g. "`id`,`name`"
    """
    return ",".join(quote_identifier(name) for name in names)


def table_name_from_path(file_path: str) -> str:
    """
    Derive a table name from an input file name by dropping its last extension.

    "data/users.parquet" -> "users"; a name without an extension is kept as is.
    """
    file_name = os.path.basename(file_path)
    stem, _ = os.path.splitext(file_name)
    return stem or file_name


def format_duration(seconds: float) -> str:
    """Format a duration in seconds as a short human readable string."""
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    if seconds < 60:
        return f"{seconds:.2f}s"
    minutes, secs = divmod(int(seconds), 60)
    if minutes < 60:
        return f"{minutes}m {secs}s"
    hours, minutes = divmod(minutes, 60)
    return f"{hours}h {minutes}m {secs}s"
