"""
Core service for Parquet to MySQL conversion operations.

This module ties the reader, the converter and the dump writer together and is
used by the CLI. It also converts in-memory Arrow tables and Polars DataFrames.
"""
import contextlib
import logging
import time
from typing import Any, Callable, Dict, List, Optional, TextIO, Union

import polars as pl
import pyarrow as pa

from parquet_to_mysql.config import (
    BooleanStyle, DEFAULT_BOOLEAN_STYLE, DEFAULT_READ_BATCH_SIZE, DEFAULT_ROWS_BATCH_SIZE,
    SQL_FOOTER, SQL_HEADER, validate_rows_per_statement
)
from parquet_to_mysql.connectors.parquet_reader import ParquetSource
from parquet_to_mysql.core.converter import InsertConverter
from parquet_to_mysql.exceptions import ConversionError, IoError
from parquet_to_mysql.storage.dump_writer import SqlDumpWriter
from parquet_to_mysql.utils import build_column_clause, quote_identifier, table_name_from_path

logger = logging.getLogger(__name__)


def quote_table_name(table_name: str) -> str:
    """Quote a table name, quoting each part of a qualified "schema.table" name."""
    return ".".join(quote_identifier(part) for part in table_name.split("."))


def _open_sink(sink: Union[TextIO, str]):
    if not isinstance(sink, str):
        return contextlib.nullcontext(sink)
    try:
        return open(sink, "w", encoding="utf-8")
    except OSError as e:
        raise IoError("Unable to open output file", path=sink, cause=e) from e


def convert_parquet_file(
    input_file: str,
    sink: Union[TextIO, str],
    table_name: Optional[str] = None,
    rows_per_statement: int = DEFAULT_ROWS_BATCH_SIZE,
    read_batch_size: int = DEFAULT_READ_BATCH_SIZE,
    boolean_style: BooleanStyle = DEFAULT_BOOLEAN_STYLE,
    include_columns: Optional[List[str]] = None,
    header: Optional[str] = SQL_HEADER,
    footer: Optional[str] = SQL_FOOTER,
    progress_callback: Optional[Callable[[int], None]] = None,
) -> Dict[str, Any]:
    """
    Convert a Parquet file into a MySQL dump of INSERT statements.

    Args:
        input_file: Path to the Parquet file
        sink: Text stream the dump is written to, or a path opened for writing
            once the input file has been opened
        table_name: Target table (may be "schema.table"); defaults to the input
            file name without its extension
        rows_per_statement: Maximum rows per INSERT statement
        read_batch_size: Maximum rows per record batch read from the file
        boolean_style: How booleans are written
        include_columns: Columns to convert (default: all)
        header: Text written before the statements
        footer: Text written after the statements
        progress_callback: Called with the completed percentage after each batch

    Returns:
        Dictionary with conversion statistics

    Raises:
        ConversionError: On the first failure; statements written before it stay written
    """
    start_time = time.time()

    # Validate before touching the file or the sink
    validate_rows_per_statement(rows_per_statement)

    if table_name:
        quoted_table = quote_table_name(table_name)
    else:
        table_name = table_name_from_path(input_file)
        quoted_table = quote_identifier(table_name)

    try:
        with ParquetSource(input_file, read_batch_size=read_batch_size, columns=include_columns) as source:
            converter = InsertConverter.from_arrow_schema(
                source.schema,
                quoted_table,
                column_clause=build_column_clause(source.schema.names),
                rows_per_statement=rows_per_statement,
                boolean_style=boolean_style,
            )
            total_rows = source.num_rows
            processed_rows = 0
            batches = 0
            last_progress = 0

            logger.info(f"Converting {input_file} into INSERT statements for {quoted_table} "
                        f"({rows_per_statement} rows per statement)")

            with _open_sink(sink) as out, SqlDumpWriter(out, header=header, footer=footer) as writer:
                for batch in source.iter_batches():
                    written = writer.write_statements(converter.iter_batch_statements(batch))
                    batches += 1
                    processed_rows += batch.num_rows
                    logger.debug(f"Batch {batches}: {batch.num_rows} rows, {written} statements")

                    if progress_callback and total_rows:
                        current_progress = min(100, int(processed_rows / total_rows * 100))
                        if current_progress > last_progress:
                            last_progress = current_progress
                            progress_callback(current_progress)

        result = {
            'table_name': quoted_table,
            'rows_processed': processed_rows,
            'statements_written': writer.statements_written,
            'batches_processed': batches,
            'duration': time.time() - start_time,
        }
        logger.info(f"Successfully wrote {result['statements_written']} statements "
                    f"({processed_rows} rows) for {quoted_table}")
        return result

    except ConversionError as e:
        logger.error(f"Error converting {input_file}: {str(e)}", exc_info=True)
        raise


def table_to_sql_inserts(
    table: pa.Table,
    table_name: str,
    rows_per_statement: int = DEFAULT_ROWS_BATCH_SIZE,
    boolean_style: BooleanStyle = DEFAULT_BOOLEAN_STYLE,
    max_batch_rows: Optional[int] = None,
) -> List[str]:
    """
    Convert an Arrow table into INSERT statements.

    Each record batch of the table is converted separately, so a statement
    never spans two batches.

    Args:
        table: Arrow table
        table_name: Unquoted target table name (may be "schema.table")
        rows_per_statement: Maximum rows per statement
        boolean_style: How booleans are written
        max_batch_rows: Re-batch the table into batches of at most this many rows

    Returns:
        Statements in row order
    """
    converter = InsertConverter.from_arrow_schema(
        table.schema,
        quote_table_name(table_name),
        column_clause=build_column_clause(table.schema.names),
        rows_per_statement=rows_per_statement,
        boolean_style=boolean_style,
    )
    statements = []
    for batch in table.to_batches(max_chunksize=max_batch_rows):
        statements.extend(converter.iter_batch_statements(batch))
    logger.debug(f"Converted table of {table.num_rows} rows into {len(statements)} statements")
    return statements


def dataframe_to_sql_inserts(
    df: pl.DataFrame,
    table_name: str,
    rows_per_statement: int = DEFAULT_ROWS_BATCH_SIZE,
    boolean_style: BooleanStyle = DEFAULT_BOOLEAN_STYLE,
    max_batch_rows: Optional[int] = None,
) -> List[str]:
    """Convert a Polars DataFrame into INSERT statements (see table_to_sql_inserts)."""
    return table_to_sql_inserts(
        # Oldest compat level gives plain large_string/large_binary columns
        df.to_arrow(compat_level=pl.CompatLevel.oldest()),
        table_name,
        rows_per_statement=rows_per_statement,
        boolean_style=boolean_style,
        max_batch_rows=max_batch_rows,
    )
