#!/usr/bin/env python3
"""
Parquet to MySQL - CLI tool for converting Parquet files into MySQL INSERT statements.
"""
import logging
import sys
from typing import Optional

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from parquet_to_mysql import __version__
from parquet_to_mysql.config import (
    BooleanStyle, DEFAULT_READ_BATCH_SIZE, DEFAULT_ROWS_BATCH_SIZE,
    ENV_READ_BATCH_SIZE, ENV_ROWS_BATCH_SIZE
)
from parquet_to_mysql.connectors.parquet_reader import ParquetSource
from parquet_to_mysql.core.arrow_schema import columns_from_schema
from parquet_to_mysql.core.conversion_service import convert_parquet_file
from parquet_to_mysql.exceptions import ConversionError
from parquet_to_mysql.utils import format_duration, setup_logging

# stdout carries the SQL, so everything else goes to stderr
console = Console(stderr=True)

logger = logging.getLogger(__name__)


@click.command(name="parquet-to-mysql")
@click.version_option(version=__version__)
@click.argument('input_file', type=click.Path(dir_okay=False))
@click.option('--table-name', '-t',
              help='SQL table name; defaults to the input file name without its extension')
@click.option('--rows-batch-size', '-r', default=DEFAULT_ROWS_BATCH_SIZE, type=int, envvar=ENV_ROWS_BATCH_SIZE,
              show_default=True, help='Number of rows to group into a single INSERT INTO statement')
@click.option('--read-batch-size', default=DEFAULT_READ_BATCH_SIZE, type=int, envvar=ENV_READ_BATCH_SIZE,
              show_default=True, help='Number of rows read from the Parquet file at a time')
@click.option('--boolean-style', type=click.Choice([style.value for style in BooleanStyle]),
              default=BooleanStyle.NUMERIC.value, show_default=True,
              help='Write booleans as 1/0 (numeric) or TRUE/FALSE (keyword)')
@click.option('--columns', help='Comma-separated list of column names to include (default: all)')
@click.option('--output', '-o', type=click.Path(dir_okay=False, writable=True),
              help='Output file (default: stdout)')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose logging')
def convert(input_file: str, table_name: Optional[str], rows_batch_size: int, read_batch_size: int,
            boolean_style: str, columns: Optional[str], output: Optional[str], verbose: bool):
    """
    Convert a Parquet file into a MySQL dump of multi-row INSERT statements.

    The statements are bracketed by the session settings mysqldump writes.
    """
    setup_logging(verbose)

    if rows_batch_size <= 0:
        console.print("[bold red]Error:[/bold red] rows-batch-size must be greater than 0")
        sys.exit(1)

    include_columns = None
    if columns:
        include_columns = [col.strip() for col in columns.split(',') if col.strip()]
        if not include_columns:
            console.print("[bold red]Error:[/bold red] --columns must name at least one column")
            sys.exit(1)
        logger.info(f"Including only these columns: {include_columns}")

    try:
        if output:
            # The output file is only created once the input has been opened
            result = convert_parquet_file(
                input_file, output,
                table_name=table_name,
                rows_per_statement=rows_batch_size,
                read_batch_size=read_batch_size,
                boolean_style=BooleanStyle(boolean_style),
                include_columns=include_columns,
            )
            console.print(f"[bold green]✓[/bold green] Wrote {result['statements_written']} statements "
                          f"({result['rows_processed']} rows) for {result['table_name']} to {output} "
                          f"in {format_duration(result['duration'])}")
        else:
            convert_parquet_file(
                input_file, sys.stdout,
                table_name=table_name,
                rows_per_statement=rows_batch_size,
                read_batch_size=read_batch_size,
                boolean_style=BooleanStyle(boolean_style),
                include_columns=include_columns,
            )
    except ConversionError as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        sys.exit(1)


@click.command(name="parquet-to-mysql-schema")
@click.version_option(version=__version__)
@click.argument('input_file', type=click.Path(dir_okay=False))
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose logging')
def schema(input_file: str, verbose: bool):
    """
    Show how the columns of a Parquet file map to SQL literal types.
    """
    setup_logging(verbose)

    try:
        with ParquetSource(input_file) as source:
            arrow_schema = source.schema
            mapped = columns_from_schema(arrow_schema)
            num_rows = source.num_rows
    except ConversionError as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        sys.exit(1)

    table = Table(title=f"{input_file} ({num_rows} rows)")
    table.add_column("Column")
    table.add_column("Arrow type")
    table.add_column("SQL literal type")
    for field, column in zip(arrow_schema, mapped):
        literal_type = column.semantic_type.value
        if column.scale is not None:
            literal_type += f" (scale {column.scale})"
        if column.timezone:
            literal_type += f" ({column.timezone} -> UTC)"
        table.add_row(field.name, str(field.type), literal_type)
    console.print(table)


# Export the CLI function as main for easy importing
main = convert

if __name__ == '__main__':
    main()
