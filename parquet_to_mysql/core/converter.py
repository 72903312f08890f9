"""
Insert conversion: turns record batches into multi-row INSERT statements.

An InsertConverter holds the run's immutable schema and configuration. Every
batch is converted on its own: columns are decoded once, rows are rendered in
schema order, grouped into chunks of at most rows_per_statement rows and each
chunk becomes one statement.
"""
import logging
from typing import Iterable, Iterator, List, Optional, Sequence

import pyarrow as pa

from parquet_to_mysql.config import (
    BooleanStyle, ConversionConfig, DEFAULT_BOOLEAN_STYLE, DEFAULT_ROWS_BATCH_SIZE
)
from parquet_to_mysql.core.arrow_schema import column_from_field, columns_from_schema, decode_column
from parquet_to_mysql.core.batch_chunker import chunk_rows
from parquet_to_mysql.core.row_assembler import assemble_row
from parquet_to_mysql.core.statement_builder import build_insert_statement
from parquet_to_mysql.core.types import CellValue, Column
from parquet_to_mysql.core.value_encoder import ValueEncoder
from parquet_to_mysql.exceptions import ConfigurationError, SchemaMismatchError

logger = logging.getLogger(__name__)


class InsertConverter:
    """Converts batches that share one schema into INSERT statements."""

    def __init__(self, columns: Sequence[Column], config: ConversionConfig,
                 arrow_schema: Optional[pa.Schema] = None):
        """
        Initialize a converter.

        Args:
            columns: Schema columns, in the order of the config's column clause
            config: Validated run configuration
            arrow_schema: Arrow schema the columns were mapped from, if any

        Raises:
            ConfigurationError: If there are no columns
        """
        self.columns = tuple(columns)
        if not self.columns:
            raise ConfigurationError(f"No columns to insert into {config.table_name}")
        self.arrow_schema = arrow_schema
        self.config = config
        self.encoder = ValueEncoder(config.boolean_style)
        logger.debug(f"Initialized InsertConverter for {config.table_name} with {len(self.columns)} columns, "
                     f"rows_per_statement={config.rows_per_statement}")

    @classmethod
    def from_arrow_schema(
        cls,
        schema: pa.Schema,
        table_name: str,
        column_clause: Optional[str] = None,
        rows_per_statement: int = DEFAULT_ROWS_BATCH_SIZE,
        boolean_style: BooleanStyle = DEFAULT_BOOLEAN_STYLE,
    ) -> "InsertConverter":
        """Build a converter from an Arrow schema and run settings."""
        config = ConversionConfig(
            table_name=table_name,
            column_clause=column_clause,
            rows_per_statement=rows_per_statement,
            boolean_style=boolean_style,
        )
        return cls(columns_from_schema(schema), config, arrow_schema=schema)

    def iter_batch_statements(self, batch: pa.RecordBatch) -> Iterator[str]:
        """
        Return an iterator over the statements for one batch, in row order.

        Columns are decoded up front; statements are rendered chunk by chunk,
        so a failing value stops iteration at its chunk after the statements of
        earlier chunks have been yielded.
        """
        self._check_batch_schema(batch.schema)
        decoded = [decode_column(batch.column(i), column) for i, column in enumerate(self.columns)]
        return self._iter_statements(zip(*decoded))

    def convert_batch(self, batch: pa.RecordBatch) -> List[str]:
        """Convert one batch into its list of statements."""
        statements = list(self.iter_batch_statements(batch))
        logger.debug(f"Converted batch of {batch.num_rows} rows into {len(statements)} statements")
        return statements

    def convert_rows(self, rows: Iterable[Sequence[CellValue]]) -> List[str]:
        """Convert rows of already decoded cells, treated as one batch."""
        return list(self._iter_statements(rows))

    def _iter_statements(self, rows: Iterable[Sequence[CellValue]]) -> Iterator[str]:
        row_index = 0
        for chunk in chunk_rows(rows, self.config.rows_per_statement):
            tuples = []
            for row in chunk:
                tuples.append(assemble_row(row, self.columns, self.encoder, row_index))
                row_index += 1
            yield build_insert_statement(self.config.table_name, self.config.column_clause, tuples)

    def _check_batch_schema(self, schema: pa.Schema) -> None:
        if len(schema) != len(self.columns):
            raise SchemaMismatchError(
                f"Batch has {len(schema)} columns but the schema has {len(self.columns)}"
            )
        if self.arrow_schema is not None and schema.equals(self.arrow_schema, check_metadata=False):
            return
        for expected, field in zip(self.columns, schema):
            actual = column_from_field(field)
            if expected != actual:
                raise SchemaMismatchError(
                    f"Batch column {actual.name!r} ({actual.semantic_type.value}) does not match "
                    f"schema column {expected.name!r} ({expected.semantic_type.value})",
                    column=expected.name,
                )


def record_batch_to_sql_inserts(
    batch: pa.RecordBatch,
    table_name: str,
    column_clause: Optional[str],
    rows_per_statement: int,
    boolean_style: BooleanStyle = DEFAULT_BOOLEAN_STYLE,
) -> str:
    """
    Convert a single record batch into newline separated INSERT statements.

    Args:
        batch: Record batch to convert
        table_name: Quoted table name
        column_clause: Quoted, comma-joined column names, or None
        rows_per_statement: Maximum rows per statement
        boolean_style: How booleans are written

    Returns:
        Statements joined by newlines (empty string for an empty batch)
    """
    converter = InsertConverter.from_arrow_schema(
        batch.schema,
        table_name,
        column_clause=column_clause,
        rows_per_statement=rows_per_statement,
        boolean_style=boolean_style,
    )
    return "\n".join(converter.convert_batch(batch))
