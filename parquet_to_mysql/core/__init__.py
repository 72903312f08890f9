"""
Core modules for Parquet to MySQL conversion
"""
from parquet_to_mysql.core.types import CellKind, CellValue, Column, SemanticType
from parquet_to_mysql.core.value_encoder import ValueEncoder, encode_value, escape_string
from parquet_to_mysql.core.row_assembler import assemble_row
from parquet_to_mysql.core.batch_chunker import chunk_rows, count_chunks
from parquet_to_mysql.core.statement_builder import build_insert_statement
from parquet_to_mysql.core.arrow_schema import column_from_field, columns_from_schema, decode_column
from parquet_to_mysql.core.converter import InsertConverter, record_batch_to_sql_inserts
