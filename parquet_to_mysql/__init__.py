"""
Parquet to MySQL - converts Parquet files and Arrow record batches into
multi-row MySQL INSERT statements.
"""
from parquet_to_mysql.config import BooleanStyle, ConversionConfig
from parquet_to_mysql.core.converter import InsertConverter, record_batch_to_sql_inserts
from parquet_to_mysql.exceptions import (
    ConfigurationError, ConversionError, EncodingError, IoError, SchemaMismatchError, UnsupportedType
)

__version__ = "0.1.0"
__all__ = [
    "BooleanStyle",
    "ConversionConfig",
    "InsertConverter",
    "record_batch_to_sql_inserts",
    "ConversionError",
    "ConfigurationError",
    "EncodingError",
    "IoError",
    "SchemaMismatchError",
    "UnsupportedType",
]
