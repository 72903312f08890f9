"""
Data source connectors
"""
from parquet_to_mysql.connectors.parquet_reader import ParquetSource
