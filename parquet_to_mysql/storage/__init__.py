"""
Output writers
"""
from parquet_to_mysql.storage.dump_writer import SqlDumpWriter
