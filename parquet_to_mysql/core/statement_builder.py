"""
Statement building: renders one chunk of row tuples as an INSERT statement.

Table and column names are passed in already quoted; nothing here quotes
identifiers.
"""
from typing import Optional, Sequence


def build_insert_statement(table_name: str, column_clause: Optional[str], tuples: Sequence[str]) -> str:
    """
    Build "INSERT INTO <table> [(<cols>)] VALUES <t1>,<t2>,...;".

    Args:
        table_name: Quoted table name
        column_clause: Quoted, comma-joined column names; None or empty for a
            positional insert
        tuples: Rendered row tuples, at least one

    Returns:
        Statement text terminated by a single semicolon
    """
    if not tuples:
        raise ValueError("Cannot build an INSERT statement without rows")

    if column_clause:
        prefix = f"INSERT INTO {table_name} ({column_clause}) VALUES "
    else:
        prefix = f"INSERT INTO {table_name} VALUES "
    return prefix + ",".join(tuples) + ";"
