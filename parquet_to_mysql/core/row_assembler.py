"""
Row assembly: renders one row of cells as a parenthesized VALUES tuple.
"""
from typing import Optional, Sequence

from parquet_to_mysql.core.types import CellValue, Column
from parquet_to_mysql.core.value_encoder import ValueEncoder
from parquet_to_mysql.exceptions import ConversionError, SchemaMismatchError


def assemble_row(
    values: Sequence[CellValue],
    columns: Sequence[Column],
    encoder: ValueEncoder,
    row_index: Optional[int] = None,
) -> str:
    """
    Render one row as "(lit_1,lit_2,...,lit_k)".

    Literals are emitted in exactly the order of ``columns``, which must be the
    order used to build the statement's column clause.

    Args:
        values: Cell values in schema order
        columns: Schema columns
        encoder: Encoder configured for the run
        row_index: Position of the row within its batch, used in error messages

    Returns:
        Tuple text
    """
    if len(values) != len(columns):
        raise SchemaMismatchError(
            f"Row has {len(values)} values but the schema has {len(columns)} columns",
            row=row_index,
        )

    literals = []
    for value, column in zip(values, columns):
        try:
            literals.append(encoder.encode(value, column.semantic_type))
        except ConversionError as e:
            raise e.add_context(column=column.name, row=row_index)
    return "(" + ",".join(literals) + ")"
