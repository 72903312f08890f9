"""
Mapping between Arrow schemas/arrays and the conversion core's columns and cells.
"""
import datetime
import logging
from typing import List, Union

import pyarrow as pa

from parquet_to_mysql.core.types import (
    CellValue, Column, SemanticType, EXPECTED_KINDS, NULL_CELL
)
from parquet_to_mysql.exceptions import EncodingError, UnsupportedType

logger = logging.getLogger(__name__)

_EPOCH = datetime.datetime(1970, 1, 1)

# Multiplier/divisor turning a timestamp count of each unit into microseconds
_MICROS_PER_UNIT = {"s": 1_000_000, "ms": 1_000, "us": 1}
_NANOS_PER_MICRO = 1_000


def column_from_field(field: pa.Field) -> Column:
    """
    Convert an Arrow field to a schema Column.

    Args:
        field: PyArrow field

    Returns:
        Column with the field's name and semantic type

    Raises:
        UnsupportedType: If the Arrow type has no SQL literal mapping
    """
    pa_type = field.type

    # Dictionary-encoded columns are written as their values
    if pa.types.is_dictionary(pa_type):
        pa_type = pa_type.value_type

    # Integer types
    if pa.types.is_int8(pa_type):
        return Column(field.name, SemanticType.INT8)
    elif pa.types.is_int16(pa_type):
        return Column(field.name, SemanticType.INT16)
    elif pa.types.is_int32(pa_type):
        return Column(field.name, SemanticType.INT32)
    elif pa.types.is_int64(pa_type):
        return Column(field.name, SemanticType.INT64)
    elif pa.types.is_uint8(pa_type):
        return Column(field.name, SemanticType.UINT8)
    elif pa.types.is_uint16(pa_type):
        return Column(field.name, SemanticType.UINT16)
    elif pa.types.is_uint32(pa_type):
        return Column(field.name, SemanticType.UINT32)
    elif pa.types.is_uint64(pa_type):
        return Column(field.name, SemanticType.UINT64)

    # Floating point types
    elif pa.types.is_float32(pa_type):
        return Column(field.name, SemanticType.FLOAT32)
    elif pa.types.is_float64(pa_type):
        return Column(field.name, SemanticType.FLOAT64)

    elif pa.types.is_boolean(pa_type):
        return Column(field.name, SemanticType.BOOLEAN)

    # String and binary types
    elif pa.types.is_string(pa_type) or pa.types.is_string_view(pa_type):
        return Column(field.name, SemanticType.UTF8)
    elif pa.types.is_large_string(pa_type):
        return Column(field.name, SemanticType.LARGE_UTF8)
    elif (pa.types.is_binary(pa_type) or pa.types.is_large_binary(pa_type)
          or pa.types.is_fixed_size_binary(pa_type) or pa.types.is_binary_view(pa_type)):
        return Column(field.name, SemanticType.BINARY)

    # Temporal types
    elif pa.types.is_date(pa_type):
        return Column(field.name, SemanticType.DATE)
    elif pa.types.is_timestamp(pa_type):
        return Column(field.name, SemanticType.TIMESTAMP, timezone=pa_type.tz)

    # Decimal type
    elif pa.types.is_decimal(pa_type):
        return Column(field.name, SemanticType.DECIMAL, scale=pa_type.scale)

    elif pa.types.is_null(pa_type):
        return Column(field.name, SemanticType.NULL)

    # float16, time, duration, interval, nested types...
    raise UnsupportedType(str(field.type), column=field.name)


def columns_from_schema(schema: pa.Schema) -> List[Column]:
    """Convert every field of an Arrow schema, keeping field order."""
    columns = [column_from_field(field) for field in schema]
    logger.debug(f"Mapped Arrow schema to columns: {[(c.name, c.semantic_type.value) for c in columns]}")
    return columns


def decode_column(array: Union[pa.Array, pa.ChunkedArray], column: Column) -> List[CellValue]:
    """
    Decode an Arrow column into cell values.

    Args:
        array: Column data, chunked or not
        column: Schema column the data belongs to

    Returns:
        One CellValue per row

    Raises:
        EncodingError: If a value cannot be converted to a Python value
    """
    if isinstance(array, pa.ChunkedArray):
        cells = []
        for chunk in array.chunks:
            cells.extend(_decode_array(chunk, column, offset=len(cells)))
        return cells
    return _decode_array(array, column)


def _decode_array(array: pa.Array, column: Column, offset: int = 0) -> List[CellValue]:
    if pa.types.is_dictionary(array.type):
        array = array.dictionary_decode()

    semantic_type = column.semantic_type
    if semantic_type is SemanticType.NULL:
        return [NULL_CELL] * len(array)
    if semantic_type is SemanticType.TIMESTAMP:
        return _decode_timestamps(array, column, offset)

    kind = EXPECTED_KINDS[semantic_type]
    try:
        values = array.to_pylist()
    except (pa.ArrowException, ValueError, OverflowError) as e:
        raise EncodingError(f"Cannot decode {array.type} values", column=column.name, cause=e) from e

    if semantic_type is SemanticType.DECIMAL:
        return [NULL_CELL if v is None else CellValue(kind, v, scale=column.scale) for v in values]
    return [NULL_CELL if v is None else CellValue(kind, v) for v in values]


def _decode_timestamps(array: pa.Array, column: Column, offset: int = 0) -> List[CellValue]:
    # Work from the raw epoch counts so nanosecond data needs no pandas.
    # Values of a zoned timestamp are UTC instants.
    unit = array.type.unit
    counts = array.cast(pa.int64()).to_pylist()
    tzinfo = datetime.timezone.utc if column.timezone else None

    cells = []
    for row, count in enumerate(counts, start=offset):
        if count is None:
            cells.append(NULL_CELL)
            continue
        if unit == "ns":
            # Sub-microsecond precision is truncated
            micros = count // _NANOS_PER_MICRO
        else:
            micros = count * _MICROS_PER_UNIT[unit]
        try:
            value = _EPOCH + datetime.timedelta(microseconds=micros)
        except OverflowError as e:
            raise EncodingError(
                f"Timestamp {count} ({unit}) is out of range", column=column.name, row=row, cause=e
            ) from e
        if tzinfo is not None:
            value = value.replace(tzinfo=tzinfo)
        cells.append(CellValue.timestamp(value, timezone=column.timezone))
    return cells
