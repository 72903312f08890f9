"""
Value encoding module: renders one typed cell as MySQL literal text.

Each semantic type accepts a single cell kind. A null cell is always written
as the bare keyword NULL, whatever the column type.
"""
import datetime
import decimal
import logging
import math
from typing import Callable, Dict

from parquet_to_mysql.config import BooleanStyle, DEFAULT_BOOLEAN_STYLE
from parquet_to_mysql.core.types import (
    CellKind, CellValue, SemanticType, EXPECTED_KINDS, INTEGER_RANGES
)
from parquet_to_mysql.exceptions import EncodingError, UnsupportedType

logger = logging.getLogger(__name__)

NULL_LITERAL = "NULL"

# Characters escaped by mysql_real_escape_string
_TEXT_ESCAPES = str.maketrans({
    "\\": "\\\\",
    "'": "\\'",
    '"': '\\"',
    "\n": "\\n",
    "\r": "\\r",
    "\x00": "\\0",
    "\x1a": "\\Z",
})

_BOOLEAN_LITERALS = {
    BooleanStyle.NUMERIC: ("1", "0"),
    BooleanStyle.KEYWORD: ("TRUE", "FALSE"),
}

# Enough digits for decimal256 values
_DECIMAL_CONTEXT = decimal.Context(prec=100)


def escape_string(value: str) -> str:
    """Escape a string for use inside a single-quoted MySQL literal."""
    return value.translate(_TEXT_ESCAPES)


class ValueEncoder:
    """
    Renders CellValues as SQL literals.

    The boolean style is fixed when the encoder is built so that every value
    of a run is written the same way. Aware timestamps are always normalized
    to UTC.
    """

    def __init__(self, boolean_style: BooleanStyle = DEFAULT_BOOLEAN_STYLE):
        """
        Initialize a value encoder.

        Args:
            boolean_style: NUMERIC writes 1/0, KEYWORD writes TRUE/FALSE
        """
        if boolean_style not in _BOOLEAN_LITERALS:
            raise ValueError(f"Unsupported boolean style: {boolean_style!r}")
        self.boolean_style = boolean_style
        self._true_literal, self._false_literal = _BOOLEAN_LITERALS[boolean_style]
        self._encoders: Dict[CellKind, Callable[[CellValue, SemanticType], str]] = {
            CellKind.INTEGER: self._encode_integer,
            CellKind.FLOAT: self._encode_float,
            CellKind.BOOL: self._encode_bool,
            CellKind.TEXT: self._encode_text,
            CellKind.BYTES: self._encode_bytes,
            CellKind.DATE: self._encode_date,
            CellKind.TIMESTAMP: self._encode_timestamp,
            CellKind.DECIMAL: self._encode_decimal,
        }

    def encode(self, cell: CellValue, semantic_type: SemanticType) -> str:
        """
        Render one cell as literal text.

        Args:
            cell: Decoded cell value
            semantic_type: Declared type of the cell's column

        Returns:
            SQL literal text

        Raises:
            UnsupportedType: If the semantic type has no literal mapping
            EncodingError: If the value cannot be written exactly
        """
        expected_kind = EXPECTED_KINDS.get(semantic_type)
        if expected_kind is None:
            raise UnsupportedType(str(semantic_type))

        if cell.kind is CellKind.NULL:
            return NULL_LITERAL
        if cell.value is None:
            raise EncodingError(f"{cell.kind.value} cell has no value")
        if cell.kind is not expected_kind:
            raise EncodingError(
                f"Cannot write a {cell.kind.value} value into a {semantic_type.value} column"
            )
        return self._encoders[cell.kind](cell, semantic_type)

    def _encode_integer(self, cell: CellValue, semantic_type: SemanticType) -> str:
        value = cell.value
        if isinstance(value, bool) or not isinstance(value, int):
            raise EncodingError(f"Expected an integer, got {type(value).__name__}")
        low, high = INTEGER_RANGES[semantic_type]
        if not low <= value <= high:
            raise EncodingError(f"Integer {value} out of range for {semantic_type.value}")
        return str(value)

    def _encode_float(self, cell: CellValue, semantic_type: SemanticType) -> str:
        value = cell.value
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise EncodingError(f"Expected a float, got {type(value).__name__}")
        value = float(value)
        if not math.isfinite(value):
            raise EncodingError(f"Non-finite float {value!r} has no SQL literal")
        # repr gives the shortest text that reads back as the same double
        return repr(value)

    def _encode_bool(self, cell: CellValue, semantic_type: SemanticType) -> str:
        if not isinstance(cell.value, bool):
            raise EncodingError(f"Expected a boolean, got {type(cell.value).__name__}")
        return self._true_literal if cell.value else self._false_literal

    def _encode_text(self, cell: CellValue, semantic_type: SemanticType) -> str:
        value = cell.value
        if isinstance(value, (bytes, bytearray, memoryview)):
            try:
                value = bytes(value).decode("utf-8")
            except UnicodeDecodeError as e:
                raise EncodingError("Text value is not valid UTF-8", cause=e) from e
        elif not isinstance(value, str):
            raise EncodingError(f"Expected text, got {type(value).__name__}")
        else:
            try:
                value.encode("utf-8")
            except UnicodeEncodeError as e:
                raise EncodingError("Text value cannot be encoded as UTF-8", cause=e) from e
        return f"'{escape_string(value)}'"

    def _encode_bytes(self, cell: CellValue, semantic_type: SemanticType) -> str:
        value = cell.value
        if not isinstance(value, (bytes, bytearray, memoryview)):
            raise EncodingError(f"Expected binary data, got {type(value).__name__}")
        return f"x'{bytes(value).hex()}'"

    def _encode_date(self, cell: CellValue, semantic_type: SemanticType) -> str:
        value = cell.value
        if isinstance(value, datetime.datetime) or not isinstance(value, datetime.date):
            raise EncodingError(f"Expected a date, got {type(value).__name__}")
        return f"'{value.isoformat()}'"

    def _encode_timestamp(self, cell: CellValue, semantic_type: SemanticType) -> str:
        value = cell.value
        if not isinstance(value, datetime.datetime):
            raise EncodingError(f"Expected a timestamp, got {type(value).__name__}")
        if value.tzinfo is not None:
            try:
                value = value.astimezone(datetime.timezone.utc).replace(tzinfo=None)
            except (OverflowError, ValueError) as e:
                raise EncodingError(f"Cannot normalize {value!r} to UTC", cause=e) from e
        # isoformat only writes the fraction when microseconds are non-zero
        return f"'{value.isoformat(sep=' ')}'"

    def _encode_decimal(self, cell: CellValue, semantic_type: SemanticType) -> str:
        value = cell.value
        if not isinstance(value, decimal.Decimal):
            raise EncodingError(f"Expected a decimal, got {type(value).__name__}")
        if not value.is_finite():
            raise EncodingError(f"Non-finite decimal {value!r} has no SQL literal")
        if cell.scale is not None and cell.scale >= 0:
            exponent = decimal.Decimal(1).scaleb(-cell.scale)
            try:
                quantized = value.quantize(exponent, context=_DECIMAL_CONTEXT)
            except decimal.InvalidOperation as e:
                raise EncodingError(f"Decimal {value} does not fit scale {cell.scale}", cause=e) from e
            if quantized != value:
                raise EncodingError(f"Decimal {value} has more than {cell.scale} fractional digits")
            value = quantized
        return format(value, "f")


_default_encoder = ValueEncoder()


def encode_value(cell: CellValue, semantic_type: SemanticType) -> str:
    """Render one cell with the default encoder settings."""
    return _default_encoder.encode(cell, semantic_type)
