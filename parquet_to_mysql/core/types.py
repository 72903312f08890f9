"""
Column and cell value types used by the conversion core.
"""
import datetime
import enum
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Optional, Union


class SemanticType(enum.Enum):
    """Domain-level column types that have a SQL literal mapping."""
    INT8 = "int8"
    INT16 = "int16"
    INT32 = "int32"
    INT64 = "int64"
    UINT8 = "uint8"
    UINT16 = "uint16"
    UINT32 = "uint32"
    UINT64 = "uint64"
    FLOAT32 = "float32"
    FLOAT64 = "float64"
    BOOLEAN = "boolean"
    UTF8 = "utf8"
    LARGE_UTF8 = "large_utf8"
    BINARY = "binary"
    DATE = "date"
    TIMESTAMP = "timestamp"
    DECIMAL = "decimal"
    NULL = "null"


class CellKind(enum.Enum):
    """Tag of a decoded cell value."""
    NULL = "null"
    INTEGER = "integer"
    FLOAT = "float"
    BOOL = "bool"
    TEXT = "text"
    BYTES = "bytes"
    DATE = "date"
    TIMESTAMP = "timestamp"
    DECIMAL = "decimal"


# Inclusive value range of each fixed-width integer type
INTEGER_RANGES = {
    SemanticType.INT8: (-(2 ** 7), 2 ** 7 - 1),
    SemanticType.INT16: (-(2 ** 15), 2 ** 15 - 1),
    SemanticType.INT32: (-(2 ** 31), 2 ** 31 - 1),
    SemanticType.INT64: (-(2 ** 63), 2 ** 63 - 1),
    SemanticType.UINT8: (0, 2 ** 8 - 1),
    SemanticType.UINT16: (0, 2 ** 16 - 1),
    SemanticType.UINT32: (0, 2 ** 32 - 1),
    SemanticType.UINT64: (0, 2 ** 64 - 1),
}

# The one cell kind each semantic type accepts besides NULL
EXPECTED_KINDS = {
    **{semantic_type: CellKind.INTEGER for semantic_type in INTEGER_RANGES},
    SemanticType.FLOAT32: CellKind.FLOAT,
    SemanticType.FLOAT64: CellKind.FLOAT,
    SemanticType.BOOLEAN: CellKind.BOOL,
    SemanticType.UTF8: CellKind.TEXT,
    SemanticType.LARGE_UTF8: CellKind.TEXT,
    SemanticType.BINARY: CellKind.BYTES,
    SemanticType.DATE: CellKind.DATE,
    SemanticType.TIMESTAMP: CellKind.TIMESTAMP,
    SemanticType.DECIMAL: CellKind.DECIMAL,
    SemanticType.NULL: CellKind.NULL,
}


@dataclass(frozen=True)
class Column:
    """
    One schema column.

    Attributes:
        name: Column name (unquoted)
        semantic_type: Value kind of the column
        scale: Decimal scale, only for DECIMAL columns
        timezone: Time zone of a TIMESTAMP column, None for naive timestamps
    """
    name: str
    semantic_type: SemanticType
    scale: Optional[int] = None
    timezone: Optional[str] = None


@dataclass(frozen=True)
class CellValue:
    """
    A decoded cell: a kind tag, the Python value and the metadata needed to
    render it (decimal scale, timestamp zone).
    """
    kind: CellKind
    value: Any = None
    scale: Optional[int] = None
    timezone: Optional[str] = None

    @property
    def is_null(self) -> bool:
        return self.kind is CellKind.NULL

    @classmethod
    def null(cls) -> "CellValue":
        return NULL_CELL

    @classmethod
    def integer(cls, value: int) -> "CellValue":
        return cls(CellKind.INTEGER, value)

    @classmethod
    def floating(cls, value: float) -> "CellValue":
        return cls(CellKind.FLOAT, value)

    @classmethod
    def boolean(cls, value: bool) -> "CellValue":
        return cls(CellKind.BOOL, value)

    @classmethod
    def text(cls, value: Union[str, bytes]) -> "CellValue":
        return cls(CellKind.TEXT, value)

    @classmethod
    def binary(cls, value: bytes) -> "CellValue":
        return cls(CellKind.BYTES, value)

    @classmethod
    def date(cls, value: datetime.date) -> "CellValue":
        return cls(CellKind.DATE, value)

    @classmethod
    def timestamp(cls, value: datetime.datetime, timezone: Optional[str] = None) -> "CellValue":
        return cls(CellKind.TIMESTAMP, value, timezone=timezone)

    @classmethod
    def decimal(cls, value: Decimal, scale: Optional[int] = None) -> "CellValue":
        return cls(CellKind.DECIMAL, value, scale=scale)


NULL_CELL = CellValue(CellKind.NULL)
