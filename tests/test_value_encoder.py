"""
Unit tests for the value encoding module.
"""
import datetime
import math
import unittest
from decimal import Decimal

import pytest

from parquet_to_mysql.config import BooleanStyle
from parquet_to_mysql.core.types import CellKind, CellValue, NULL_CELL, SemanticType
from parquet_to_mysql.core.value_encoder import ValueEncoder, encode_value, escape_string
from parquet_to_mysql.exceptions import EncodingError, UnsupportedType

pytestmark = pytest.mark.core

_UNESCAPES = {"0": "\x00", "n": "\n", "r": "\r", "Z": "\x1a", "\\": "\\", "'": "'", '"': '"'}


def parse_string_literal(literal):
    """Read back a single-quoted MySQL string literal."""
    assert literal[0] == "'" and literal[-1] == "'"
    body = literal[1:-1]
    out = []
    i = 0
    while i < len(body):
        char = body[i]
        if char == "\\":
            out.append(_UNESCAPES[body[i + 1]])
            i += 2
        else:
            # An unescaped quote would end the literal early
            assert char != "'"
            out.append(char)
            i += 1
    return "".join(out)


class TestIntegerEncoding(unittest.TestCase):
    """Test cases for integer literals."""

    def test_plain_digits(self):
        self.assertEqual(encode_value(CellValue.integer(0), SemanticType.INT32), "0")
        self.assertEqual(encode_value(CellValue.integer(1234567), SemanticType.INT64), "1234567")
        self.assertEqual(encode_value(CellValue.integer(-42), SemanticType.INT8), "-42")

    def test_width_limits(self):
        self.assertEqual(encode_value(CellValue.integer(2 ** 64 - 1), SemanticType.UINT64),
                         "18446744073709551615")
        self.assertEqual(encode_value(CellValue.integer(-(2 ** 63)), SemanticType.INT64),
                         "-9223372036854775808")
        self.assertEqual(encode_value(CellValue.integer(127), SemanticType.INT8), "127")

    def test_out_of_range(self):
        with self.assertRaises(EncodingError):
            encode_value(CellValue.integer(128), SemanticType.INT8)
        with self.assertRaises(EncodingError):
            encode_value(CellValue.integer(-1), SemanticType.UINT32)

    def test_bool_is_not_an_integer(self):
        with self.assertRaises(EncodingError):
            encode_value(CellValue.integer(True), SemanticType.INT64)


class TestFloatEncoding(unittest.TestCase):
    """Test cases for float literals."""

    def test_round_trip(self):
        for value in [0.0, 1.5, -2.25, 0.1, 1 / 3, 1e20, 1e-7, 123456789.125, 1.7976931348623157e308]:
            literal = encode_value(CellValue.floating(value), SemanticType.FLOAT64)
            self.assertEqual(float(literal), value, literal)

    def test_float32_value_is_lossless(self):
        # 0.1 stored as float32 reads back as this double
        value = 0.10000000149011612
        literal = encode_value(CellValue.floating(value), SemanticType.FLOAT32)
        self.assertEqual(float(literal), value)

    def test_shortest_representation(self):
        self.assertEqual(encode_value(CellValue.floating(0.1), SemanticType.FLOAT64), "0.1")
        self.assertEqual(encode_value(CellValue.floating(2.0), SemanticType.FLOAT64), "2.0")

    def test_non_finite_values_fail(self):
        for value in [math.nan, math.inf, -math.inf]:
            with self.assertRaises(EncodingError):
                encode_value(CellValue.floating(value), SemanticType.FLOAT64)


class TestBooleanEncoding(unittest.TestCase):
    """Test cases for boolean literals."""

    def test_numeric_style_is_default(self):
        self.assertEqual(encode_value(CellValue.boolean(True), SemanticType.BOOLEAN), "1")
        self.assertEqual(encode_value(CellValue.boolean(False), SemanticType.BOOLEAN), "0")

    def test_keyword_style(self):
        encoder = ValueEncoder(BooleanStyle.KEYWORD)
        self.assertEqual(encoder.encode(CellValue.boolean(True), SemanticType.BOOLEAN), "TRUE")
        self.assertEqual(encoder.encode(CellValue.boolean(False), SemanticType.BOOLEAN), "FALSE")

    def test_non_bool_payload(self):
        with self.assertRaises(EncodingError):
            encode_value(CellValue.boolean(1), SemanticType.BOOLEAN)


class TestTextEncoding(unittest.TestCase):
    """Test cases for string literals."""

    def test_simple_text(self):
        self.assertEqual(encode_value(CellValue.text("a"), SemanticType.UTF8), "'a'")
        self.assertEqual(encode_value(CellValue.text(""), SemanticType.UTF8), "''")

    def test_single_quote(self):
        self.assertEqual(encode_value(CellValue.text("b'c"), SemanticType.UTF8), r"'b\'c'")

    def test_all_escaped_characters(self):
        value = "a\\b'c\"d\ne\rf\x00g\x1ah"
        self.assertEqual(escape_string(value), r"""a\\b\'c\"d\ne\rf\0g\Zh""")

    def test_quote_and_backslash_read_back(self):
        for value in ["it's a \\ path", "\\'", "'\\", "\\\\''", "tab\tstays", "日本語 ' \\ \""]:
            literal = encode_value(CellValue.text(value), SemanticType.LARGE_UTF8)
            self.assertEqual(parse_string_literal(literal), value)

    def test_utf8_bytes_payload(self):
        self.assertEqual(encode_value(CellValue.text("café".encode("utf-8")), SemanticType.UTF8), "'café'")

    def test_malformed_text(self):
        with self.assertRaises(EncodingError):
            encode_value(CellValue.text(b"\xff\xfe"), SemanticType.UTF8)
        with self.assertRaises(EncodingError):
            encode_value(CellValue.text("\ud800"), SemanticType.UTF8)
        with self.assertRaises(EncodingError):
            encode_value(CellValue.text(42), SemanticType.UTF8)


class TestBinaryEncoding(unittest.TestCase):
    """Test cases for binary literals."""

    def test_hex_literal(self):
        self.assertEqual(encode_value(CellValue.binary(b"\x00\xffA"), SemanticType.BINARY), "x'00ff41'")
        self.assertEqual(encode_value(CellValue.binary(bytearray(b"\x10")), SemanticType.BINARY), "x'10'")

    def test_empty_binary(self):
        self.assertEqual(encode_value(CellValue.binary(b""), SemanticType.BINARY), "x''")

    def test_malformed_binary(self):
        with self.assertRaises(EncodingError):
            encode_value(CellValue.binary("00ff"), SemanticType.BINARY)


class TestTemporalEncoding(unittest.TestCase):
    """Test cases for date and timestamp literals."""

    def test_date(self):
        cell = CellValue.date(datetime.date(2024, 1, 5))
        self.assertEqual(encode_value(cell, SemanticType.DATE), "'2024-01-05'")

    def test_datetime_is_not_a_date(self):
        cell = CellValue.date(datetime.datetime(2024, 1, 5, 10, 0))
        with self.assertRaises(EncodingError):
            encode_value(cell, SemanticType.DATE)

    def test_naive_timestamp(self):
        cell = CellValue.timestamp(datetime.datetime(2024, 1, 5, 13, 4, 5))
        self.assertEqual(encode_value(cell, SemanticType.TIMESTAMP), "'2024-01-05 13:04:05'")

    def test_timestamp_fraction(self):
        cell = CellValue.timestamp(datetime.datetime(2024, 1, 5, 13, 4, 5, 120))
        self.assertEqual(encode_value(cell, SemanticType.TIMESTAMP), "'2024-01-05 13:04:05.000120'")

    def test_zoned_timestamp_is_normalized_to_utc(self):
        plus_two = datetime.timezone(datetime.timedelta(hours=2))
        cell = CellValue.timestamp(datetime.datetime(2024, 1, 5, 1, 0, 0, tzinfo=plus_two), timezone="+02:00")
        self.assertEqual(encode_value(cell, SemanticType.TIMESTAMP), "'2024-01-04 23:00:00'")

    def test_utc_timestamp_unchanged(self):
        cell = CellValue.timestamp(datetime.datetime(2024, 6, 1, 12, 30, tzinfo=datetime.timezone.utc), "UTC")
        self.assertEqual(encode_value(cell, SemanticType.TIMESTAMP), "'2024-06-01 12:30:00'")


class TestDecimalEncoding(unittest.TestCase):
    """Test cases for decimal literals."""

    def test_scale_is_preserved(self):
        self.assertEqual(encode_value(CellValue.decimal(Decimal("1.50"), scale=2), SemanticType.DECIMAL), "1.50")
        self.assertEqual(encode_value(CellValue.decimal(Decimal("1.5"), scale=2), SemanticType.DECIMAL), "1.50")
        self.assertEqual(encode_value(CellValue.decimal(Decimal("-0.001"), scale=3), SemanticType.DECIMAL),
                         "-0.001")

    def test_wide_decimal(self):
        value = Decimal("1234567890123456789012345678901234.5678")
        self.assertEqual(encode_value(CellValue.decimal(value, scale=4), SemanticType.DECIMAL),
                         "1234567890123456789012345678901234.5678")

    def test_no_exponent_notation(self):
        self.assertEqual(encode_value(CellValue.decimal(Decimal("1E+3")), SemanticType.DECIMAL), "1000")

    def test_value_finer_than_scale(self):
        with self.assertRaises(EncodingError):
            encode_value(CellValue.decimal(Decimal("1.234"), scale=2), SemanticType.DECIMAL)

    def test_non_finite_decimal(self):
        with self.assertRaises(EncodingError):
            encode_value(CellValue.decimal(Decimal("NaN")), SemanticType.DECIMAL)
        with self.assertRaises(EncodingError):
            encode_value(CellValue.decimal(Decimal("Infinity")), SemanticType.DECIMAL)

    def test_float_is_not_a_decimal(self):
        with self.assertRaises(EncodingError):
            encode_value(CellValue.decimal(1.5), SemanticType.DECIMAL)


class TestNullAndTypeChecks(unittest.TestCase):
    """Test cases for NULL and type dispatch."""

    def test_null_for_every_type(self):
        for semantic_type in SemanticType:
            self.assertEqual(encode_value(NULL_CELL, semantic_type), "NULL")

    def test_kind_mismatch(self):
        with self.assertRaises(EncodingError):
            encode_value(CellValue.text("1"), SemanticType.INT64)
        with self.assertRaises(EncodingError):
            encode_value(CellValue.integer(1), SemanticType.NULL)

    def test_missing_payload(self):
        with self.assertRaises(EncodingError):
            encode_value(CellValue(CellKind.INTEGER, None), SemanticType.INT64)

    def test_unsupported_type(self):
        with self.assertRaises(UnsupportedType):
            encode_value(CellValue.integer(1), "int128")


if __name__ == "__main__":
    unittest.main()
