"""
Configuration settings for the Parquet to MySQL converter.

This module contains default settings and the run configuration shared by the
CLI and the conversion service.
"""
import enum
from dataclasses import dataclass
from typing import Optional

from parquet_to_mysql.exceptions import ConfigurationError

# Default conversion settings
DEFAULT_ROWS_BATCH_SIZE = 100
DEFAULT_READ_BATCH_SIZE = 1024

# Environment variables read by the CLI
ENV_ROWS_BATCH_SIZE = "PARQUET_TO_MYSQL_ROWS_BATCH_SIZE"
ENV_READ_BATCH_SIZE = "PARQUET_TO_MYSQL_READ_BATCH_SIZE"


class BooleanStyle(enum.Enum):
    """How boolean values are written."""
    NUMERIC = "numeric"  # 1 / 0
    KEYWORD = "keyword"  # TRUE / FALSE


DEFAULT_BOOLEAN_STYLE = BooleanStyle.NUMERIC

# Session variables set before the statements and restored after them, in the
# same form mysqldump writes them.
SQL_HEADER = """/*!40101 SET @OLD_CHARACTER_SET_CLIENT=@@CHARACTER_SET_CLIENT */;
/*!40101 SET @OLD_CHARACTER_SET_RESULTS=@@CHARACTER_SET_RESULTS */;
/*!40101 SET @OLD_COLLATION_CONNECTION=@@COLLATION_CONNECTION */;
/*!50503 SET NAMES utf8mb4 */;
/*!40103 SET @OLD_TIME_ZONE=@@TIME_ZONE */;
/*!40103 SET TIME_ZONE='+00:00' */;
/*!40101 SET @OLD_SQL_MODE=@@SQL_MODE, SQL_MODE='NO_AUTO_VALUE_ON_ZERO' */;"""

SQL_FOOTER = """/*!40103 SET TIME_ZONE=@OLD_TIME_ZONE */;
/*!40101 SET SQL_MODE=@OLD_SQL_MODE */;
/*!40101 SET CHARACTER_SET_CLIENT=@OLD_CHARACTER_SET_CLIENT */;
/*!40101 SET CHARACTER_SET_RESULTS=@OLD_CHARACTER_SET_RESULTS */;
/*!40101 SET COLLATION_CONNECTION=@OLD_COLLATION_CONNECTION */;"""


def validate_rows_per_statement(rows_per_statement) -> int:
    """
    Check that the rows-per-statement setting is a positive integer.

    Args:
        rows_per_statement: Configured maximum number of rows per INSERT

    Returns:
        The validated value

    Raises:
        ConfigurationError: If the value is not an integer greater than zero
    """
    if isinstance(rows_per_statement, bool) or not isinstance(rows_per_statement, int):
        raise ConfigurationError(
            f"rows-per-statement must be an integer, got {type(rows_per_statement).__name__}"
        )
    if rows_per_statement <= 0:
        raise ConfigurationError(
            f"rows-per-statement must be greater than 0, got {rows_per_statement}"
        )
    return rows_per_statement


@dataclass(frozen=True)
class ConversionConfig:
    """
    Immutable settings for one conversion run.

    table_name and column_clause arrive already identifier-quoted.
    """
    table_name: str
    column_clause: Optional[str] = None
    rows_per_statement: int = DEFAULT_ROWS_BATCH_SIZE
    boolean_style: BooleanStyle = DEFAULT_BOOLEAN_STYLE

    def __post_init__(self):
        if not self.table_name or not self.table_name.strip():
            raise ConfigurationError("table name must not be empty")
        validate_rows_per_statement(self.rows_per_statement)
        if not isinstance(self.boolean_style, BooleanStyle):
            raise ConfigurationError(f"invalid boolean style: {self.boolean_style!r}")
