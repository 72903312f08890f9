"""
SQL dump writer: writes the session header, the statements and the footer to
one sequential text sink.
"""
import logging
from typing import Iterable, Optional, TextIO

from parquet_to_mysql.config import SQL_FOOTER, SQL_HEADER
from parquet_to_mysql.exceptions import IoError

logger = logging.getLogger(__name__)


class SqlDumpWriter:
    """
    Writes a MySQL dump to a text sink.

    Used as a context manager the header is written on enter and the footer on
    a clean exit. Nothing is buffered beyond what the sink itself buffers, so
    statements written before a failure stay written.
    """

    def __init__(self, sink: TextIO, header: Optional[str] = SQL_HEADER, footer: Optional[str] = SQL_FOOTER):
        """
        Initialize a dump writer.

        Args:
            sink: Writable text stream (file or stdout)
            header: Text written before the statements, None to skip
            footer: Text written after the statements, None to skip
        """
        self.sink = sink
        self.header = header
        self.footer = footer
        self.statements_written = 0

    def write_header(self) -> None:
        if self.header:
            self._write_line(self.header)

    def write_footer(self) -> None:
        if self.footer:
            self._write_line(self.footer)

    def write_statements(self, statements: Iterable[str]) -> int:
        """
        Write statements one per line.

        Args:
            statements: Statement texts, each ending with a semicolon

        Returns:
            Number of statements written by this call
        """
        count = 0
        for statement in statements:
            self._write_line(statement)
            count += 1
        self.statements_written += count
        return count

    def flush(self) -> None:
        try:
            self.sink.flush()
        except OSError as e:
            raise IoError("Failed to flush output", path=self._sink_name(), cause=e) from e

    def _write_line(self, text: str) -> None:
        try:
            self.sink.write(text)
            self.sink.write("\n")
        except OSError as e:
            raise IoError("Failed to write output", path=self._sink_name(), cause=e) from e

    def _sink_name(self) -> Optional[str]:
        name = getattr(self.sink, "name", None)
        return name if isinstance(name, str) else None

    def __enter__(self) -> "SqlDumpWriter":
        self.write_header()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is None:
            self.write_footer()
            self.flush()
            logger.debug(f"Wrote {self.statements_written} statements")
