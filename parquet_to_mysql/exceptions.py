"""
Exception types raised by the Parquet to MySQL conversion.

Every error is fatal to a run. The CLI is the only place these are caught.
"""
from typing import Optional


class ConversionError(Exception):
    """
    Base exception for all conversion-related errors.

    Carries optional context (column name, row index within the batch and the
    underlying cause) which is rendered into the message.
    """
    def __init__(self, message: str, column: Optional[str] = None, row: Optional[int] = None,
                 cause: Optional[BaseException] = None):
        self.message = message
        self.column = column
        self.row = row
        self.cause = cause
        super().__init__(self._details())

    def _details(self) -> str:
        details = f"{self.message}"
        if self.column is not None:
            details += f" | Column: {self.column}"
        if self.row is not None:
            details += f" | Row: {self.row}"
        if self.cause is not None:
            details += f" | Cause: {repr(self.cause)}"
        return details

    def add_context(self, column: Optional[str] = None, row: Optional[int] = None) -> "ConversionError":
        """Attach column/row context if not already present and refresh the message."""
        if column is not None and self.column is None:
            self.column = column
        if row is not None and self.row is None:
            self.row = row
        self.args = (self._details(),)
        return self


class ConfigurationError(ConversionError):
    """
    Raised when the run configuration is invalid (e.g. rows-per-statement <= 0).
    """


class UnsupportedType(ConversionError):
    """
    Raised when a column type has no SQL literal mapping.
    """
    def __init__(self, type_name: str, column: Optional[str] = None, cause: Optional[BaseException] = None):
        self.type_name = type_name
        message = f"Unsupported column type: {type_name}"
        super().__init__(message, column=column, cause=cause)


class EncodingError(ConversionError):
    """
    Raised when a value cannot be rendered as an exact SQL literal.
    """


class SchemaMismatchError(ConversionError):
    """
    Raised when a batch or row does not have the shape of the run schema.
    """


class IoError(ConversionError):
    """
    Raised by the reader and writer when the source or sink fails.
    """
    def __init__(self, message: str, path: Optional[str] = None, cause: Optional[BaseException] = None):
        self.path = path
        if path:
            message = f"{message}: {path}"
        super().__init__(message, cause=cause)
