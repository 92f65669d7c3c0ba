"""Exception types raised by csvview-core.

Input problems are reported to the user as one-line messages; malformed rows
are never an error (short rows are padded, unbalanced quotes tolerated).
"""

from typing import Optional

GENERIC_PARSE_FAILURE = "Failed to parse CSV file"


class CsvViewError(Exception):
    """Base class for csvview-core errors."""

    default_message = GENERIC_PARSE_FAILURE

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.default_message)

    @property
    def message(self) -> str:
        return str(self.args[0])


class InputError(CsvViewError, ValueError):
    """The uploaded input cannot be read as CSV at all."""


class EmptyInputError(InputError):
    default_message = "CSV file is empty"


class UnsupportedFileError(InputError):
    default_message = "Please upload a CSV file"


class NoDataError(CsvViewError, ValueError):
    """The file was readable but no usable data survived parsing."""


class NoDataRowsError(NoDataError):
    default_message = "CSV file contains no data rows"


class InvalidPageSizeError(CsvViewError, ValueError):
    default_message = "Unsupported page size"


class NoVisibleColumnsError(CsvViewError, ValueError):
    default_message = "No columns selected for export"


class UnknownColumnError(CsvViewError, KeyError):
    default_message = "Unknown column"

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the message
        return self.message


def user_message(exc: BaseException) -> str:
    """Map any exception to the one-line message shown to the user."""
    if isinstance(exc, (InputError, NoDataError)):
        return exc.message
    return GENERIC_PARSE_FAILURE
