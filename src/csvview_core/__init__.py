"""csvview Core -- Parse delimited files and explore them as a filterable table.

Parses semicolon (or any single-character) delimited text, including quoted
fields with escaped quotes and embedded newlines, then derives the filtered,
sorted, paginated view a table UI renders.

Quick start::

    from csvview_core import load_csv, TableEngine

    dataset = load_csv("export.csv")
    engine = TableEngine(dataset)
    engine.set_filter_text("Dokument: Typ", "rechnung")
    engine.set_sort("Dokument: ID")
    view = engine.get_visible_rows()
    print(view.summary())
"""

__version__ = "0.3.0"

# Types
from ._types import Dataset, Row, SortDirection, SortState, VisibleRows

# Errors
from .errors import (
    CsvViewError,
    InputError,
    EmptyInputError,
    UnsupportedFileError,
    NoDataError,
    NoDataRowsError,
    InvalidPageSizeError,
    NoVisibleColumnsError,
    UnknownColumnError,
    user_message,
)

# Settings
from .config import Settings, PAGE_SIZES

# Ingestion
from .ingestion import parse, tokenize_line, read_logical_row, load_csv, load_csv_bytes

# Table
from .table import (
    TableEngine,
    TableState,
    FilterState,
    FilterDebouncer,
    initial_state,
    reduce,
    get_visible_rows,
    export_visible,
)

# Upload session
from .session import UploadSession, UploadOutcome

__all__ = [
    "__version__",
    # Types
    "Dataset",
    "Row",
    "SortDirection",
    "SortState",
    "VisibleRows",
    # Errors
    "CsvViewError",
    "InputError",
    "EmptyInputError",
    "UnsupportedFileError",
    "NoDataError",
    "NoDataRowsError",
    "InvalidPageSizeError",
    "NoVisibleColumnsError",
    "UnknownColumnError",
    "user_message",
    # Settings
    "Settings",
    "PAGE_SIZES",
    # Ingestion
    "parse",
    "tokenize_line",
    "read_logical_row",
    "load_csv",
    "load_csv_bytes",
    # Table
    "TableEngine",
    "TableState",
    "FilterState",
    "FilterDebouncer",
    "initial_state",
    "reduce",
    "get_visible_rows",
    "export_visible",
    # Session
    "UploadSession",
    "UploadOutcome",
]
