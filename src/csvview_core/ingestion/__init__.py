"""csvview Ingestion -- CSV parsing and file loading."""

from .csv_loader import check_extension, load_csv, load_csv_bytes
from .csv_parser import parse, read_logical_row, tokenize_line

__all__ = [
    "parse",
    "tokenize_line",
    "read_logical_row",
    "load_csv",
    "load_csv_bytes",
    "check_extension",
]
