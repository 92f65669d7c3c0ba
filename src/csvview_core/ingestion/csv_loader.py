"""Loading CSV files and uploaded bytes into a Dataset."""

import logging
from pathlib import Path
from typing import Optional

from .._types import Dataset
from ..config import Settings
from ..errors import NoDataRowsError, UnsupportedFileError
from .csv_parser import parse

logger = logging.getLogger(__name__)


def check_extension(filename: str) -> None:
    """Raise UnsupportedFileError unless ``filename`` ends in ``.csv``."""
    if not filename.lower().endswith(".csv"):
        raise UnsupportedFileError()


def load_csv_bytes(
    filename: str,
    data: bytes,
    delimiter: Optional[str] = None,
    encoding: Optional[str] = None,
    settings: Optional[Settings] = None,
) -> Dataset:
    """Decode uploaded file bytes and parse them.

    Args:
        filename: Name the file was uploaded under; only the extension is used.
        data: Raw file contents.
        delimiter: Field separator (default from settings).
        encoding: Text encoding (default from settings, UTF-8 with BOM removal).
        settings: Settings to take defaults from.

    Returns:
        Dataset with at least one row.

    Raises:
        UnsupportedFileError: If the file name does not end in ``.csv``.
        EmptyInputError: If the file has no content.
        NoDataRowsError: If no non-blank rows remain after parsing.
        UnicodeDecodeError: If the bytes do not decode with ``encoding``.
    """
    settings = settings or Settings()
    check_extension(filename)

    text = data.decode(encoding or settings.encoding)
    dataset = parse(text, delimiter or settings.delimiter)

    if not dataset.rows:
        raise NoDataRowsError()

    logger.info(
        "Loaded %s: %d rows, %d columns",
        filename,
        dataset.row_count,
        dataset.column_count,
    )
    return dataset


def load_csv(
    file_path: str,
    delimiter: Optional[str] = None,
    encoding: Optional[str] = None,
    settings: Optional[Settings] = None,
) -> Dataset:
    """Load a CSV file from disk.

    Args:
        file_path: Path to the CSV file.
        delimiter: Field separator (default from settings).
        encoding: Text encoding (default from settings).
        settings: Settings to take defaults from.

    Returns:
        Dataset with at least one row.

    Raises:
        UnsupportedFileError: If the path does not end in ``.csv``.
        FileNotFoundError: If the file doesn't exist.
        EmptyInputError / NoDataRowsError: See :func:`load_csv_bytes`.
    """
    path = Path(file_path)
    check_extension(path.name)
    if not path.exists():
        raise FileNotFoundError(f"File not found: {file_path}")

    return load_csv_bytes(
        path.name,
        path.read_bytes(),
        delimiter=delimiter,
        encoding=encoding,
        settings=settings,
    )
