"""Delimiter-separated text parsing with quote-aware line joining.

Rows are located by splitting on newlines only. A quoted field that spans a
newline leaves an odd number of quote characters on its line, so such lines
are re-joined with the following ones before the field tokenizer runs.
"""

import logging
from typing import Dict, List, Tuple

from .._types import Dataset
from ..errors import EmptyInputError

logger = logging.getLogger(__name__)

QUOTE = '"'


def _check_delimiter(delimiter: str) -> None:
    if len(delimiter) != 1 or delimiter == QUOTE:
        raise ValueError(f"Delimiter must be a single non-quote character, got {delimiter!r}")


def tokenize_line(line: str, delimiter: str = ";") -> List[str]:
    """Split one logical row line into trimmed field values.

    A doubled quote inside a quoted field yields one literal quote. The
    delimiter is literal inside quotes. Unbalanced quotes are not an error:
    whatever was accumulated becomes the last field.

    Args:
        line: Logical row line; may contain embedded newlines.
        delimiter: Single field separator character.

    Returns:
        Field values in order, each stripped of surrounding whitespace.
    """
    fields: List[str] = []
    current: List[str] = []
    inside_quotes = False
    i = 0
    n = len(line)

    while i < n:
        char = line[i]
        if char == QUOTE:
            if inside_quotes and i + 1 < n and line[i + 1] == QUOTE:
                current.append(QUOTE)
                i += 1
            else:
                inside_quotes = not inside_quotes
        elif char == delimiter and not inside_quotes:
            fields.append("".join(current).strip())
            current = []
        else:
            current.append(char)
        i += 1

    fields.append("".join(current).strip())
    return fields


def read_logical_row(lines: List[str], start: int) -> Tuple[str, int]:
    """Join raw lines from ``start`` until the quote count is even.

    Args:
        lines: Raw lines of the input.
        start: Index of the first raw line of the row.

    Returns:
        Tuple of the logical row line and the index of the next unread line.
    """
    line = lines[start]
    index = start + 1
    quote_count = line.count(QUOTE)

    while quote_count % 2 == 1 and index < len(lines):
        line += "\n" + lines[index]
        quote_count = line.count(QUOTE)
        index += 1

    return line, index


def _unique_headers(raw: List[str]) -> List[str]:
    # Same renaming pandas applies to duplicate columns: Name, Name.1, Name.2
    seen: Dict[str, int] = {}
    headers: List[str] = []
    taken = set(raw)
    for name in raw:
        if name not in seen:
            seen[name] = 0
            headers.append(name)
            continue
        count = seen[name]
        candidate = name
        while candidate in taken:
            count += 1
            candidate = f"{name}.{count}"
        seen[name] = count
        taken.add(candidate)
        headers.append(candidate)
        logger.warning("Duplicate header %r renamed to %r", name, candidate)
    return headers


def parse(text: str, delimiter: str = ";") -> Dataset:
    """Parse delimited text into headers and rows.

    The first line holds the headers. Rows shorter than the header list are
    padded with empty strings, longer rows are truncated, and rows whose
    values are all blank are dropped.

    Args:
        text: Decoded file contents.
        delimiter: Single field separator character.

    Returns:
        The parsed Dataset. It may hold zero rows; callers decide whether
        that is an error.

    Raises:
        EmptyInputError: If the text has no content.
        ValueError: If the delimiter is not a single non-quote character.
    """
    _check_delimiter(delimiter)
    if not text.strip():
        raise EmptyInputError()

    lines = text.split("\n")
    headers = _unique_headers(tokenize_line(lines[0], delimiter))
    rows: List[Dict[str, str]] = []

    i = 1
    while i < len(lines):
        row_line, i = read_logical_row(lines, i)
        if not row_line.strip():
            continue

        values = tokenize_line(row_line, delimiter)
        row = {
            header: values[index] if index < len(values) else ""
            for index, header in enumerate(headers)
        }
        if any(v.strip() for v in row.values()):
            rows.append(row)

    logger.debug("Parsed %d rows, %d columns", len(rows), len(headers))
    return Dataset(headers=headers, rows=rows)
