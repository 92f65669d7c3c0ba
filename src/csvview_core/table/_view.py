"""Deriving the visible rows from a table state."""
from __future__ import annotations

import logging
import math
from pathlib import Path
from typing import List

import pandas as pd

from .._types import Row, SortDirection, VisibleRows
from ..errors import NoVisibleColumnsError
from ._state import TableState

logger = logging.getLogger(__name__)


def visible_headers(state: TableState) -> List[str]:
    """Shown headers, in dataset order."""
    return [h for h in state.dataset.headers if h in state.visible_columns]


def filtered_rows(state: TableState) -> List[Row]:
    """Apply the date filter, then every text filter (AND)."""
    rows = state.dataset.rows
    filters = state.filters

    if filters.date is not None:
        wanted = filters.date.strftime(state.date_format)
        rows = [r for r in rows if r.get(state.date_column, "").strip() == wanted]

    active = [(col, q.lower()) for col, q in filters.text.items() if q.strip()]
    if active:
        rows = [
            r for r in rows
            if all(q in r.get(col, "").lower() for col, q in active)
        ]
    return list(rows)


def sorted_rows(state: TableState) -> List[Row]:
    """Filtered rows in display order. Sorting is stable."""
    rows = filtered_rows(state)
    sort = state.sort
    if not sort.is_sorted:
        return rows
    return sorted(
        rows,
        key=lambda r: r.get(sort.column, "").lower(),
        reverse=sort.direction == SortDirection.DESC,
    )


def total_pages(count: int, page_size: int) -> int:
    return max(1, math.ceil(count / page_size))


def clamp_page(page: int, count: int, page_size: int) -> int:
    return min(max(1, page), total_pages(count, page_size))


def get_visible_rows(state: TableState) -> VisibleRows:
    """Compute the current page of rows and the summary counts.

    Pure: calling it twice on the same state gives equal results.
    """
    rows = sorted_rows(state)
    headers = visible_headers(state)
    count = len(rows)
    page = clamp_page(state.page, count, state.page_size)

    start = (page - 1) * state.page_size
    end = min(start + state.page_size, count)
    page_rows = [{h: r[h] for h in headers} for r in rows[start:end]]

    return VisibleRows(
        headers=headers,
        rows=page_rows,
        filtered_count=count,
        total_count=state.dataset.row_count,
        total_pages=total_pages(count, state.page_size),
        page=page,
        page_size=state.page_size,
        start_index=start + 1 if count else 0,
        end_index=end,
        has_active_filters=state.filters.is_active,
        sort=state.sort,
    )


def export_visible(state: TableState, file_path: str, delimiter: str = ";") -> int:
    """Write all filtered, sorted rows (every page) with the shown columns.

    Returns:
        Number of data rows written.

    Raises:
        NoVisibleColumnsError: if every column is hidden. Nothing is written.
    """
    headers = visible_headers(state)
    if not headers:
        raise NoVisibleColumnsError()
    rows = sorted_rows(state)
    df =pd.DataFrame(rows, columns=state.dataset.headers, dtype=str)[headers]

    path = Path(file_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(path, sep=delimiter, index=False)
    logger.info("Exported %d rows, %d columns to %s", len(df), len(headers), path)
    return len(df)
