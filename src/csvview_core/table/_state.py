"""Immutable table state and its defaults."""
from __future__ import annotations

import datetime
from typing import Dict, FrozenSet, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from .._types import Dataset, SortDirection, SortState
from ..config import DEFAULT_DATE_COLUMN, DEFAULT_DATE_FORMAT, PAGE_SIZES, Settings


class FilterState(BaseModel):
    """Committed column queries and the optional exact date filter.

    Blank queries are never stored, so every entry in ``text`` constrains.
    """

    model_config = ConfigDict(frozen=True)

    text: Dict[str, str] = Field(default_factory=dict)
    date: Optional[datetime.date] = None

    @property
    def is_active(self) -> bool:
        return bool(self.text) or self.date is not None


class TableState(BaseModel):
    """Everything that decides which rows and columns are visible."""

    model_config = ConfigDict(frozen=True)

    dataset: Dataset
    filters: FilterState = Field(default_factory=FilterState)
    sort: SortState = Field(default_factory=SortState)
    visible_columns: FrozenSet[str] = frozenset()
    page: int = 1
    page_size: int = 20
    page_sizes: Tuple[int, ...] = PAGE_SIZES
    date_column: str = DEFAULT_DATE_COLUMN
    date_format: str = DEFAULT_DATE_FORMAT


# Unsorted -> Asc -> Desc -> Unsorted on repeated clicks of one column
_SORT_CYCLE = {
    None: SortDirection.ASC,
    SortDirection.ASC: SortDirection.DESC,
    SortDirection.DESC: None,
}


def next_sort(sort: SortState, column: str) -> SortState:
    """Return the sort state after a click on ``column``."""
    current = sort.direction if sort.column == column else None
    direction = _SORT_CYCLE[current]
    if direction is None:
        return SortState()
    return SortState(column=column, direction=direction)


def initial_state(dataset: Dataset, settings: Optional[Settings] = None) -> TableState:
    """Default state for a freshly installed dataset."""
    settings = settings or Settings()
    visible = [c for c in settings.display_columns if c in dataset.headers]
    return TableState(
        dataset=dataset,
        visible_columns=frozenset(visible or dataset.headers),
        page_size=settings.page_size,
        page_sizes=settings.page_sizes,
        date_column=settings.date_column,
        date_format=settings.date_format,
    )
