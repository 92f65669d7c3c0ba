"""Stateful facade over the pure table reducer."""
from __future__ import annotations

import datetime
import logging
import time
from typing import Callable, Dict, List, Optional

from .._types import Dataset, VisibleRows
from ..config import Settings
from ..errors import UnknownColumnError
from ._actions import (
    Action,
    ClearFilters,
    ClickSort,
    NextPage,
    PreviousPage,
    SetColumnVisible,
    SetDateFilter,
    SetFilterText,
    SetPage,
    SetPageSize,
    ToggleAllColumns,
    reduce,
)
from ._debounce import FilterDebouncer
from ._state import TableState, initial_state
from ._view import get_visible_rows, visible_headers

logger = logging.getLogger(__name__)


class TableEngine:
    """Holds one dataset and the state that decides what is visible.

    Every mutating method dispatches an action through :func:`reduce` and
    returns the new state; the dataset itself is never modified.

    Usage::

        engine = TableEngine(dataset)
        engine.set_filter_text("Name", "alic")
        engine.set_sort("Name")
        page = engine.get_visible_rows()
    """

    def __init__(
        self,
        dataset: Dataset,
        settings: Optional[Settings] = None,
        clock: Optional[Callable[[], float]] = None,
    ):
        self.settings = settings or Settings()
        self.debouncer = FilterDebouncer(
            self.settings.debounce_seconds, clock=clock or time.monotonic
        )
        self.state = initial_state(dataset, self.settings)

    @property
    def dataset(self) -> Dataset:
        return self.state.dataset

    def load(self, dataset: Dataset) -> TableState:
        """Install a new dataset and reset all state to defaults."""
        self.debouncer.reset()
        self.state = initial_state(dataset, self.settings)
        logger.info(
            "Installed dataset: %d rows, %d columns",
            dataset.row_count,
            dataset.column_count,
        )
        return self.state

    def dispatch(self, action: Action) -> TableState:
        self.state = reduce(self.state, action)
        return self.state

    # -- Filters --------------------------------------------------------------

    def set_filter_text(self, column: str, text: str) -> TableState:
        """Commit a column query immediately."""
        state = self.dispatch(SetFilterText(column=column, text=text))
        self.debouncer.commit(column, text)
        return state

    def type_filter_text(self, column: str, text: str, now: Optional[float] = None) -> None:
        """Buffer a column query; it is applied by a later :meth:`poll`."""
        if column not in self.dataset.headers:
            raise UnknownColumnError(f"Unknown column: {column}")
        self.debouncer.type(column, text, now=now)

    def poll(self, now: Optional[float] = None) -> Dict[str, str]:
        """Commit buffered queries whose quiet interval has elapsed."""
        committed = self.debouncer.due(now=now)
        for column, text in committed.items():
            self.dispatch(SetFilterText(column=column, text=text))
        return committed

    def flush(self) -> Dict[str, str]:
        """Commit every buffered query now."""
        committed = self.debouncer.flush()
        for column, text in committed.items():
            self.dispatch(SetFilterText(column=column, text=text))
        return committed

    def filter_input(self, column: str) -> str:
        """Text to show in a column's search box, including pending input."""
        return self.debouncer.pending_text(column)

    def clear_filters(self) -> TableState:
        self.debouncer.reset()
        return self.dispatch(ClearFilters())

    def set_date_filter(self, date: Optional[datetime.date]) -> TableState:
        return self.dispatch(SetDateFilter(date=date))

    def default_month(self) -> Optional[datetime.date]:
        """First date found in the date column, for opening a date picker."""
        return self.dataset.first_date(self.state.date_column, self.state.date_format)

    # -- Sorting and columns --------------------------------------------------

    def set_sort(self, column: str) -> TableState:
        """Cycle ``column`` through ascending, descending, and unsorted."""
        return self.dispatch(ClickSort(column=column))

    def set_column_visible(self, column: str, visible: bool) -> TableState:
        return self.dispatch(SetColumnVisible(column=column, visible=visible))

    def toggle_all(self) -> TableState:
        return self.dispatch(ToggleAllColumns())

    def visible_headers(self) -> List[str]:
        return visible_headers(self.state)

    # -- Pagination -----------------------------------------------------------

    def set_page(self, page: int) -> TableState:
        return self.dispatch(SetPage(page=page))

    def next_page(self) -> TableState:
        return self.dispatch(NextPage())

    def previous_page(self) -> TableState:
        return self.dispatch(PreviousPage())

    def set_page_size(self, page_size: int) -> TableState:
        return self.dispatch(SetPageSize(page_size=page_size))

    def get_visible_rows(self) -> VisibleRows:
        return get_visible_rows(self.state)
