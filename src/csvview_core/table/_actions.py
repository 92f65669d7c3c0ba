"""Table actions and the pure ``reduce(state, action)`` transition."""
from __future__ import annotations

import datetime
import logging
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict

from ..errors import InvalidPageSizeError, UnknownColumnError
from ._state import FilterState, TableState, next_sort
from ._view import clamp_page, filtered_rows

logger = logging.getLogger(__name__)


class _Action(BaseModel):
    model_config = ConfigDict(frozen=True)


class SetFilterText(_Action):
    column: str
    text: str = ""


class ClearFilters(_Action):
    pass


class SetDateFilter(_Action):
    date: Optional[datetime.date] = None


class ClickSort(_Action):
    column: str


class SetColumnVisible(_Action):
    column: str
    visible: bool = True


class ToggleAllColumns(_Action):
    pass


class SetPage(_Action):
    page: int


class NextPage(_Action):
    pass


class PreviousPage(_Action):
    pass


class SetPageSize(_Action):
    page_size: int


Action = Union[
    SetFilterText,
    ClearFilters,
    SetDateFilter,
    ClickSort,
    SetColumnVisible,
    ToggleAllColumns,
    SetPage,
    NextPage,
    PreviousPage,
    SetPageSize,
]


def _check_column(state: TableState, column: str) -> None:
    if column not in state.dataset.headers:
        raise UnknownColumnError(f"Unknown column: {column}")


def _set_page(state: TableState, page: int) -> TableState:
    count = len(filtered_rows(state))
    return state.model_copy(update={"page": clamp_page(page, count, state.page_size)})


def reduce(state: TableState, action: Action) -> TableState:
    """Return the state that results from applying ``action``.

    ``state`` is never modified.

    Raises:
        UnknownColumnError: If the action names a column not in the dataset.
        InvalidPageSizeError: If a page size outside ``state.page_sizes`` is requested.
        TypeError: If ``action`` is not a table action.
    """
    if isinstance(action, SetFilterText):
        _check_column(state, action.column)
        text = dict(state.filters.text)
        if action.text.strip():
            text[action.column] = action.text
        else:
            text.pop(action.column, None)
        filters = state.filters.model_copy(update={"text": text})
        return state.model_copy(update={"filters": filters, "page": 1})

    if isinstance(action, ClearFilters):
        return state.model_copy(update={"filters": FilterState(), "page": 1})

    if isinstance(action, SetDateFilter):
        filters = state.filters.model_copy(update={"date": action.date})
        return state.model_copy(update={"filters": filters, "page": 1})

    if isinstance(action, ClickSort):
        _check_column(state, action.column)
        sort = next_sort(state.sort, action.column)
        logger.debug("Sort on %r is now %s", action.column, sort.direction)
        return state.model_copy(update={"sort": sort, "page": 1})

    if isinstance(action, SetColumnVisible):
        _check_column(state, action.column)
        visible = set(state.visible_columns)
        if action.visible:
            visible.add(action.column)
        else:
            visible.discard(action.column)
        return state.model_copy(update={"visible_columns": frozenset(visible)})

    if isinstance(action, ToggleAllColumns):
        headers = frozenset(state.dataset.headers)
        visible = frozenset() if state.visible_columns >= headers else headers
        return state.model_copy(update={"visible_columns": visible})

    if isinstance(action, SetPage):
        return _set_page(state, action.page)

    if isinstance(action, NextPage):
        return _set_page(state, state.page + 1)

    if isinstance(action, PreviousPage):
        return _set_page(state, state.page - 1)

    if isinstance(action, SetPageSize):
        if action.page_size not in state.page_sizes:
            raise InvalidPageSizeError(
                "Page size must be one of "
                + ", ".join(str(s) for s in state.page_sizes)
                + f", got {action.page_size}"
            )
        return state.model_copy(update={"page_size": action.page_size, "page": 1})

    raise TypeError(f"Unsupported table action: {action!r}")
