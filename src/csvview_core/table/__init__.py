"""csvview Table -- filter, sort, paginate and column visibility over a Dataset.

Public API:
    TableEngine       -- stateful facade with the named table operations
    TableState        -- immutable state; ``reduce(state, action)`` is the transition
    get_visible_rows  -- current page plus summary counts for a state
    export_visible    -- write the filtered, sorted rows to a CSV file
    FilterDebouncer   -- pending/committed filter input
"""

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
from ._debounce import Committed, FilterDebouncer, Pending
from ._state import FilterState, TableState, initial_state, next_sort
from ._view import export_visible, get_visible_rows
from .engine import TableEngine

__all__ = [
    "TableEngine",
    "TableState",
    "FilterState",
    "initial_state",
    "next_sort",
    "reduce",
    "get_visible_rows",
    "export_visible",
    "FilterDebouncer",
    "Pending",
    "Committed",
    # Actions
    "Action",
    "SetFilterText",
    "ClearFilters",
    "SetDateFilter",
    "ClickSort",
    "SetColumnVisible",
    "ToggleAllColumns",
    "SetPage",
    "NextPage",
    "PreviousPage",
    "SetPageSize",
]
