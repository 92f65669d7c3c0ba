"""Shared result types for the csvview-core library.

All library functions return Python objects (dicts, Pydantic models).
"""

from datetime import date, datetime
from enum import Enum
from types import MappingProxyType
from typing import List, Mapping, Optional

import pandas as pd
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

Row = Mapping[str, str]


# -- Dataset ------------------------------------------------------------------


class Dataset(BaseModel):
    """Parsed headers and rows of one upload.

    Every row carries exactly one ``str`` value per header; nothing else.
    Rows are stored as read-only copies of the mappings passed in, so cell
    values cannot be changed after validation.
    """

    model_config = ConfigDict(frozen=True)

    headers: List[str]
    rows: List[Row] = Field(default_factory=list)

    @field_validator("rows")
    @classmethod
    def _read_only_rows(cls, rows: List[Row]) -> List[Row]:
        return [MappingProxyType(dict(row)) for row in rows]

    @model_validator(mode="after")
    def _check_shape(self) -> "Dataset":
        if len(set(self.headers)) != len(self.headers):
            raise ValueError(f"Duplicate header names: {self.headers}")
        expected = set(self.headers)
        for i, row in enumerate(self.rows):
            if set(row) != expected:
                raise ValueError(f"Row {i} keys do not match headers")
            for key, value in row.items():
                if not isinstance(value, str):
                    raise ValueError(f"Row {i} value for {key!r} is not text")
        return self

    @property
    def row_count(self) -> int:
        return len(self.rows)

    @property
    def column_count(self) -> int:
        return len(self.headers)

    def column_values(self, header: str) -> List[str]:
        """Return one column's values in row order."""
        if header not in self.headers:
            raise KeyError(header)
        return [row[header] for row in self.rows]

    def to_frame(self) -> pd.DataFrame:
        """Return the rows as a DataFrame with every column typed ``str``."""
        return pd.DataFrame(self.rows, columns=self.headers, dtype=str)

    def first_date(self, column: str, fmt: str = "%d.%m.%Y") -> Optional[date]:
        """Return the first value of ``column`` that parses as a date.

        Used to open a date picker on a month that actually has data.
        """
        if column not in self.headers:
            return None
        for row in self.rows:
            value = row[column].strip()
            if not value:
                continue
            try:
                return datetime.strptime(value, fmt).date()
            except ValueError:
                continue
        return None


# -- Table state echo types ---------------------------------------------------


class SortDirection(str, Enum):
    """Sort direction for a column."""

    ASC = "asc"
    DESC = "desc"


class SortState(BaseModel):
    """Current sort: both fields ``None`` means original parse order."""

    model_config = ConfigDict(frozen=True)

    column: Optional[str] = None
    direction: Optional[SortDirection] = None

    @property
    def is_sorted(self) -> bool:
        return self.column is not None and self.direction is not None


class VisibleRows(BaseModel):
    """The slice of a dataset currently shown, plus summary counts."""

    headers: List[str]
    rows: List[Row]
    filtered_count: int
    total_count: int
    total_pages: int
    page: int
    page_size: int
    start_index: int  # 1-based, 0 when nothing is shown
    end_index: int
    has_active_filters: bool = False
    sort: SortState = Field(default_factory=SortState)

    def summary(self) -> str:
        """Human-readable "Showing X to Y of Z" line."""
        text = (
            f"Showing {self.start_index} to {self.end_index} "
            f"of {self.filtered_count:,}"
        )
        if self.has_active_filters:
            text += f" (filtered from {self.total_count:,})"
        return f"{text} rows, {len(self.headers)} columns"
