"""Runtime settings read from ``CSVVIEW_*`` environment variables."""

from __future__ import annotations

import os
from typing import List, Tuple

from pydantic import BaseModel, Field, field_validator, model_validator

PAGE_SIZES: Tuple[int, ...] = (10, 20, 50, 100)
DEFAULT_DATE_COLUMN = "Dokument: Datum"
DEFAULT_DATE_FORMAT = "%d.%m.%Y"


class Settings(BaseModel):
    """Parser and table defaults.

    Construct directly for explicit values, or with :meth:`from_env` to pick
    up overrides from the environment.
    """

    delimiter: str = ";"
    encoding: str = "utf-8-sig"
    page_sizes: Tuple[int, ...] = PAGE_SIZES
    page_size: int = 20
    date_column: str = DEFAULT_DATE_COLUMN
    date_format: str = DEFAULT_DATE_FORMAT
    debounce_seconds: float = 0.3
    display_columns: List[str] = Field(default_factory=list)  # empty = all

    @field_validator("delimiter")
    @classmethod
    def _single_char(cls, value: str) -> str:
        if len(value) != 1 or value == '"':
            raise ValueError("delimiter must be a single non-quote character")
        return value

    @model_validator(mode="after")
    def _allowed_size(self) -> "Settings":
        if self.page_size not in self.page_sizes:
            raise ValueError(f"page_size must be one of {self.page_sizes}")
        return self

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from ``CSVVIEW_*`` variables, falling back to defaults."""
        values = {}
        if os.getenv("CSVVIEW_DELIMITER"):
            values["delimiter"] = os.getenv("CSVVIEW_DELIMITER")
        if os.getenv("CSVVIEW_ENCODING"):
            values["encoding"] = os.getenv("CSVVIEW_ENCODING")
        if os.getenv("CSVVIEW_PAGE_SIZE"):
            values["page_size"] = int(os.getenv("CSVVIEW_PAGE_SIZE"))
        if os.getenv("CSVVIEW_DATE_COLUMN"):
            values["date_column"] = os.getenv("CSVVIEW_DATE_COLUMN")
        if os.getenv("CSVVIEW_DATE_FORMAT"):
            values["date_format"] = os.getenv("CSVVIEW_DATE_FORMAT")
        if os.getenv("CSVVIEW_DEBOUNCE_MS"):
            values["debounce_seconds"] = int(os.getenv("CSVVIEW_DEBOUNCE_MS")) / 1000
        columns = os.getenv("CSVVIEW_DISPLAY_COLUMNS", "")
        if columns.strip():
            values["display_columns"] = [c.strip() for c in columns.split(",") if c.strip()]
        return cls(**values)
