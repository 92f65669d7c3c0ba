"""Upload handling: install a dataset whole or report why not."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict

from .config import Settings
from .errors import GENERIC_PARSE_FAILURE, CsvViewError, user_message
from .ingestion import load_csv_bytes
from .table import TableEngine

logger = logging.getLogger(__name__)


class UploadOutcome(BaseModel):
    """Result of one upload attempt."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    ok: bool
    message: str = ""
    filename: str = ""
    rows: int = 0
    columns: int = 0
    engine: Optional[TableEngine] = None


class UploadSession:
    """Holds at most one installed dataset.

    A failed upload leaves whatever was installed before untouched; a
    successful one replaces it and resets all table state.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or Settings()
        self.engine: Optional[TableEngine] = None
        self.error: Optional[str] = None

    @property
    def loaded(self) -> bool:
        return self.engine is not None

    def upload(self, filename: str, data: bytes) -> UploadOutcome:
        """Parse uploaded bytes and install the resulting dataset."""
        try:
            dataset = load_csv_bytes(filename, data, settings=self.settings)
        except CsvViewError as exc:
            logger.info("Rejected upload %s: %s", filename, exc)
            self.error = user_message(exc)
            return UploadOutcome(ok=False, message=self.error, filename=filename)
        except Exception:
            logger.exception("Failed to parse upload %s", filename)
            self.error = GENERIC_PARSE_FAILURE
            return UploadOutcome(ok=False, message=self.error, filename=filename)

        if self.engine is None:
            self.engine = TableEngine(dataset, settings=self.settings)
        else:
            self.engine.load(dataset)
        self.error = None

        return UploadOutcome(
            ok=True,
            filename=filename,
            rows=dataset.row_count,
            columns=dataset.column_count,
            engine=self.engine,
        )

    def upload_path(self, file_path: str) -> UploadOutcome:
        """Read a file from disk and upload it."""
        path = Path(file_path)
        try:
            data = path.read_bytes()
        except OSError as exc:
            logger.warning("Cannot read %s: %s", file_path, exc)
            self.error = f"Cannot read file: {path.name}"
            return UploadOutcome(ok=False, message=self.error, filename=path.name)
        return self.upload(path.name, data)

    def clear(self) -> None:
        """Discard the installed dataset and any error."""
        self.engine = None
        self.error = None
