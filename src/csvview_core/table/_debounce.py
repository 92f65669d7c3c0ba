"""Buffered filter input that commits after a quiet interval.

Each column is either ``Pending(text, deadline)`` or ``Committed(text)``.
Typing moves a column to Pending and pushes its deadline out; once the
deadline has passed, :meth:`FilterDebouncer.due` commits it. The committed
text is always the last text typed, whatever the delay.
"""
from __future__ import annotations

import time
from typing import Callable, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict


class Pending(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str
    deadline: float


class Committed(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str


class FilterDebouncer:
    """Per-column pending/committed filter input."""

    def __init__(self, delay: float = 0.3, clock: Callable[[], float] = time.monotonic):
        self.delay = delay
        self._clock = clock
        self._inputs: Dict[str, Union[Pending, Committed]] = {}

    def type(self, column: str, text: str, now: Optional[float] = None) -> Pending:
        """Record new input for ``column``; it commits ``delay`` seconds later."""
        now = self._clock() if now is None else now
        pending = Pending(text=text, deadline=now + self.delay)
        self._inputs[column] = pending
        return pending

    def due(self, now: Optional[float] = None) -> Dict[str, str]:
        """Commit every pending input whose deadline has passed.

        Returns:
            Mapping of column to newly committed text.
        """
        now = self._clock() if now is None else now
        committed: Dict[str, str] = {}
        for column, entry in self._inputs.items():
            if isinstance(entry, Pending) and entry.deadline <= now:
                committed[column] = entry.text
        for column, text in committed.items():
            self._inputs[column] = Committed(text=text)
        return committed

    def flush(self) -> Dict[str, str]:
        """Commit every pending input immediately."""
        return self.due(now=float("inf"))

    def commit(self, column: str, text: str) -> None:
        """Record ``text`` as committed without waiting."""
        self._inputs[column] = Committed(text=text)

    def pending_text(self, column: str) -> str:
        """Latest text for ``column``, pending or committed."""
        entry = self._inputs.get(column)
        return entry.text if entry is not None else ""

    def has_pending(self) -> bool:
        return any(isinstance(e, Pending) for e in self._inputs.values())

    def reset(self) -> None:
        self._inputs.clear()
