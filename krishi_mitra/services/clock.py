from datetime import datetime
from typing import Protocol


class Clock(Protocol):
    def now(self) -> datetime: ...


class SystemClock:
    """UTC wall clock, matching the record timestamp defaults."""

    def now(self) -> datetime:
        return datetime.utcnow()
