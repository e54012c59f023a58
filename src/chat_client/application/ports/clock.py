from __future__ import annotations

import time
from datetime import datetime, timezone
from typing import Protocol


class Clock(Protocol):
    def now(self) -> datetime: ...

    def now_ms(self) -> float: ...


class SystemClock:
    """Default implementation: UTC wall clock for timestamps, monotonic milliseconds for intervals."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)

    def now_ms(self) -> float:
        # Unaffected by wall-clock adjustments.
        return time.monotonic() * 1000
