from __future__ import annotations

from typing import NewType

MessageId = NewType("MessageId", int)
UserId = NewType("UserId", int)
