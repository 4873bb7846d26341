"""Draw history log."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional
import logging
import time

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DrawRecord:
    """One resolved spin."""

    name: str
    color: str
    timestamp: float = field(default_factory=time.time)  # epoch seconds

    @property
    def time_label(self) -> str:
        """Short local time, e.g. '3/7 09:05'."""
        moment = datetime.fromtimestamp(self.timestamp)
        return f"{moment.month}/{moment.day} {moment:%H:%M}"


class DrawHistory:
    """Newest-first list of draws, capped at a fixed size."""

    def __init__(self, limit: int = 50) -> None:
        self.limit = limit
        self._records: list[DrawRecord] = []

    def __len__(self) -> int:
        return len(self._records)

    @property
    def records(self) -> list[DrawRecord]:
        return list(self._records)

    @property
    def latest(self) -> Optional[DrawRecord]:
        return self._records[0] if self._records else None

    def record(
        self,
        name: str,
        color: str,
        timestamp: Optional[float] = None,
    ) -> DrawRecord:
        """Add a draw at the front of the history."""
        if timestamp is None:
            entry = DrawRecord(name, color)
        else:
            entry = DrawRecord(name, color, timestamp)

        self._records.insert(0, entry)
        del self._records[self.limit:]
        logger.info(f"Draw recorded: {name}")
        return entry

    def clear(self) -> None:
        """Remove every record."""
        self._records.clear()
        logger.info("Draw history cleared")
