"""Prize list with editor operations.

The store keeps an ordered list of prize names that always holds
between ``min_prizes`` and ``max_prizes`` non-blank entries. Every
mutation notifies listeners with the new list of names.
"""

from dataclasses import dataclass
from typing import Callable, Iterable, Optional
import logging

from luckydraw.errors import PrizeValidationError
from luckydraw.prizes.palette import color_for

logger = logging.getLogger(__name__)


DEFAULT_PRIZES = [
    "一等奖",
    "二等奖",
    "三等奖",
    "幸运奖",
    "参与奖",
    "再来一次",
]


@dataclass(frozen=True)
class Prize:
    """A named wheel segment."""

    name: str


PrizeListener = Callable[[list[str]], None]


class PrizeStore:
    """Ordered, validated prize list."""

    def __init__(
        self,
        names: Optional[Iterable[str]] = None,
        min_prizes: int = 2,
        max_prizes: int = 12,
    ) -> None:
        self.min_prizes = min_prizes
        self.max_prizes = max_prizes
        self._prizes: list[Prize] = []
        self._listeners: list[PrizeListener] = []

        initial = list(names) if names is not None else list(DEFAULT_PRIZES)
        self._prizes = self._validate(initial)

    def __len__(self) -> int:
        return len(self._prizes)

    @property
    def prizes(self) -> list[Prize]:
        return list(self._prizes)

    @property
    def names(self) -> list[str]:
        return [p.name for p in self._prizes]

    def color_for(self, index: int) -> str:
        return color_for(index)

    def add_listener(self, callback: PrizeListener) -> None:
        """Add a listener called with the new names after every change."""
        self._listeners.append(callback)

    def remove_listener(self, callback: PrizeListener) -> None:
        if callback in self._listeners:
            self._listeners.remove(callback)

    def _validate(self, names: list[str]) -> list[Prize]:
        if len(names) < self.min_prizes:
            raise PrizeValidationError(
                f"At least {self.min_prizes} prizes are required"
            )
        if len(names) > self.max_prizes:
            raise PrizeValidationError(
                f"At most {self.max_prizes} prizes are allowed"
            )

        cleaned = [name.strip() for name in names]
        if not all(cleaned):
            raise PrizeValidationError("Every prize needs a name")
        return [Prize(name) for name in cleaned]

    def _commit(self, prizes: list[Prize]) -> None:
        self._prizes = prizes
        names = self.names
        for listener in self._listeners:
            try:
                listener(names)
            except Exception as e:
                logger.error(f"Error in prize listener: {e}")

    def replace(self, names: Iterable[str]) -> None:
        """Replace the whole list."""
        self._commit(self._validate(list(names)))
        logger.info(f"Prizes replaced: {self.names}")

    def reset(self) -> None:
        """Restore the default prizes."""
        self._commit(self._validate(list(DEFAULT_PRIZES)))
        logger.info("Prizes reset to defaults")

    def add(self, name: Optional[str] = None) -> Prize:
        """Append a prize, named after its position if no name is given."""
        if len(self._prizes) >= self.max_prizes:
            raise PrizeValidationError(
                f"At most {self.max_prizes} prizes are allowed"
            )
        if name is None:
            name = f"奖项{len(self._prizes) + 1}"

        prizes = self._validate(self.names + [name])
        self._commit(prizes)
        logger.info(f"Prize added: {prizes[-1].name}")
        return prizes[-1]

    def remove(self, index: int) -> Prize:
        """Remove the prize at an index."""
        if len(self._prizes) <= self.min_prizes:
            raise PrizeValidationError(
                f"At least {self.min_prizes} prizes are required"
            )
        if not 0 <= index < len(self._prizes):
            raise PrizeValidationError(f"No prize at index {index}")

        prizes = list(self._prizes)
        removed = prizes.pop(index)
        self._commit(prizes)
        logger.info(f"Prize removed: {removed.name}")
        return removed

    def rename(self, index: int, name: str) -> Prize:
        """Rename the prize at an index."""
        if not 0 <= index < len(self._prizes):
            raise PrizeValidationError(f"No prize at index {index}")

        names = self.names
        names[index] = name
        prizes = self._validate(names)
        self._commit(prizes)
        return prizes[index]
