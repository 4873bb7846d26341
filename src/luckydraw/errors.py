"""Exceptions raised by the lucky draw collaborators."""


class LuckyDrawError(Exception):
    """Base class for lucky draw errors."""


class PrizeValidationError(LuckyDrawError, ValueError):
    """A prize edit would leave the list in an invalid state."""
