from __future__ import annotations


class ChronostampError(Exception):
    """Base class for errors raised by chronostamp."""


class ConfigError(ChronostampError, ValueError):
    """Invalid configuration (e.g. a year bound that is not an integer range)."""


class AttributeWriteError(ChronostampError):
    """Setting a timestamp on disk failed."""

    def __init__(self, path, message: str) -> None:
        super().__init__(f"{path}: {message}")
        self.path = path
        self.message = message
