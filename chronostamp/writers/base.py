from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from ..date.types import AttributePlan


@dataclass(frozen=True)
class AppliedAttributes:
    """What a writer actually changed for one file."""

    creation_set: bool
    modification_set: bool
    note: str | None = None


class AttributeWriter(ABC):
    name: str

    @abstractmethod
    def read_modification_time(self, path: Path) -> datetime | None:
        """Return the file's current modification time as local naive time."""
        raise NotImplementedError

    @abstractmethod
    def apply(self, path: Path, plan: AttributePlan) -> AppliedAttributes:
        """Write the plan's timestamps. Raises AttributeWriteError on failure."""
        raise NotImplementedError
