from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterator

from ..models import FinalStateEvent, FinalStateFile


class Reader(ABC):
    @abstractmethod
    def read(self, path: str) -> FinalStateFile:
        ...

    @abstractmethod
    def iter_events(self, path: str) -> Iterator[FinalStateEvent]:
        ...
