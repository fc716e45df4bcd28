from __future__ import annotations

import enum
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Optional, Union

from ..config import WriterConfig
from ..models import EventHeader


class WriterState(enum.Enum):
    UNINITIALIZED = "uninitialized"
    OPEN = "open"
    CLOSED = "closed"


class Writer(ABC):
    """Lifecycle shared by event writers driven from a pipeline.

    The pipeline owns ``active``, ``current_event`` and ``header``; the
    writer only reads them. ``init`` opens the output, ``write_event`` is
    called once per event and ``close`` finalises the file. A writer that
    is torn down while still open closes itself first.
    """

    def __init__(
        self,
        output_path: Union[str, Path],
        *,
        config: Optional[WriterConfig] = None,
        active: bool = True,
    ):
        self.output_path = Path(output_path)
        self.config = config if config is not None else WriterConfig()
        self.active = active
        self.current_event = 0
        self.header = EventHeader()
        self.state = WriterState.UNINITIALIZED

    @property
    def is_open(self) -> bool:
        return self.state is WriterState.OPEN

    @abstractmethod
    def init(self) -> None:
        ...

    def exec(self) -> None:
        """Periodic pipeline hook. Events are flushed through ``write_event``."""

    @abstractmethod
    def write(self, ref: Any) -> None:
        ...

    @abstractmethod
    def write_event(self) -> None:
        ...

    @abstractmethod
    def close(self) -> None:
        ...

    def __enter__(self) -> "Writer":
        if self.state is WriterState.UNINITIALIZED:
            self.init()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if self.is_open:
            self.close()

    def __del__(self) -> None:
        if getattr(self, "state", None) is WriterState.OPEN:
            self.close()
