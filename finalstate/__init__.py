"""finalstate: JETSCAPE final-state parton/hadron stream writers."""

from __future__ import annotations

__version__ = "0.1.0"

from .api import check, info, open_writer, read
from .config import WriterConfig
from .io.final_state import FinalStateReader, FinalStateWriter
from .io.registry import get_writer, list_writers, register
from .models import (
    CrossSection,
    EventHeader,
    FinalStateEvent,
    FinalStateFile,
    FinalStateParticle,
    Hadron,
    Parton,
    PartonShower,
)

__all__ = [
    "__version__",
    "check",
    "info",
    "open_writer",
    "read",
    "WriterConfig",
    "FinalStateReader",
    "FinalStateWriter",
    "get_writer",
    "list_writers",
    "register",
    "CrossSection",
    "EventHeader",
    "FinalStateEvent",
    "FinalStateFile",
    "FinalStateParticle",
    "Hadron",
    "Parton",
    "PartonShower",
]
