from __future__ import annotations

from .final_state import FinalStateReader, FinalStateWriter, iter_final_state, iter_records
from .registry import get_writer, list_writers, register
from .sink import GzipTextSink, PlainTextSink, Sink, open_sink

__all__ = [
    "FinalStateReader",
    "FinalStateWriter",
    "iter_final_state",
    "iter_records",
    "get_writer",
    "list_writers",
    "register",
    "GzipTextSink",
    "PlainTextSink",
    "Sink",
    "open_sink",
]
