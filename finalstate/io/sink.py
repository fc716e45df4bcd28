from __future__ import annotations

import gzip
import io
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterable, Union

PLAIN = "ascii"
GZIP = "gz"

_GZIP_MAGIC = b"\x1f\x8b"


class Sink(ABC):
    """Line-oriented text sink. Concrete sinks differ only in encoding."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self._fh = self._open(self.path)

    @abstractmethod
    def _open(self, path: Path) -> io.TextIOBase:
        ...

    @property
    def closed(self) -> bool:
        return self._fh.closed

    def write_line(self, line: str) -> None:
        self._fh.write(line + "\n")

    def write_lines(self, lines: Iterable[str]) -> None:
        for line in lines:
            self._fh.write(line + "\n")

    def close(self) -> None:
        if not self._fh.closed:
            self._fh.close()


class PlainTextSink(Sink):
    def _open(self, path: Path) -> io.TextIOBase:
        return open(path, "w", encoding="utf-8", newline="\n")


class GzipTextSink(Sink):
    def _open(self, path: Path) -> io.TextIOBase:
        return gzip.open(path, "wt", encoding="utf-8", newline="\n")


SINKS: dict[str, type[Sink]] = {
    PLAIN: PlainTextSink,
    GZIP: GzipTextSink,
}


def encoding_for_path(path: Union[str, Path]) -> str:
    return GZIP if Path(path).suffix == ".gz" else PLAIN


def open_sink(path: Union[str, Path], encoding: str = PLAIN) -> Sink:
    if encoding not in SINKS:
        raise ValueError(f"Unknown sink encoding: {encoding}")
    return SINKS[encoding](path)


def open_text(path: Union[str, Path]):
    """Open a plain or gzip final-state file for reading.

    Compression is detected from the gzip magic bytes, not the file name.
    """
    p = Path(path)
    with open(p, "rb") as raw:
        magic = raw.read(2)
    if magic == _GZIP_MAGIC:
        return io.TextIOWrapper(gzip.open(p, "rb"), encoding="utf-8", errors="replace")
    return open(p, "r", encoding="utf-8", errors="replace")
