from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Optional, Union

from ..models import FinalStateParticle, Hadron, Parton
from .final_state import FinalStateWriter
from .sink import GZIP, PLAIN
from .writer_base import Writer


@dataclass(frozen=True)
class WriterEntry:
    name: str
    factory: Callable[..., Writer]
    kind: Optional[type[FinalStateParticle]] = None
    encoding: Optional[str] = None


_REGISTRY: dict[str, WriterEntry] = {}


def register(
    name: str,
    factory: Callable[..., Writer],
    *,
    kind: Optional[type[FinalStateParticle]] = None,
    encoding: Optional[str] = None,
) -> None:
    """Register a writer factory under ``name``.

    ``factory(output_path, **kwargs)`` must return a ``Writer``.
    """
    _REGISTRY[name] = WriterEntry(name=name, factory=factory, kind=kind, encoding=encoding)


def _final_state_factory(kind: type[FinalStateParticle], encoding: str) -> Callable[..., Writer]:
    def factory(output_path: Union[str, Path], **kwargs: Any) -> Writer:
        return FinalStateWriter(output_path, kind, encoding=encoding, **kwargs)

    return factory


def register_final_state(name: str, kind: type[FinalStateParticle], encoding: str) -> None:
    register(name, _final_state_factory(kind, encoding), kind=kind, encoding=encoding)


def get_writer(name: str, output_path: Union[str, Path], **kwargs: Any) -> Writer:
    if name not in _REGISTRY:
        raise ValueError(f"No writer registered under name: {name}")
    return _REGISTRY[name].factory(output_path, **kwargs)


def get_entry(name: str) -> WriterEntry:
    if name not in _REGISTRY:
        raise ValueError(f"No writer registered under name: {name}")
    return _REGISTRY[name]


def list_writers() -> list[WriterEntry]:
    return [_REGISTRY[k] for k in sorted(_REGISTRY)]


register_final_state("JetScapeWriterFinalStatePartonsAscii", Parton, PLAIN)
register_final_state("JetScapeWriterFinalStateHadronsAscii", Hadron, PLAIN)
register_final_state("JetScapeWriterFinalStatePartonsAsciiGZ", Parton, GZIP)
register_final_state("JetScapeWriterFinalStateHadronsAsciiGZ", Hadron, GZIP)
