from __future__ import annotations

import logging
import weakref
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterator, Optional, Union

from ..config import HEADER_VERSION, WRITE_PTHAT, WriterConfig
from ..formatting import (
    DEFAULT_HEADER_VERSION,
    FIELD_SEP,
    SCHEMA_NAME,
    event_header,
    file_header,
    footer,
    particle_line,
    resolve_header_version,
)
from ..models import (
    PARTICLE_KINDS,
    CrossSection,
    FinalStateEvent,
    FinalStateFile,
    FinalStateParticle,
    Hadron,
    Parton,
    PartonShower,
)
from .reader_base import Reader
from .sink import Sink, encoding_for_path, open_sink, open_text
from .writer_base import Writer, WriterState

logger = logging.getLogger(__name__)


def _deref(ref: Any) -> Any:
    """Referent of a weak reference, or the object itself for strong ones."""
    if isinstance(ref, weakref.ReferenceType):
        return ref()
    return ref


class FinalStateWriter(Writer):
    """Writes final-state partons or hadrons in the JETSCAPE final-state format.

    Records pushed through ``write`` are buffered until the pipeline calls
    ``write_event``; the buffer is emptied after every event.
    """

    def __init__(
        self,
        output_path: Union[str, Path],
        kind: type[FinalStateParticle] = Hadron,
        *,
        encoding: Optional[str] = None,
        config: Optional[WriterConfig] = None,
        active: bool = True,
    ):
        super().__init__(output_path, config=config, active=active)
        self.kind = kind
        self.label = kind.label()
        # Without an explicit encoding a ".gz" suffix selects compression.
        self.encoding = encoding or encoding_for_path(self.output_path)
        self.header_version = DEFAULT_HEADER_VERSION
        self.particles: list[FinalStateParticle] = []
        self._sink: Optional[Sink] = None

    def init(self) -> None:
        if not self.active:
            logger.debug("Final state %s writer inactive; %s not opened", self.label, self.output_path)
            return

        # The version is optional; an unset (or zero) value keeps the default.
        self.header_version = resolve_header_version(
            self.config.get_int(HEADER_VERSION), default=self.header_version
        )
        logger.info(
            "JetScape Final State %s Stream Writer v%d initialized with output file = %s",
            self.label,
            self.header_version,
            self.output_path,
        )
        self._sink = open_sink(self.output_path, self.encoding)
        self._sink.write_line(file_header())
        self.state = WriterState.OPEN

    def write(self, ref: Any) -> None:
        """Buffer records from a (possibly expired) reference.

        Parton writers take the final partons of a ``PartonShower``; hadron
        writers take single ``Hadron`` objects. A bare ``Parton`` is never
        recorded: partons only reach the output as final partons of a shower.
        Expired references and entities this writer does not record are
        ignored.
        """
        target = _deref(ref)
        if target is None:
            return
        if isinstance(target, PartonShower):
            if issubclass(self.kind, Parton):
                self.particles.extend(target.final_partons())
        elif isinstance(target, Hadron) and issubclass(self.kind, Hadron):
            self.particles.append(target)

    def write_event(self) -> None:
        write_pthat = bool(self.config.get_int(WRITE_PTHAT))
        try:
            lines = [
                event_header(
                    self.current_event,
                    self.header,
                    self.label,
                    len(self.particles),
                    version=self.header_version,
                    write_pthat=write_pthat,
                )
            ]
            lines.extend(particle_line(i, p) for i, p in enumerate(self.particles))
            self._sink.write_lines(lines)
            logger.debug("Wrote event %d with %d %s records", self.current_event + 1, len(self.particles), self.label)
        finally:
            self.particles.clear()

    def close(self) -> None:
        # Cross section is a run summary, so it goes at the very end.
        try:
            self._sink.write_line(footer(self.header.cross_section))
        finally:
            self._sink.close()
            self.state = WriterState.CLOSED
        logger.info("Closed final state %s output %s", self.label, self.output_path)


# --- Reading -------------------------------------------------------------------------------


@dataclass
class Record:
    """One classified line of a final-state file."""

    kind: str  # "file_header", "event", "particle", "footer", "comment"
    line_number: int
    data: dict = field(default_factory=dict)


def _parse_header_fields(fields: list[str]) -> dict[str, str]:
    # "#" then alternating name/value pairs
    pairs = fields[1:]
    return {pairs[i]: pairs[i + 1] for i in range(0, len(pairs) - 1, 2)}


def _parse_particle(cols: list[str], path: str, line_number: int) -> dict:
    if len(cols) != 7:
        raise ValueError(f"{path}:{line_number}: expected 7 particle columns, got {len(cols)}")
    try:
        return {
            "index": int(cols[0]),
            "pid": int(cols[1]),
            "status": int(cols[2]),
            "e": float(cols[3]),
            "px": float(cols[4]),
            "py": float(cols[5]),
            "pz": float(cols[6]),
        }
    except ValueError as e:
        raise ValueError(f"{path}:{line_number}: malformed particle line: {e}") from e


def iter_records(path: Union[str, Path]) -> Iterator[Record]:
    """Classify each non-empty line of a plain or gzip final-state file."""
    path = str(path)
    with open_text(path) as f:
        for n, raw in enumerate(f, start=1):
            line = raw.rstrip("\r\n")
            if not line.strip():
                continue
            if not line.startswith("#"):
                yield Record("particle", n, _parse_particle(line.split(), path, n))
                continue
            fields = line.split(FIELD_SEP)
            tag = fields[1] if len(fields) > 1 else ""
            if tag == SCHEMA_NAME:
                yield Record(
                    "file_header",
                    n,
                    {
                        "schema_tag": fields[2] if len(fields) > 2 else "",
                        "columns": fields[4:] if len(fields) > 4 and fields[3] == "|" else fields[3:],
                    },
                )
            elif tag == "Event":
                yield Record("event", n, _parse_header_fields(fields))
            elif tag == "sigmaGen":
                values = _parse_header_fields(fields)
                try:
                    data = {"sigma_gen": float(values["sigmaGen"]), "sigma_err": float(values.get("sigmaErr", "nan"))}
                except (KeyError, ValueError) as e:
                    raise ValueError(f"{path}:{n}: malformed footer: {e}") from e
                yield Record("footer", n, data)
            else:
                yield Record("comment", n, {"text": line})


_KNOWN_EVENT_KEYS = {"Event", "weight", "EPangle", "vertex_x", "vertex_y", "vertex_z", "pt_hat"}


def _event_from_header(values: dict[str, str], path: str, line_number: int) -> FinalStateEvent:
    try:
        ev = FinalStateEvent(
            event_number=int(values["Event"]),
            weight=float(values.get("weight", "1")),
            event_plane_angle=float(values.get("EPangle", "0")),
        )
        for key, value in values.items():
            if key.startswith("N_"):
                ev.label = key[2:]
                ev.n_declared = int(value)
            elif key not in _KNOWN_EVENT_KEYS:
                ev.extra[key] = value
        if "vertex_x" in values:
            ev.vertex = (float(values["vertex_x"]), float(values["vertex_y"]), float(values["vertex_z"]))
        if "pt_hat" in values:
            ev.pt_hat = float(values["pt_hat"])
    except (KeyError, ValueError) as e:
        raise ValueError(f"{path}:{line_number}: malformed event header: {e}") from e
    return ev


def _iter_file(path: Union[str, Path], out: FinalStateFile) -> Iterator[FinalStateEvent]:
    current: Optional[FinalStateEvent] = None
    for rec in iter_records(path):
        if rec.kind == "file_header":
            out.schema_tag = rec.data["schema_tag"]
            out.columns = list(rec.data["columns"])
        elif rec.kind == "event":
            if current is not None:
                yield current
            current = _event_from_header(rec.data, str(path), rec.line_number)
        elif rec.kind == "particle":
            if current is None:
                # Skip stray records before first event
                continue
            d = rec.data
            particle_cls = PARTICLE_KINDS.get(current.label, FinalStateParticle)
            current.particles.append(
                particle_cls(pid=d["pid"], status=d["status"], e=d["e"], px=d["px"], py=d["py"], pz=d["pz"])
            )
        elif rec.kind == "footer":
            out.cross_section = CrossSection(sigma_gen=rec.data["sigma_gen"], sigma_err=rec.data["sigma_err"])
    if current is not None:
        yield current


def iter_final_state(path: Union[str, Path]) -> Iterator[FinalStateEvent]:
    """Iterate events from a final-state file."""
    yield from _iter_file(path, FinalStateFile())


class FinalStateReader(Reader):
    def iter_events(self, path: str) -> Iterator[FinalStateEvent]:
        return iter_final_state(path)

    def read(self, path: str) -> FinalStateFile:
        out = FinalStateFile()
        out.events = list(_iter_file(path, out))
        return out
