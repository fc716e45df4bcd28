"""High-level read/info/check/writer API."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Union

from .io.final_state import FinalStateReader
from .io.registry import get_writer
from .io.writer_base import Writer
from .models import FinalStateFile
from .plugins import load_plugins
from .validation import CheckReport, check_file

# Third-party writers register alongside the built-ins.
load_plugins()


def read(filepath: Union[str, Path]) -> FinalStateFile:
    return FinalStateReader().read(str(filepath))


def open_writer(name: str, output_path: Union[str, Path], **kwargs: Any) -> Writer:
    """Create and initialise a registered writer.

    The returned writer is open when it is active; use it as a context
    manager or call ``close()`` to write the cross-section footer.
    """
    writer = get_writer(name, output_path, **kwargs)
    writer.init()
    return writer


def check(filepath: Union[str, Path]) -> CheckReport:
    return check_file(filepath)


def info(filepath: Union[str, Path]) -> dict:
    reader = FinalStateReader()

    n_events = 0
    total_particles = 0
    labels: set[str] = set()
    versions: set[int] = set()
    has_pt_hat = False
    pdg_counts: dict[int, int] = {}
    status_counts: dict[int, int] = {}

    ef = reader.read(str(filepath))
    for ev in ef.events:
        n_events += 1
        total_particles += len(ev.particles)
        labels.add(ev.label)
        versions.add(ev.header_version)
        has_pt_hat = has_pt_hat or ev.pt_hat is not None
        for p in ev.particles:
            pdg_counts[p.pid] = pdg_counts.get(p.pid, 0) + 1
            status_counts[p.status] = status_counts.get(p.status, 0) + 1

    from .pdg import name as pdg_name

    top_pdg = sorted(pdg_counts.items(), key=lambda x: -x[1])[:20]
    top_named = [(pdg_name(pid), count) for pid, count in top_pdg]

    xs = ef.cross_section
    return {
        "schema_tag": ef.schema_tag,
        "columns": ef.columns,
        "n_events": n_events,
        "total_particles": total_particles,
        "avg_particles_per_event": total_particles / max(1, n_events),
        "labels": sorted(labels),
        "header_versions": sorted(versions),
        "has_pt_hat": has_pt_hat,
        "sigma_gen": xs.sigma_gen if xs is not None else None,
        "sigma_err": xs.sigma_err if xs is not None else None,
        "top_particles": top_named,
        "status_counts": dict(sorted(status_counts.items())),
    }
