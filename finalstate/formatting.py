"""
Line formatting for the JETSCAPE final-state text format.

Every function here is pure: numeric precision is an explicit argument per
field, so nothing leaks from one field into the next. Floats render like a
C++ output stream with default float formatting (``%.<precision>g``).

File header (once)::

    #	JETSCAPE_FINAL_STATE	v3	|	N	pid	status	E	Px	Py	Pz

Event header (per event; vertex only for version 3, pt_hat only when enabled)::

    #	Event	<n>	weight	<w>	EPangle	<a>	N_<Label>	<count>	[vertex_x ...]	[pt_hat <v:.6f>]

Particle line::

    <idx> <pid> <status> <E> <Px> <Py> <Pz>

Footer (once, at close)::

    #	sigmaGen	<v>	sigmaErr	<v>
"""

from __future__ import annotations

from typing import Optional

from .models import EVENT_PLANE_UNSET, CrossSection, EventHeader, FinalStateParticle

SCHEMA_NAME = "JETSCAPE_FINAL_STATE"
# Layout tag of the file as a whole; independent of the event header version.
SCHEMA_TAG = "v3"
COLUMNS = ("N", "pid", "status", "E", "Px", "Py", "Pz")

DEFAULT_HEADER_VERSION = 2
SUPPORTED_HEADER_VERSIONS = (2, 3)

DEFAULT_PRECISION = 6
WEIGHT_PRECISION = 15

FIELD_SEP = "\t"
COLUMN_SEP = " "


def format_number(value: float, precision: int = DEFAULT_PRECISION) -> str:
    return f"{value:.{precision}g}"


def resolve_header_version(configured: Optional[int], default: int = DEFAULT_HEADER_VERSION) -> int:
    """Header version to use given a configured value.

    A configured value only replaces the default when it is truthy, so an
    explicit 0 reads the same as "not configured".
    """
    if configured:
        return int(configured)
    return default


def file_header() -> str:
    return FIELD_SEP.join(("#", SCHEMA_NAME, SCHEMA_TAG, "|") + COLUMNS)


def event_plane_field(angle: float) -> str:
    if angle == EVENT_PLANE_UNSET:
        return "0"
    return format_number(angle)


def event_header(
    event_index: int,
    header: EventHeader,
    label: str,
    n_particles: int,
    *,
    version: int = DEFAULT_HEADER_VERSION,
    write_pthat: bool = False,
) -> str:
    """Per-event header line.

    ``event_index`` is zero-based; the file counts events from 1.
    """
    fields = [
        "#",
        "Event", str(event_index + 1),
        "weight", format_number(header.event_weight, WEIGHT_PRECISION),
        "EPangle", event_plane_field(header.event_plane_angle),
        f"N_{label}", str(n_particles),
    ]
    if version == 3:
        fields += [
            "vertex_x", format_number(header.vertex_x),
            "vertex_y", format_number(header.vertex_y),
            "vertex_z", format_number(header.vertex_z),
        ]
    if write_pthat:
        # fixed notation with six decimals, unlike the other fields
        fields += ["pt_hat", f"{header.pt_hat:f}"]
    return FIELD_SEP.join(fields)


def particle_line(index: int, particle: FinalStateParticle) -> str:
    return COLUMN_SEP.join(
        (
            str(index),
            str(particle.pid),
            str(particle.status),
            format_number(particle.e),
            format_number(particle.px),
            format_number(particle.py),
            format_number(particle.pz),
        )
    )


def footer(cross_section: CrossSection) -> str:
    return FIELD_SEP.join(
        (
            "#",
            "sigmaGen", format_number(cross_section.sigma_gen),
            "sigmaErr", format_number(cross_section.sigma_err),
        )
    )
