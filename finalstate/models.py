"""
Core event data model for finalstate.

These are the objects an event generator hands to a final-state writer:
partons (grouped into showers) and hadrons, plus the per-event header the
surrounding pipeline keeps up to date. The writer never owns them; it only
observes them through (usually weak) references.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

# Event-plane angle value meaning "not computed".
EVENT_PLANE_UNSET = -999.0


@dataclass
class FinalStateParticle:
    """A single particle record.

    Attributes:
        pid: PDG Monte Carlo particle ID.
        status: Generator status code.
        e, px, py, pz: Four-momentum components in GeV.
    """

    pid: int
    status: int
    e: float
    px: float
    py: float
    pz: float

    @classmethod
    def label(cls) -> str:
        """Column label used in ``N_<label>`` event header fields."""
        return cls.__name__

    def fields(self) -> tuple:
        return (self.pid, self.status, self.e, self.px, self.py, self.pz)


@dataclass
class Parton(FinalStateParticle):
    """Fundamental-constituent particle record."""


@dataclass
class Hadron(FinalStateParticle):
    """Composite particle record."""


PARTICLE_KINDS: dict[str, type[FinalStateParticle]] = {
    Parton.label(): Parton,
    Hadron.label(): Hadron,
}


class PartonShower:
    """Partons produced by one shower, with their splitting history.

    A parton is final once nothing lists it as a mother.
    """

    def __init__(self) -> None:
        self._partons: list[Parton] = []
        self._mothers: set[int] = set()

    def add_parton(self, parton: Parton, mother: Optional[int] = None) -> int:
        if mother is not None:
            if not 0 <= mother < len(self._partons):
                raise ValueError(f"Unknown mother index {mother} in shower of {len(self._partons)} partons")
            self._mothers.add(mother)
        self._partons.append(parton)
        return len(self._partons) - 1

    def final_partons(self) -> list[Parton]:
        return [p for i, p in enumerate(self._partons) if i not in self._mothers]

    def __len__(self) -> int:
        return len(self._partons)


@dataclass
class CrossSection:
    """Run-level generated cross section and its statistical error."""

    sigma_gen: float = -1.0
    sigma_err: float = -1.0


@dataclass
class EventHeader:
    """Per-event metadata maintained by the pipeline.

    Attributes:
        event_weight: Event weight.
        event_plane_angle: Event-plane angle; ``EVENT_PLANE_UNSET`` when not computed.
        vertex_x, vertex_y, vertex_z: Hard-scattering vertex position.
        pt_hat: Hard-process transverse momentum scale.
        sigma_gen, sigma_err: Running cross-section estimate for the whole run.
    """

    event_weight: float = 1.0
    event_plane_angle: float = EVENT_PLANE_UNSET
    vertex_x: float = 0.0
    vertex_y: float = 0.0
    vertex_z: float = 0.0
    pt_hat: float = -1.0
    sigma_gen: float = -1.0
    sigma_err: float = -1.0

    @property
    def vertex(self) -> tuple[float, float, float]:
        return (self.vertex_x, self.vertex_y, self.vertex_z)

    @property
    def cross_section(self) -> CrossSection:
        return CrossSection(sigma_gen=self.sigma_gen, sigma_err=self.sigma_err)


@dataclass
class FinalStateEvent:
    """One event as read back from a final-state file.

    Attributes:
        event_number: 1-based event number from the header.
        weight: Event weight.
        event_plane_angle: Event-plane angle (0 when it was not computed).
        label: Record kind label from the ``N_<label>`` field.
        n_declared: Particle count declared in the header.
        particles: Particle records in file order.
        vertex: ``(x, y, z)`` for version 3 headers, else None.
        pt_hat: Hard-process scale when it was written, else None.
        extra: Header fields not covered above.
    """

    event_number: int = 0
    weight: float = 1.0
    event_plane_angle: float = 0.0
    label: str = ""
    n_declared: int = 0
    particles: list[FinalStateParticle] = field(default_factory=list)
    vertex: Optional[tuple[float, float, float]] = None
    pt_hat: Optional[float] = None
    extra: dict = field(default_factory=dict)

    @property
    def header_version(self) -> int:
        return 3 if self.vertex is not None else 2


@dataclass
class FinalStateFile:
    """A complete final-state file.

    Attributes:
        schema_tag: Layout tag from the file header (``v3``).
        columns: Particle column names from the file header.
        events: Events in file order.
        cross_section: Footer values, None when the file was never closed.
    """

    schema_tag: str = ""
    columns: list[str] = field(default_factory=list)
    events: list[FinalStateEvent] = field(default_factory=list)
    cross_section: Optional[CrossSection] = None

    def __len__(self) -> int:
        return len(self.events)

    def __iter__(self):
        return iter(self.events)

    def __getitem__(self, idx):
        return self.events[idx]
