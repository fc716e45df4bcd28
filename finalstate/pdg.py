"""PDG helpers backed by scikit-hep ``particle``."""

from __future__ import annotations

from particle import InvalidParticle, ParticleNotFound
from particle import Particle as _Particle


def name(pdg_id: int) -> str:
    """Particle name, or the bare ID when the PDG table does not know it."""
    try:
        return _Particle.from_pdgid(pdg_id).name
    except (InvalidParticle, ParticleNotFound):
        return str(pdg_id)
