from __future__ import annotations

import logging
from importlib import metadata

from .io.registry import register

logger = logging.getLogger(__name__)

ENTRY_POINT_GROUP = "finalstate.writers"

_LOADED = False


def load_plugins() -> None:
    """Load writer plugins via Python entry points.

    Supported entry-point groups:
      - finalstate.writers: callables that return (name, writer_factory)

    Writers registered this way are looked up by name exactly like the
    built-in final-state writers.
    """

    global _LOADED
    if _LOADED:
        return
    _LOADED = True

    try:
        eps = metadata.entry_points()
        group = eps.select(group=ENTRY_POINT_GROUP) if hasattr(eps, "select") else eps.get(ENTRY_POINT_GROUP, [])
    except Exception:
        logger.debug("Entry point discovery failed", exc_info=True)
        return

    for ep in group:
        try:
            fn = ep.load()
            name, writer_factory = fn()
            register(name, writer_factory)
        except Exception:
            # Plugin failures must not break core functionality.
            logger.warning("Skipping writer plugin %s", ep.name, exc_info=True)
            continue
