"""Writer configuration flags.

Flags are looked up by element path, the way a JETSCAPE XML configuration is
addressed (``write_pthat``, ``final_state_writer_header_version`` ...).
Missing or unparsable values fall back to the caller's default.
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Any, Iterator, Mapping, MutableMapping, Optional, Union

logger = logging.getLogger(__name__)

WRITE_PTHAT = "write_pthat"
HEADER_VERSION = "final_state_writer_header_version"


def _key(path: tuple[str, ...]) -> str:
    return "/".join(path)


class WriterConfig(MutableMapping[str, Any]):
    """Flat mapping of ``"a/b/c"`` element paths to raw values."""

    def __init__(self, values: Optional[Mapping[str, Any]] = None):
        self._values: dict[str, Any] = dict(values or {})

    def __getitem__(self, key: str) -> Any:
        return self._values[key]

    def __setitem__(self, key: str, value: Any) -> None:
        self._values[key] = value

    def __delitem__(self, key: str) -> None:
        del self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"WriterConfig({self._values!r})"

    def get_int(self, *path: str, default: int = 0) -> int:
        """Integer value at ``path``; ``default`` when absent or not an integer."""
        key = _key(path)
        raw = self._values.get(key)
        if raw is None:
            return default
        if isinstance(raw, bool):
            return int(raw)
        try:
            return int(str(raw).strip())
        except ValueError:
            logger.debug("Ignoring non-integer value %r for %s", raw, key)
            return default

    @classmethod
    def from_xml(cls, path: Union[str, Path]) -> "WriterConfig":
        """Load leaf elements of an XML file, keyed by path below the root."""
        root = ET.parse(str(path)).getroot()
        values: dict[str, Any] = {}

        def _walk(elem: ET.Element, prefix: tuple[str, ...]) -> None:
            for child in elem:
                child_path = prefix + (child.tag,)
                if len(child):
                    _walk(child, child_path)
                else:
                    # first occurrence wins, as with an element lookup
                    values.setdefault(_key(child_path), (child.text or "").strip())

        _walk(root, ())
        logger.debug("Loaded %d configuration values from %s", len(values), path)
        return cls(values)
