"""Storage media for collection text.

A backend only moves opaque text in and out, keyed by collection name.
Parsing, validation and fallback policy live in ``hvacdesk.storage.store``.
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)


class StorageBackend(Protocol):
    def read(self, name: str) -> str | None:
        """Return stored text for ``name`` or None if nothing is stored."""
        ...

    def write(self, name: str, text: str) -> None:
        """Replace stored text for ``name``. May raise OSError."""
        ...


class MemoryBackend:
    """Process-local backend, used for tests and throwaway sessions."""

    def __init__(self, initial: dict[str, str] | None = None):
        self._data: dict[str, str] = dict(initial or {})

    def read(self, name: str) -> str | None:
        return self._data.get(name)

    def write(self, name: str, text: str) -> None:
        self._data[name] = text


class JsonFileBackend:
    """One ``<name>.json`` file per collection inside ``data_dir``."""

    def __init__(self, data_dir: Path):
        self.data_dir = Path(data_dir)

    def path_for(self, name: str) -> Path:
        if not name or "/" in name or "\\" in name or name.startswith("."):
            raise ValueError(f"Invalid collection name: {name!r}")
        return self.data_dir / f"{name}.json"

    def read(self, name: str) -> str | None:
        path = self.path_for(name)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def write(self, name: str, text: str) -> None:
        path = self.path_for(name)
        path.parent.mkdir(parents=True, exist_ok=True)

        # Write to a sibling temp file then swap in, so readers never see a
        # half-written collection
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{name}.", suffix=".tmp", dir=str(path.parent)
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(text)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
        logger.debug(f"Wrote collection '{name}' to {path}")
