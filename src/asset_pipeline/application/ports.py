"""Application ports for filesystem access."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol


class AssetStore(Protocol):
    """Read sources, write staged output and remove staging trees."""

    def read_text(self, path: Path) -> str:
        """Return the full text content of ``path``."""

    def mtime(self, path: Path) -> int:
        """Return the last-modified time of ``path`` in whole seconds."""

    def write(self, path: Path, content: str | bytes) -> None:
        """Write ``content`` to ``path``, creating parent directories."""

    def remove_tree(self, path: Path) -> None:
        """Recursively delete ``path`` if it exists."""
