"""Local filesystem adapter for the asset store port."""

from __future__ import annotations

import shutil
from pathlib import Path


class LocalAssetStore:
    """Default ``AssetStore`` backed by the local filesystem."""

    encoding = "utf-8"

    def read_text(self, path: Path) -> str:
        return path.read_text(encoding=self.encoding)

    def mtime(self, path: Path) -> int:
        return int(path.stat().st_mtime)

    def write(self, path: Path, content: str | bytes) -> None:
        """Write text or binary content to ``path``.

        Parameters
        ----------
        path : Path
            Destination file. Missing parent directories are created.
        content : str | bytes
            Text is encoded with ``encoding``; bytes are written as-is.
        """
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content, encoding=self.encoding)

    def remove_tree(self, path: Path) -> None:
        if path.exists():
            shutil.rmtree(path)
