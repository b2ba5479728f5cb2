"""Immutable asset records passed between pipeline stages."""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import PurePosixPath

from asset_pipeline.types import AssetContent


@dataclass(frozen=True)
class Asset:
    """One unit of content flowing through the pipeline.

    Parameters
    ----------
    content : str | bytes
        Current representation of the asset.
    filename : str
        Basename whose extension always reflects ``content``'s current type.
    dirname : str, default=""
        Directory the asset was collected from.
    output_path : str | None, default=None
        Public subpath the asset was saved under. Only set by the save stage.
    """

    content: AssetContent
    filename: str
    dirname: str = ""
    output_path: str | None = None

    @property
    def extension(self) -> str:
        """Return the lower-cased extension of the current filename."""
        return PurePosixPath(self.filename).suffix.lower()

    def converted(self, content: AssetContent, output_type: str) -> Asset:
        """Return a copy holding converted content with its extension stripped.

        When the stripped filename has no extension left, ``output_type`` is
        appended.
        """
        filename = PurePosixPath(self.filename).stem
        if not PurePosixPath(filename).suffix:
            filename = f"{filename}{output_type}"
        return replace(self, content=content, filename=filename)

    def with_content(self, content: AssetContent) -> Asset:
        """Return a copy with ``content`` replaced."""
        return replace(self, content=content)

    def saved_to(self, output_path: str) -> Asset:
        """Return a copy marked as saved under ``output_path``."""
        return replace(self, output_path=output_path)

    def as_text(self) -> str:
        """Return content decoded as UTF-8 when it is binary."""
        if isinstance(self.content, bytes):
            return self.content.decode("utf-8")
        return self.content

    def as_bytes(self) -> bytes:
        """Return content encoded as UTF-8 when it is text."""
        if isinstance(self.content, bytes):
            return self.content
        return self.content.encode("utf-8")
