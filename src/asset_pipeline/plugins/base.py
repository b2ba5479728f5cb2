"""Plugin protocols for asset conversion, compression and markup."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from asset_pipeline.types import AssetContent


@runtime_checkable
class Converter(Protocol):
    """Protocol implemented by converter plugins."""

    filetype: str

    def convert(self, content: AssetContent) -> AssetContent:
        """Convert content of ``filetype`` into its next representation.

        Parameters
        ----------
        content : str | bytes
            Current asset content.

        Returns
        -------
        str | bytes
            Converted content.
        """


@runtime_checkable
class Compressor(Protocol):
    """Protocol implemented by compressor plugins.

    ``filetype`` is matched against the pipeline output type, not against
    individual asset extensions.
    """

    filetype: str

    def compress(self, content: AssetContent) -> AssetContent:
        """Return compressed content."""


@runtime_checkable
class Template(Protocol):
    """Protocol implemented by markup template plugins."""

    filetype: str
    priority: int

    def render(self, display_path: str | None, filename: str) -> str:
        """Render an HTML fragment referencing ``display_path/filename``.

        Parameters
        ----------
        display_path : str | None
            Public path the asset is served from.
        filename : str
            Final asset filename.

        Returns
        -------
        str
            HTML fragment.
        """


type Plugin = Converter | Compressor | Template
