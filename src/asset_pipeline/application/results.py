"""Application-layer result objects."""

from __future__ import annotations

from dataclasses import dataclass

from asset_pipeline.models import Asset


@dataclass(frozen=True)
class PipelineResult:
    """Assets produced by a completed pipeline and the markup referencing them."""

    assets: tuple[Asset, ...]
    html: str


@dataclass(frozen=True)
class PipelineRun:
    """Runner outcome.

    ``result`` is the very object stored in the cache, so repeated runs with
    an unchanged fingerprint return the identical instance.
    """

    result: PipelineResult
    cached: bool

    @property
    def assets(self) -> tuple[Asset, ...]:
        return self.result.assets

    @property
    def html(self) -> str:
        return self.result.html
