"""Top-level API for building asset pipelines."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from asset_pipeline.application.cache import PipelineCache
from asset_pipeline.application.results import PipelineResult, PipelineRun
from asset_pipeline.models import Asset
from asset_pipeline.schemas import PipelineConfig
from asset_pipeline.types import ManifestSource

__version__ = "0.1.0"


def run_pipeline(
    manifest: ManifestSource,
    prefix: str,
    source: Path,
    destination: Path,
    output_type: str,
    config: Mapping[str, Any] | None = None,
    *,
    tag: str = "asset",
    plugin_modules: Iterable[str] | None = None,
    cache: PipelineCache | None = None,
) -> PipelineRun:
    """Build the assets listed in a manifest.

    Parameters
    ----------
    manifest : str | Sequence[str]
        YAML list of paths relative to ``source``, or the parsed list.
    prefix : str
        Basename of the bundled asset.
    source : Path
        Source root; staged output is written below it.
    destination : Path
        Public destination root used when reporting staged files.
    output_type : str
        Final extension, e.g. ``".js"``.
    config : Mapping[str, Any] | None, default=None
        Options layered over the defaults.
    tag : str, default="asset"
        Label used in log messages.
    plugin_modules : Iterable[str] | None, default=None
        Plugin modules to load into the default registry.
    cache : PipelineCache | None, default=None
        Outcome cache. Defaults to the process-wide cache.

    Returns
    -------
    PipelineRun
        Generated assets, markup, and whether the run was cached.
    """
    from .api import build_assets as _impl

    return _impl(
        manifest=manifest,
        prefix=prefix,
        source=source,
        destination=destination,
        output_type=output_type,
        config=config,
        tag=tag,
        plugin_modules=plugin_modules,
        cache=cache,
    )


def remove_staged_assets(source: Path, config: Mapping[str, Any] | None = None) -> None:
    """Recursively delete the staging directory below ``source``."""
    from .api import clean_staged_assets as _impl

    _impl(source=source, config=config)


__all__ = [
    "Asset",
    "PipelineCache",
    "PipelineConfig",
    "PipelineResult",
    "PipelineRun",
    "run_pipeline",
    "remove_staged_assets",
]
