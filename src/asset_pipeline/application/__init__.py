"""Application-layer use-cases and result objects."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

from asset_pipeline.application.cache import PipelineCache, fingerprint
from asset_pipeline.application.ports import AssetStore
from asset_pipeline.application.results import PipelineResult, PipelineRun
from asset_pipeline.plugins.registry import PluginRegistry
from asset_pipeline.schemas import PipelineConfig
from asset_pipeline.types import ManifestSource


def run_pipeline(
    *,
    manifest: ManifestSource,
    prefix: str,
    source: Path,
    destination: Path,
    output_type: str,
    cache: PipelineCache,
    config: PipelineConfig | Mapping[str, Any] | None = None,
    tag: str = "asset",
    registry: PluginRegistry | None = None,
    store: AssetStore | None = None,
) -> PipelineRun:
    """Run a cached pipeline via lazy use-case import."""
    from asset_pipeline.application.use_cases import run_pipeline as _impl

    return _impl(
        manifest=manifest,
        prefix=prefix,
        source=source,
        destination=destination,
        output_type=output_type,
        cache=cache,
        config=config,
        tag=tag,
        registry=registry,
        store=store,
    )


def remove_staged_assets(
    *,
    source: Path,
    config: PipelineConfig | Mapping[str, Any] | None = None,
    store: AssetStore | None = None,
) -> None:
    """Remove the staging directory via lazy use-case import."""
    from asset_pipeline.application.use_cases import remove_staged_assets as _impl

    _impl(source=source, config=config, store=store)


__all__ = [
    "PipelineCache",
    "PipelineResult",
    "PipelineRun",
    "fingerprint",
    "run_pipeline",
    "remove_staged_assets",
]
