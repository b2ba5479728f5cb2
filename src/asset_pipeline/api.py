"""Public pipeline API (delegates to application use-cases)."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from asset_pipeline.application.cache import PipelineCache
from asset_pipeline.application.results import PipelineRun
from asset_pipeline.application.use_cases import remove_staged_assets, run_pipeline
from asset_pipeline.plugins.registry import PluginRegistry, create_default_registry
from asset_pipeline.schemas import PipelineConfig
from asset_pipeline.types import ManifestSource

_default_cache: PipelineCache | None = None


def get_default_cache() -> PipelineCache:
    """Return the process-wide cache used when callers do not pass one."""
    global _default_cache
    if _default_cache is None:
        _default_cache = PipelineCache()
    return _default_cache


def clear_cache() -> None:
    """Empty the process-wide default cache."""
    get_default_cache().clear()


def build_assets(
    manifest: ManifestSource,
    prefix: str,
    source: Path,
    destination: Path,
    output_type: str,
    config: PipelineConfig | Mapping[str, Any] | None = None,
    tag: str = "asset",
    plugin_modules: Iterable[str] | None = None,
    registry: PluginRegistry | None = None,
    cache: PipelineCache | None = None,
) -> PipelineRun:
    """Build the assets listed in ``manifest``.

    ``plugin_modules`` are loaded into a fresh default registry when no
    ``registry`` is given.
    """
    if registry is None:
        registry = create_default_registry(extra_modules=plugin_modules)
    return run_pipeline(
        manifest=manifest,
        prefix=prefix,
        source=source,
        destination=destination,
        output_type=output_type,
        cache=cache if cache is not None else get_default_cache(),
        config=config,
        tag=tag,
        registry=registry,
    )


def clean_staged_assets(source: Path, config: Mapping[str, Any] | None = None) -> None:
    """Remove staged assets below ``source``."""
    remove_staged_assets(source=source, config=config)
