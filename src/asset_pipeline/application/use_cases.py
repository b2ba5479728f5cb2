"""Application use-cases orchestrating cached pipeline runs."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from asset_pipeline.application.cache import PipelineCache, fingerprint
from asset_pipeline.application.pipeline import Pipeline
from asset_pipeline.application.ports import AssetStore
from asset_pipeline.application.results import PipelineRun
from asset_pipeline.errors import StagingCleanupError
from asset_pipeline.infrastructure.filesystem import LocalAssetStore
from asset_pipeline.plugins.registry import PluginRegistry, create_default_registry
from asset_pipeline.schemas import PipelineConfig, parse_manifest
from asset_pipeline.types import ManifestSource

logger = logging.getLogger(__name__)


def build_config(config: PipelineConfig | Mapping[str, Any] | None) -> PipelineConfig:
    """Return ``config`` as a validated ``PipelineConfig``."""
    if isinstance(config, PipelineConfig):
        return config
    return PipelineConfig.from_options(config)


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
    """Use-case: run a pipeline unless its fingerprint is already cached.

    Parameters
    ----------
    manifest : str | Sequence[str]
        YAML list of source-relative paths, or the parsed list.
    prefix : str
        Bundle basename, also used in log messages.
    source : Path
        Source root.
    destination : Path
        Public destination root, only used when reporting staged files.
    output_type : str
        Final extension, e.g. ``".js"``.
    cache : PipelineCache
        Outcome cache shared across runs.
    config : PipelineConfig | Mapping[str, Any] | None, default=None
        Pipeline options layered over the defaults.
    tag : str, default="asset"
        Label used in log messages.
    registry : PluginRegistry | None, default=None
        Plugins used for dispatch. Defaults to the built-in templates.
    store : AssetStore | None, default=None
        Filesystem port.

    Returns
    -------
    PipelineRun
        Result and whether it was served from the cache.

    Raises
    ------
    AssetPipelineError
        The failure of this run, or the cached failure of an earlier run with
        the same fingerprint.
    """
    options = build_config(config)
    store = store or LocalAssetStore()
    paths = parse_manifest(manifest)
    key = fingerprint(source, paths, options, store)

    entry = cache.lookup(key)
    if entry is not None:
        return PipelineRun(result=entry.replay(), cached=True)

    logger.info("Processing '%s' manifest '%s'", tag, prefix)
    try:
        pipeline = Pipeline(
            manifest=paths,
            prefix=prefix,
            source=source,
            output_type=output_type,
            config=options,
            registry=registry or create_default_registry(),
            store=store,
        )
        result = pipeline.process()
    except Exception as exc:
        cache.store_failure(key, exc)
        raise

    for asset in result.assets:
        logger.info("Saved '%s' to '%s/%s'", asset.filename, destination, asset.output_path)
    cache.store_result(key, result)
    return PipelineRun(result=result, cached=False)


def remove_staged_assets(
    *,
    source: Path,
    config: PipelineConfig | Mapping[str, Any] | None = None,
    store: AssetStore | None = None,
) -> None:
    """Use-case: recursively delete ``{source}/{staging_path}``.

    Raises
    ------
    StagingCleanupError
        If the staging directory exists but cannot be removed.
    """
    options = build_config(config)
    store = store or LocalAssetStore()
    staging_path = source / options.staging_path
    try:
        store.remove_tree(staging_path)
    except OSError as exc:
        logger.error("Failed to remove staged assets: %s", exc)
        raise StagingCleanupError(
            f"Unable to remove staged assets at {staging_path}: {exc}"
        ) from exc
