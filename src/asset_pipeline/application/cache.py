"""Pipeline fingerprinting and the outcome cache."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from hashlib import md5
from pathlib import Path
from typing import cast

from asset_pipeline.application.ports import AssetStore
from asset_pipeline.application.results import PipelineResult
from asset_pipeline.errors import ManifestLoadError
from asset_pipeline.infrastructure.filesystem import LocalAssetStore
from asset_pipeline.schemas import PipelineConfig

logger = logging.getLogger(__name__)


def fingerprint(
    source: Path,
    manifest: Sequence[str],
    config: PipelineConfig,
    store: AssetStore | None = None,
) -> str:
    """Compute the cache key for a pipeline run.

    The key covers each resolved manifest path with its whole-second mtime, in
    manifest order, followed by the serialized configuration. File content is
    never read.

    Parameters
    ----------
    source : Path
        Source root the manifest paths are resolved against.
    manifest : Sequence[str]
        Parsed manifest entries.
    config : PipelineConfig
        Pipeline configuration.
    store : AssetStore | None, default=None
        Filesystem port used to look up mtimes.

    Returns
    -------
    str
        MD5 hex digest.

    Raises
    ------
    ManifestLoadError
        If a manifest file cannot be stat'ed.
    """
    store = store or LocalAssetStore()
    parts: list[str] = []
    for path in manifest:
        full_path = source / path
        try:
            parts.append(f"{full_path}{store.mtime(full_path)}")
        except OSError as exc:
            logger.error("Failed to generate hash from provided manifest: %s", exc)
            raise ManifestLoadError(
                f"Unable to fingerprint manifest entry '{path}': {exc}"
            ) from exc
    parts.append(config.serialize())
    # Cache key only, not a security boundary.
    return md5("".join(parts).encode("utf-8"), usedforsecurity=False).hexdigest()


@dataclass(frozen=True)
class CacheEntry:
    """Recorded outcome of one pipeline run."""

    result: PipelineResult | None = None
    error: BaseException | None = None

    def replay(self) -> PipelineResult:
        """Return the stored result or re-raise the stored failure."""
        if self.error is not None:
            raise self.error
        return cast("PipelineResult", self.result)


class PipelineCache:
    """Unbounded fingerprint to outcome map.

    Construct one per process and pass it to the runner. There is no eviction;
    call ``clear`` to force pipelines to run again.
    """

    def __init__(self) -> None:
        self._entries: dict[str, CacheEntry] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def lookup(self, key: str) -> CacheEntry | None:
        """Return the entry recorded for ``key``, if any."""
        return self._entries.get(key)

    def store_result(self, key: str, result: PipelineResult) -> None:
        """Record a completed pipeline result."""
        self._entries[key] = CacheEntry(result=result)

    def store_failure(self, key: str, error: BaseException) -> None:
        """Record a failed pipeline run so it is replayed for ``key``."""
        self._entries[key] = CacheEntry(error=error)

    def clear(self) -> None:
        """Forget every recorded outcome."""
        self._entries.clear()
