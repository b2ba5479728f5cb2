"""Shared type aliases for pipeline modules."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Literal

type HandlerKind = Literal["converter", "compressor", "template"]
type AssetContent = str | bytes

type OptionScalar = str | int | float | bool | None
type OptionMap = Mapping[str, OptionScalar]
type ManifestSource = str | Sequence[str]
