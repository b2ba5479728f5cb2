"""Plugin interfaces and registry for asset conversion and markup."""

from .base import Compressor, Converter, Template
from .registry import HandlerDescriptor, PluginRegistry, create_default_registry

__all__ = [
    "Compressor",
    "Converter",
    "Template",
    "HandlerDescriptor",
    "PluginRegistry",
    "create_default_registry",
]
