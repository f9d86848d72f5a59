"""Adapter type registry for rotalabs-truth.

This module builds adapters and adapter chains from plain definitions,
such as those loaded from JSON or YAML files.
"""

from rotalabs_truth.plugins.registry import AdapterRegistry, build_adapter, load_transform

__all__ = [
    "AdapterRegistry",
    "build_adapter",
    "load_transform",
]
