"""Core module for rotalabs-truth.

This module provides the capability contract shared by all truth adapters,
the configuration and result records, and the two-stage chained adapter.
"""

from rotalabs_truth.core.adapter import TruthAdapter
from rotalabs_truth.core.chain import SOURCE_FALSE_REASON, ChainedAdapter, ChainedAdapterConfig
from rotalabs_truth.core.config import AdapterConfig, load_definition
from rotalabs_truth.core.exceptions import AdapterNotConfiguredError, ConfigurationError
from rotalabs_truth.core.result import AdapterResult

__all__ = [
    "TruthAdapter",
    "AdapterConfig",
    "AdapterResult",
    "ChainedAdapter",
    "ChainedAdapterConfig",
    "SOURCE_FALSE_REASON",
    "ConfigurationError",
    "AdapterNotConfiguredError",
    "load_definition",
]
