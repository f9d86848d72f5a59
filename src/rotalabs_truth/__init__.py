"""
rotalabs-truth - Composable yes/no evaluators for heterogeneous truth sources.

Evaluates dates, numeric bounds, regex matches and CSS selectors on fetched
pages through one async contract, and chains two evaluators into a
short-circuiting AND whose second stage can be reconfigured from the first
stage's result.

https://rotalabs.ai
"""

__version__ = "0.1.0"

from rotalabs_truth.core.adapter import TruthAdapter
from rotalabs_truth.core.chain import SOURCE_FALSE_REASON, ChainedAdapter, ChainedAdapterConfig
from rotalabs_truth.core.config import AdapterConfig, load_definition
from rotalabs_truth.core.exceptions import AdapterNotConfiguredError, ConfigurationError
from rotalabs_truth.core.result import AdapterResult
from rotalabs_truth.adapters import (
    BaseAdapter,
    ConstantAdapter,
    ConstantAdapterConfig,
    DateAdapter,
    DateAdapterConfig,
    FetchError,
    HTMLAdapter,
    HTMLAdapterConfig,
    HttpAdapter,
    HttpAdapterConfig,
    NumericRangeAdapter,
    NumericRangeAdapterConfig,
    SelectorAdapter,
    SelectorAdapterConfig,
)
from rotalabs_truth.plugins.registry import AdapterRegistry, build_adapter, load_transform

__all__ = [
    # Version
    "__version__",
    # Core
    "TruthAdapter",
    "AdapterConfig",
    "AdapterResult",
    "ChainedAdapter",
    "ChainedAdapterConfig",
    "SOURCE_FALSE_REASON",
    # Errors
    "ConfigurationError",
    "AdapterNotConfiguredError",
    # Adapters
    "BaseAdapter",
    "HttpAdapter",
    "HttpAdapterConfig",
    "FetchError",
    "ConstantAdapter",
    "ConstantAdapterConfig",
    "DateAdapter",
    "DateAdapterConfig",
    "HTMLAdapter",
    "HTMLAdapterConfig",
    "NumericRangeAdapter",
    "NumericRangeAdapterConfig",
    "SelectorAdapter",
    "SelectorAdapterConfig",
    # Definitions
    "AdapterRegistry",
    "build_adapter",
    "load_transform",
    "load_definition",
]
