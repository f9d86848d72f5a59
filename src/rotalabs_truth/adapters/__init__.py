"""Leaf adapters for rotalabs-truth.

Each adapter answers a yes/no question from a single external source:
a constant, a number, the calendar, or a fetched web page.
"""

from rotalabs_truth.adapters.base import BaseAdapter
from rotalabs_truth.adapters.constant import ConstantAdapter, ConstantAdapterConfig
from rotalabs_truth.adapters.date import DateAdapter, DateAdapterConfig
from rotalabs_truth.adapters.html import HTMLAdapter, HTMLAdapterConfig
from rotalabs_truth.adapters.http import FetchError, HttpAdapter, HttpAdapterConfig
from rotalabs_truth.adapters.numeric import NumericRangeAdapter, NumericRangeAdapterConfig
from rotalabs_truth.adapters.selector import SelectorAdapter, SelectorAdapterConfig

__all__ = [
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
]
