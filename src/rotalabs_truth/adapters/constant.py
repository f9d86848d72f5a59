"""Adapter with a fixed answer."""

from dataclasses import dataclass, field
from typing import Any, Dict

from rotalabs_truth.adapters.base import BaseAdapter
from rotalabs_truth.core.config import AdapterConfig
from rotalabs_truth.core.result import AdapterResult


@dataclass(frozen=True)
class ConstantAdapterConfig(AdapterConfig):
    """Configuration for ConstantAdapter.

    Attributes:
        answer: Answer returned by every evaluation.
        metadata: Metadata copied into every result.
    """

    answer: bool = True
    metadata: Dict[str, Any] = field(default_factory=dict)


class ConstantAdapter(BaseAdapter[ConstantAdapterConfig]):
    """Always returns the configured answer. Useful for wiring and tests."""

    config_class = ConstantAdapterConfig

    async def evaluate(self) -> AdapterResult:
        config = self._require_config()
        return AdapterResult(answer=config.answer, metadata=dict(config.metadata))
