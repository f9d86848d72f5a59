"""Numeric bound checking."""

import numbers
from dataclasses import dataclass
from typing import Optional

from rotalabs_truth.adapters.base import BaseAdapter
from rotalabs_truth.core.config import AdapterConfig
from rotalabs_truth.core.exceptions import ConfigurationError
from rotalabs_truth.core.result import AdapterResult


@dataclass(frozen=True)
class NumericRangeAdapterConfig(AdapterConfig):
    """Configuration for NumericRangeAdapter.

    Either bound may be omitted, but not both.

    Attributes:
        value: Number to check.
        min_value: Lower bound.
        max_value: Upper bound.
        inclusive: Whether the bounds themselves are in range.
    """

    value: float
    min_value: Optional[float] = None
    max_value: Optional[float] = None
    inclusive: bool = True


def _is_number(value) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


class NumericRangeAdapter(BaseAdapter[NumericRangeAdapterConfig]):
    """Answers True when value lies within the configured bounds."""

    config_class = NumericRangeAdapterConfig

    def _validate(self, config: NumericRangeAdapterConfig) -> None:
        if config.min_value is None and config.max_value is None:
            raise ConfigurationError("At least one of min_value or max_value must be specified")

        for field_name in ("value", "min_value", "max_value"):
            field_value = getattr(config, field_name)
            if field_value is not None and not _is_number(field_value):
                raise ConfigurationError(f"{field_name} must be a number, got {field_value!r}")

    async def evaluate(self) -> AdapterResult:
        config = self._require_config()
        value, min_value, max_value = config.value, config.min_value, config.max_value

        if config.inclusive:
            is_in_range = (min_value is None or value >= min_value) and (max_value is None or value <= max_value)
        else:
            is_in_range = (min_value is None or value > min_value) and (max_value is None or value < max_value)

        return AdapterResult(
            answer=is_in_range,
            metadata={
                "value": value,
                "min_value": min_value,
                "max_value": max_value,
                "inclusive": config.inclusive,
            },
        )
