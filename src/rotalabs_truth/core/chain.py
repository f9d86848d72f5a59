"""Two-stage composition of truth adapters.

This module provides the chained adapter, which evaluates a source adapter
and a target adapter as a short-circuiting logical AND. The source's result
can optionally be transformed into a fresh configuration for the target
immediately before the target runs.

Pipelines longer than two stages are built by nesting: a ChainedAdapter is
itself a TruthAdapter and can be the source or target of another chain.
"""

import inspect
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Optional, Union

from rotalabs_truth.core.adapter import TruthAdapter
from rotalabs_truth.core.config import AdapterConfig
from rotalabs_truth.core.exceptions import AdapterNotConfiguredError, ConfigurationError
from rotalabs_truth.core.result import AdapterResult, utcnow

logger = logging.getLogger(__name__)

SOURCE_FALSE_REASON = "Source adapter returned false"

TransformFunction = Callable[[AdapterResult], Union[AdapterConfig, Awaitable[AdapterConfig]]]


@dataclass(frozen=True)
class ChainedAdapterConfig(AdapterConfig):
    """Configuration for a chained adapter.

    Holds references to two already constructed adapters; the chain never
    instantiates them itself.

    Attributes:
        source_adapter: Adapter evaluated first.
        target_adapter: Adapter evaluated only when the source answers True.
        source_config: Initial configuration for the source.
        target_config: Initial configuration for the target.
        transform_result: Optional function deriving a new target
            configuration from the source result. May be sync or async.
    """

    source_adapter: TruthAdapter
    target_adapter: TruthAdapter
    source_config: AdapterConfig
    target_config: AdapterConfig
    transform_result: Optional[TransformFunction] = None

    def __post_init__(self):
        """Validate chain wiring."""
        for slot in ("source_adapter", "target_adapter"):
            if not isinstance(getattr(self, slot), TruthAdapter):
                raise ConfigurationError(f"{slot} does not implement configure/evaluate/dispose")

        if self.source_adapter is self.target_adapter:
            raise ConfigurationError("source_adapter and target_adapter must be distinct instances")

        if self.transform_result is not None and not callable(self.transform_result):
            raise ConfigurationError("transform_result must be callable")

    def to_dict(self) -> Dict[str, Any]:
        """Convert chain config to dictionary."""
        result = {
            "id": self.id,
            "name": self.name,
            "source_config": self.source_config.to_dict(),
            "target_config": self.target_config.to_dict(),
        }
        if self.transform_result is not None:
            result["transform_result"] = getattr(self.transform_result, "__qualname__", repr(self.transform_result))
        return result


class ChainedAdapter:
    """Evaluates two adapters as a sequential, short-circuiting AND.

    The chain is constructed empty and does nothing until configured.
    Evaluation order is always source, then the optional reconfiguration of
    the target, then the target. The two stages never run concurrently.

    A chain configured with a transform reconfigures its target on every
    evaluate() call, so concurrent evaluate() calls on the same instance
    must be serialised by the caller.

    Uses __slots__ for memory efficiency.

    Attributes:
        _config: Bound chain configuration, None until configured.
    """

    __slots__ = ("_config",)

    def __init__(self):
        """Initialize an unconfigured chain."""
        self._config: Optional[ChainedAdapterConfig] = None

    @property
    def config(self) -> Optional[ChainedAdapterConfig]:
        """Bound chain configuration, or None before configure()."""
        return self._config

    async def configure(self, config: ChainedAdapterConfig) -> None:
        """Bind both adapters and configure them, source first.

        The chain is bound only once both children accept their configs.

        Args:
            config: Chain configuration.

        Raises:
            ConfigurationError: If config is not a ChainedAdapterConfig or
                either child rejects its configuration.
        """
        if not isinstance(config, ChainedAdapterConfig):
            raise ConfigurationError(f"ChainedAdapter requires ChainedAdapterConfig, got {type(config).__name__}")

        # A failed reconfigure leaves the chain unconfigured, never half-bound.
        self._config = None
        logger.info(f"Configuring chain {config.id}: source={config.source_config.id}, target={config.target_config.id}")

        await config.source_adapter.configure(config.source_config)
        await config.target_adapter.configure(config.target_config)
        self._config = config

    async def evaluate(self) -> AdapterResult:
        """Evaluate source then target.

        Returns:
            False with the source result and a reason when the source answers
            False; otherwise the target's answer with both sub-results.

        Raises:
            AdapterNotConfiguredError: If called before configure().
            Exception: Anything raised by the transform function, unchanged.
        """
        config = self._config
        if config is None:
            raise AdapterNotConfiguredError("ChainedAdapter.evaluate() called before configure()")

        source_result = await config.source_adapter.evaluate()

        if not source_result.answer:
            logger.info(f"Chain {config.id}: source {config.source_config.id} returned false, skipping target")
            return AdapterResult(
                answer=False,
                timestamp=utcnow(),
                metadata={
                    "source_result": source_result,
                    "reason": SOURCE_FALSE_REASON,
                },
            )

        if config.transform_result is not None:
            target_config = await self._transform(config, source_result)
            logger.debug(f"Chain {config.id}: reconfiguring target with {target_config.id}")
            await config.target_adapter.configure(target_config)

        target_result = await config.target_adapter.evaluate()
        logger.debug(f"Chain {config.id}: target answered {target_result.answer}")

        return AdapterResult(
            answer=target_result.answer,
            timestamp=utcnow(),
            metadata={
                "source_result": source_result,
                "target_result": target_result,
            },
        )

    @staticmethod
    async def _transform(config: ChainedAdapterConfig, source_result: AdapterResult) -> AdapterConfig:
        """Derive the next target configuration from the source result."""
        target_config = config.transform_result(source_result)
        if inspect.isawaitable(target_config):
            target_config = await target_config

        if target_config is None:
            raise TypeError(f"Chain {config.id}: transform_result returned no configuration")
        return target_config

    async def dispose(self) -> None:
        """Dispose source then target.

        Both children are always disposed, whatever happened before.
        If both raise, the source's error propagates and the target's is
        logged. Calling dispose() on an unconfigured chain is a no-op.
        """
        config = self._config
        if config is None:
            return

        source_error: Optional[Exception] = None
        try:
            await config.source_adapter.dispose()
        except Exception as e:
            source_error = e

        try:
            await config.target_adapter.dispose()
        except Exception as e:
            if source_error is None:
                raise
            logger.error(f"Chain {config.id}: target dispose failed after source dispose failed: {e}", exc_info=True)

        if source_error is not None:
            raise source_error
