"""Shared lifecycle plumbing for leaf adapters.

Leaf adapters subclass BaseAdapter to get config type checking, the
configured-before-evaluate guard, and a no-op dispose. Subclassing is a
convenience only; the chain accepts any object satisfying TruthAdapter.
"""

import logging
from abc import ABC, abstractmethod
from typing import Generic, Optional, Type, TypeVar

from rotalabs_truth.core.config import AdapterConfig
from rotalabs_truth.core.exceptions import AdapterNotConfiguredError, ConfigurationError
from rotalabs_truth.core.result import AdapterResult

logger = logging.getLogger(__name__)

C = TypeVar("C", bound=AdapterConfig)


class BaseAdapter(ABC, Generic[C]):
    """Abstract base class for leaf adapters.

    Attributes:
        config_class: Config type accepted by configure().
        _config: Bound configuration, None until configured.
    """

    config_class: Type[AdapterConfig] = AdapterConfig

    def __init__(self):
        self._config: Optional[C] = None

    @property
    def config(self) -> Optional[C]:
        """Bound configuration, or None before configure()."""
        return self._config

    async def configure(self, config: C) -> None:
        """Validate and bind configuration.

        Args:
            config: Adapter configuration.

        Raises:
            ConfigurationError: If config has the wrong type or fails validation.
        """
        if not isinstance(config, self.config_class):
            raise ConfigurationError(
                f"{type(self).__name__} requires {self.config_class.__name__}, got {type(config).__name__}"
            )
        self._validate(config)
        self._config = config
        logger.debug(f"Configured {type(self).__name__}: {config.id}")

    def _validate(self, config: C) -> None:
        """Hook for structural validation. Raise ConfigurationError on failure."""

    def _require_config(self) -> C:
        if self._config is None:
            raise AdapterNotConfiguredError(f"{type(self).__name__}.evaluate() called before configure()")
        return self._config

    @abstractmethod
    async def evaluate(self) -> AdapterResult:
        """Evaluate the current state and return a yes/no answer."""
        pass

    async def dispose(self) -> None:
        """Nothing to clean up by default."""
