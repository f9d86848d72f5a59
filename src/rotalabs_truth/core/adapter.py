"""Capability contract shared by leaf and composite adapters.

Any object exposing the three coroutine methods below is a truth adapter;
no base class is required. Composites satisfy the same contract, so a
composite can be used wherever a leaf is expected.
"""

from typing import Protocol, runtime_checkable

from rotalabs_truth.core.config import AdapterConfig
from rotalabs_truth.core.result import AdapterResult


@runtime_checkable
class TruthAdapter(Protocol):
    """Protocol defining the configure/evaluate/dispose lifecycle."""

    async def configure(self, config: AdapterConfig) -> None:
        """Bind adapter-specific parameters.

        Must be called before evaluate(). Performs no I/O.

        Args:
            config: Adapter configuration.

        Raises:
            ConfigurationError: If the parameters are structurally invalid.
        """
        ...

    async def evaluate(self) -> AdapterResult:
        """Evaluate the current state and return a yes/no answer.

        Faults such as network failures or missing matches are returned as
        a false result with an ``error`` entry in the metadata, not raised.

        Returns:
            AdapterResult for this evaluation.
        """
        ...

    async def dispose(self) -> None:
        """Release any resources held by the adapter. Idempotent."""
        ...
