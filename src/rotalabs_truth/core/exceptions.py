"""Exceptions raised by rotalabs-truth adapters.

Evaluation faults are never raised; they are returned as false results.
Only wiring and configuration problems surface as exceptions.
"""


class ConfigurationError(ValueError):
    """Raised when an adapter is given structurally invalid parameters."""


class AdapterNotConfiguredError(RuntimeError):
    """Raised when evaluate() is called before configure()."""
