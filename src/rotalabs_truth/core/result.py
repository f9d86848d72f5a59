"""Result type returned by every truth adapter.

This module provides the result record that carries an adapter's answer,
the moment it was produced, and free-form diagnostic metadata.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional


def utcnow() -> datetime:
    """Return the current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


class AdapterResult:
    """Outcome of a single evaluation.

    Uses __slots__ for memory efficiency.

    Attributes:
        answer: Boolean answer produced by the adapter.
        timestamp: When the answer was produced.
        metadata: Diagnostic values such as matched text, error descriptions
            or nested sub-results.
    """

    __slots__ = ("answer", "timestamp", "metadata")

    def __init__(
        self,
        answer: bool,
        timestamp: Optional[datetime] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ):
        self.answer = bool(answer)
        self.timestamp = timestamp or utcnow()
        self.metadata = metadata or {}

    @classmethod
    def failure(cls, error: str, timestamp: Optional[datetime] = None) -> "AdapterResult":
        """Create a false result describing an evaluation fault.

        Args:
            error: Human-readable description of what went wrong.
            timestamp: Optional timestamp, defaults to now.

        Returns:
            Result with answer False and the error in metadata.
        """
        return cls(answer=False, timestamp=timestamp, metadata={"error": error})

    @property
    def error(self) -> Optional[str]:
        """Error description if the evaluation faulted."""
        return self.metadata.get("error")

    def to_dict(self) -> Dict[str, Any]:
        """Convert result to a JSON-serialisable dictionary.

        Nested results in metadata are converted recursively.
        """
        return {
            "answer": self.answer,
            "timestamp": self.timestamp.isoformat(),
            "metadata": {key: _serialise(value) for key, value in self.metadata.items()},
        }

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AdapterResult):
            return NotImplemented
        return (
            self.answer == other.answer
            and self.timestamp == other.timestamp
            and self.metadata == other.metadata
        )

    def __repr__(self) -> str:
        return f"AdapterResult(answer={self.answer!r}, timestamp={self.timestamp!r}, metadata={self.metadata!r})"


def _serialise(value: Any) -> Any:
    if isinstance(value, AdapterResult):
        return value.to_dict()
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, dict):
        return {key: _serialise(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_serialise(item) for item in value]
    return value
