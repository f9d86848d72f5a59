"""Pytest fixtures for rotalabs-truth tests.

This module provides reusable fixtures for testing adapters and chains.
"""

from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional

import httpx
import pytest

from rotalabs_truth.core.config import AdapterConfig
from rotalabs_truth.core.result import AdapterResult


class SpyAdapter:
    """Adapter that records every lifecycle call.

    Calls are appended to a shared ``log`` as ``"<label>.<method>"`` so that
    ordering across several adapters can be asserted.
    """

    def __init__(
        self,
        label: str,
        answer: bool = True,
        metadata: Optional[Dict[str, Any]] = None,
        log: Optional[List[str]] = None,
        fail_dispose: bool = False,
    ):
        self.label = label
        self.answer = answer
        self.metadata = metadata or {}
        self.log = log if log is not None else []
        self.fail_dispose = fail_dispose
        self.configure_calls: List[AdapterConfig] = []
        self.evaluate_count = 0
        self.dispose_count = 0

    async def configure(self, config: AdapterConfig) -> None:
        self.configure_calls.append(config)
        self.log.append(f"{self.label}.configure")

    async def evaluate(self) -> AdapterResult:
        self.evaluate_count += 1
        self.log.append(f"{self.label}.evaluate")
        return AdapterResult(answer=self.answer, metadata=dict(self.metadata))

    async def dispose(self) -> None:
        self.dispose_count += 1
        self.log.append(f"{self.label}.dispose")
        if self.fail_dispose:
            raise RuntimeError(f"{self.label} dispose failed")


@pytest.fixture
def call_log() -> List[str]:
    """Shared list that spy adapters append their calls to."""
    return []


@pytest.fixture
def spy_adapter(call_log):
    """Factory fixture for creating spy adapters sharing one call log.

    Example:
        source = spy_adapter("source", answer=False)
    """
    def _create_spy(label: str, answer: bool = True, metadata: Optional[Dict[str, Any]] = None, **kwargs) -> SpyAdapter:
        return SpyAdapter(label, answer=answer, metadata=metadata, log=call_log, **kwargs)

    return _create_spy


@pytest.fixture
def make_config():
    """Factory fixture for plain adapter configs."""
    def _create_config(config_id: str = "test", name: str = "Test") -> AdapterConfig:
        return AdapterConfig(id=config_id, name=name)

    return _create_config


@pytest.fixture
def fixed_clock() -> Callable[[str], Callable[[], datetime]]:
    """Factory fixture returning a clock frozen at an ISO timestamp."""
    def _create_clock(iso: str) -> Callable[[], datetime]:
        moment = datetime.fromisoformat(iso)
        if moment.tzinfo is None:
            moment = moment.replace(tzinfo=timezone.utc)
        return lambda: moment

    return _create_clock


@pytest.fixture
def mock_client():
    """Factory fixture for httpx clients backed by a MockTransport.

    Accepts either a handler function or a body string served with
    status 200 for every request.
    """
    def _create_client(handler_or_body, status_code: int = 200) -> httpx.AsyncClient:
        if callable(handler_or_body):
            handler = handler_or_body
        else:
            def handler(request: httpx.Request) -> httpx.Response:
                return httpx.Response(status_code, text=handler_or_body)

        return httpx.AsyncClient(transport=httpx.MockTransport(handler))

    return _create_client
