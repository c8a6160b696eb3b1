"""Pytest fixtures for channels-server tests."""

from __future__ import annotations

from typing import Any

import pytest

from channels_server.config import ChannelsConfig
from channels_server.events import BatchTriggerRequest, TriggerRequest
from channels_server.results import TransportResponse


class RecordingTransport:
    """Transport that records requests and replies with a canned response."""

    def __init__(self, response: TransportResponse | None = None) -> None:
        self.response = response or TransportResponse(200, '{"event_ids":{}}')
        self.calls: list[tuple[str, Any]] = []

    def trigger(self, request: TriggerRequest) -> TransportResponse:
        self.calls.append(("trigger", request))
        return self.response

    def trigger_batch(self, request: BatchTriggerRequest) -> TransportResponse:
        self.calls.append(("trigger_batch", request))
        return self.response

    def get(self, resource: str, params: Any = None) -> TransportResponse:
        self.calls.append(("get", (resource, params)))
        return self.response


class AsyncRecordingTransport(RecordingTransport):
    """Async flavour of RecordingTransport."""

    async def trigger(self, request: TriggerRequest) -> TransportResponse:  # type: ignore[override]
        return super().trigger(request)

    async def trigger_batch(self, request: BatchTriggerRequest) -> TransportResponse:  # type: ignore[override]
        return super().trigger_batch(request)

    async def get(self, resource: str, params: Any = None) -> TransportResponse:  # type: ignore[override]
        return super().get(resource, params)


@pytest.fixture
def config() -> ChannelsConfig:
    """Create a test configuration."""
    return ChannelsConfig(
        app_id="test-app-id",
        app_key="test-app-key",
        app_secret="test-app-secret",
    )


@pytest.fixture
def socket_id() -> str:
    """Sample socket ID for testing."""
    return "123.456"


@pytest.fixture
def transport() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture
def async_transport() -> AsyncRecordingTransport:
    return AsyncRecordingTransport()
