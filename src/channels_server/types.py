"""Type definitions for channels-server."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Awaitable, Callable, Mapping, Protocol, TypeAlias

if TYPE_CHECKING:
    from .events import BatchTriggerRequest, TriggerRequest
    from .results import TransportResponse

# Keyed hash: (key, message bytes) -> lowercase hex digest
KeyedHash: TypeAlias = Callable[[str, bytes], str]

# Turns a payload into a JSON string
JsonSerializer: TypeAlias = Callable[[Any], str]

# Parses a JSON string
JsonDeserializer: TypeAlias = Callable[[str], Any]

QueryParams: TypeAlias = Mapping[str, Any]


class Transport(Protocol):
    """
    Sends validated requests to the HTTP API.

    Implementations own the base URL, resource paths, request signing,
    retries and timeouts. The endpoint settings of ChannelsConfig (host,
    cluster, encrypted, port) are read by nothing else in this package;
    build the transport from them, e.g. with config.build_base_url() and
    config.effective_port, and pass the same config to the client.
    """

    def trigger(self, request: TriggerRequest) -> TransportResponse:
        """Send a single trigger request."""
        ...

    def trigger_batch(self, request: BatchTriggerRequest) -> TransportResponse:
        """Send a batch trigger request."""
        ...

    def get(self, resource: str, params: QueryParams | None = None) -> TransportResponse:
        """Make a GET request for a resource."""
        ...


class AsyncTransport(Protocol):
    """Asyncio flavour of Transport."""

    def trigger(self, request: TriggerRequest) -> Awaitable[TransportResponse]:
        """Send a single trigger request."""
        ...

    def trigger_batch(self, request: BatchTriggerRequest) -> Awaitable[TransportResponse]:
        """Send a batch trigger request."""
        ...

    def get(
        self, resource: str, params: QueryParams | None = None
    ) -> Awaitable[TransportResponse]:
        """Make a GET request for a resource."""
        ...
