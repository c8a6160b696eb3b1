"""Results of calls made through the transport."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any, Callable

from .exceptions import GetResponseError, TriggerResponseError
from .serialization import from_json
from .types import JsonDeserializer


@dataclass(frozen=True)
class TransportResponse:
    """Raw status and body as returned by a transport."""

    status_code: int
    body: str = ""

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


@dataclass(frozen=True)
class TriggerResult:
    """Outcome of a successful trigger call."""

    status_code: int
    body: str
    event_ids: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_response(
        cls, response: TransportResponse, deserializer: JsonDeserializer = from_json
    ) -> TriggerResult:
        """
        Read a trigger response.

        Raises:
            TriggerResponseError: For a non-2xx status or a body that is not JSON
        """
        if not response.ok:
            raise TriggerResponseError(
                f"Trigger failed with status {response.status_code}: {response.body}",
                response.status_code,
                response.body,
            )

        event_ids: dict[str, str] = {}
        if response.body:
            try:
                parsed = deserializer(response.body)
            except ValueError as e:
                raise TriggerResponseError(
                    f"Trigger response body is not valid JSON: {e}",
                    response.status_code,
                    response.body,
                ) from e
            if isinstance(parsed, dict):
                raw_ids = parsed.get("event_ids") or {}
                if not isinstance(raw_ids, dict):
                    raise TriggerResponseError(
                        f"Trigger response 'event_ids' is not an object: {raw_ids!r}",
                        response.status_code,
                        response.body,
                    )
                event_ids = dict(raw_ids)

        return cls(status_code=response.status_code, body=response.body, event_ids=event_ids)


@dataclass(frozen=True)
class GetResult:
    """Outcome of a GET call. data is only set for 2xx responses."""

    status_code: int
    body: str
    data: Any = None

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    @classmethod
    def from_response(
        cls,
        response: TransportResponse,
        deserializer: JsonDeserializer = from_json,
        parse: Callable[[Any], Any] | None = None,
    ) -> GetResult:
        """
        Read a GET response.

        Raises:
            GetResponseError: For a 2xx body that is not JSON or has the wrong shape
        """
        data = None
        if response.ok and response.body:
            try:
                data = deserializer(response.body)
                if parse is not None:
                    data = parse(data)
            except (ValueError, TypeError, AttributeError) as e:
                raise GetResponseError(
                    f"GET response body could not be read: {e}",
                    response.status_code,
                    response.body,
                ) from e
        return cls(status_code=response.status_code, body=response.body, data=data)


class ChannelsList(Mapping[str, dict[str, Any]]):
    """
    Channel listing keyed by channel name.

    Example:
        channels = ChannelsList.from_dict({"channels": {"presence-x": {"user_count": 3}}})
        channels["presence-x"]["user_count"]
    """

    def __init__(self, channels: Mapping[str, Mapping[str, Any]] | None = None) -> None:
        self._channels = {name: dict(info or {}) for name, info in (channels or {}).items()}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ChannelsList:
        return cls(data.get("channels") or {})

    def __getitem__(self, channel_name: str) -> dict[str, Any]:
        return self._channels[channel_name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._channels)

    def __len__(self) -> int:
        return len(self._channels)

    def __repr__(self) -> str:
        return f"ChannelsList({self._channels!r})"
