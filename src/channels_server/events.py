"""Trigger requests: events, their wire form, and the builder that validates them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence

from .exceptions import MissingRequiredFieldError
from .serialization import to_json
from .types import JsonSerializer
from .validation import Validator


@dataclass(frozen=True)
class Event:
    """One event of a batch trigger, as supplied by the caller."""

    channel: str
    name: str
    data: Any = None
    socket_id: str | None = None


@dataclass(frozen=True)
class EventPayload:
    """A batch item after validation, with data already serialized."""

    channel: str
    name: str
    data: str
    socket_id: str | None = None

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {"channel": self.channel, "name": self.name, "data": self.data}
        if self.socket_id is not None:
            body["socket_id"] = self.socket_id
        return body


@dataclass(frozen=True)
class TriggerRequest:
    """Body of a single trigger call: one event on one or more channels."""

    name: str
    channels: tuple[str, ...]
    data: str
    socket_id: str | None = None

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {
            "name": self.name,
            "channels": list(self.channels),
            "data": self.data,
        }
        if self.socket_id is not None:
            body["socket_id"] = self.socket_id
        return body

    def to_json(self) -> str:
        return to_json(self.to_dict())


@dataclass(frozen=True)
class BatchTriggerRequest:
    """Body of a batch trigger call."""

    batch: tuple[EventPayload, ...]

    def to_dict(self) -> dict[str, Any]:
        return {"batch": [event.to_dict() for event in self.batch]}

    def to_json(self) -> str:
        return to_json(self.to_dict())


class TriggerRequestBuilder:
    """
    Assembles trigger requests from caller input.

    Nothing is returned unless every channel name, socket ID and (in batch
    mode) data size passes validation.
    """

    def __init__(
        self,
        validator: Validator | None = None,
        serializer: JsonSerializer = to_json,
    ) -> None:
        self._validator = validator or Validator()
        self._serializer = serializer

    def build(
        self,
        channels: str | Sequence[str],
        event_name: str,
        data: Any,
        socket_id: str | None = None,
    ) -> TriggerRequest:
        """
        Build a request for one event on one or more channels.

        Args:
            channels: A channel name, or a sequence of them
            event_name: Name of the event
            data: Event payload, serialized with the configured serializer
            socket_id: Connection to exclude from receiving the event
        """
        channel_names = (channels,) if isinstance(channels, str) else tuple(channels)
        if not channel_names:
            raise MissingRequiredFieldError("channels")
        if not event_name:
            raise MissingRequiredFieldError("event_name")

        self._validator.validate_channel_names(channel_names)
        self._validator.validate_socket_id(socket_id)

        return TriggerRequest(
            name=event_name,
            channels=channel_names,
            data=self._serializer(data),
            socket_id=socket_id,
        )

    def build_batch(self, events: Sequence[Event]) -> BatchTriggerRequest:
        """Build a batch request. The batch size is checked before any event."""
        self._validator.validate_event_batch(events)
        if not events:
            raise MissingRequiredFieldError("events")

        payloads = []
        for event in events:
            if not event.name:
                raise MissingRequiredFieldError("name")
            data = self._serializer(event.data)
            self._validator.validate_batch_event_data(data)
            payloads.append(
                EventPayload(
                    channel=event.channel,
                    name=event.name,
                    data=data,
                    socket_id=event.socket_id,
                )
            )
        return BatchTriggerRequest(batch=tuple(payloads))
