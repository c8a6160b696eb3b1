"""ChannelsClient and AsyncChannelsClient, the public entry points."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Sequence

from .auth import AuthenticationToken, Authenticator, PresenceChannelData
from .config import ChannelsConfig
from .events import BatchTriggerRequest, Event, TriggerRequest, TriggerRequestBuilder
from .results import ChannelsList, GetResult, TransportResponse, TriggerResult
from .serialization import from_json, to_json
from .signing import Signer
from .types import AsyncTransport, JsonDeserializer, JsonSerializer, QueryParams, Transport
from .validation import Validator
from .webhooks import Webhook, WebhookVerifier

logger = logging.getLogger(__name__)


class _BaseClient:
    """Configuration and the transport-independent operations shared by both clients."""

    def __init__(
        self,
        app_id: str | None = None,
        app_key: str | None = None,
        app_secret: str | None = None,
        *,
        config: ChannelsConfig | None = None,
        serializer: JsonSerializer | None = None,
        deserializer: JsonDeserializer | None = None,
    ) -> None:
        # Build config from params or use provided config
        if config is not None:
            self._config = config
        else:
            # Build kwargs for config, only including non-None values
            config_kwargs: dict[str, Any] = {}
            if app_id is not None:
                config_kwargs["app_id"] = app_id
            if app_key is not None:
                config_kwargs["app_key"] = app_key
            if app_secret is not None:
                config_kwargs["app_secret"] = app_secret

            self._config = ChannelsConfig(**config_kwargs)

        # Set up package logging
        logging.getLogger("channels_server").setLevel(
            getattr(logging, self._config.log_level.upper())
        )

        self._serializer = serializer or to_json
        self._deserializer = deserializer or from_json

        self._validator = Validator(self._config.validation_rules())
        signer = Signer(self._config.app_secret.get_secret_value())
        self._authenticator = Authenticator(
            self._config.app_key, signer, self._validator, self._serializer
        )
        self._webhook_verifier = WebhookVerifier(self._config.app_key, signer, self._deserializer)
        self._request_builder = TriggerRequestBuilder(self._validator, self._serializer)

    @property
    def config(self) -> ChannelsConfig:
        return self._config

    def authenticate(
        self,
        channel_name: str,
        socket_id: str,
        presence_data: PresenceChannelData | Mapping[str, Any] | None = None,
    ) -> AuthenticationToken:
        """
        Authenticate a subscription to a private or presence channel.

        Args:
            channel_name: Name of the channel to be authenticated
            socket_id: Socket ID of the connection attempting to subscribe
            presence_data: User data for presence channels (must include 'user_id')

        Returns:
            AuthenticationToken to hand back to the subscribing client
        """
        return self._authenticator.authenticate(channel_name, socket_id, presence_data)

    def authenticate_presence(
        self,
        channel_name: str,
        socket_id: str,
        presence_data: PresenceChannelData | Mapping[str, Any],
    ) -> AuthenticationToken:
        """Authenticate a presence channel subscription. presence_data is required."""
        return self._authenticator.authenticate_presence(channel_name, socket_id, presence_data)

    def process_webhook(
        self,
        signature: str | None,
        body: bytes | str | None,
        key: str | None = None,
    ) -> Webhook:
        """
        Verify an incoming webhook.

        Args:
            signature: Value of the signature header
            body: Raw request body, unparsed
            key: Value of the app key header, if the caller has it

        Returns:
            Webhook; check is_valid before using its events
        """
        return self._webhook_verifier.process(signature, body, key)

    def _build_trigger(
        self,
        channels: str | Sequence[str],
        event_name: str,
        data: Any,
        socket_id: str | None,
    ) -> TriggerRequest:
        request = self._request_builder.build(channels, event_name, data, socket_id)
        logger.debug(f"Triggering '{event_name}' on {len(request.channels)} channel(s)")
        return request

    def _build_batch(self, events: Sequence[Event]) -> BatchTriggerRequest:
        request = self._request_builder.build_batch(events)
        logger.debug(f"Triggering batch of {len(request.batch)} event(s)")
        return request

    def _trigger_result(self, response: TransportResponse) -> TriggerResult:
        result = TriggerResult.from_response(response, self._deserializer)
        logger.debug(f"Trigger returned status {result.status_code}")
        return result

    def _get_result(self, resource: str, response: TransportResponse) -> GetResult:
        parse = ChannelsList.from_dict if resource == "/channels" else None
        result = GetResult.from_response(response, self._deserializer, parse)
        if not result.ok:
            logger.warning(f"GET {resource} returned status {result.status_code}")
        return result

    def _channel_query(
        self, channel_name: str, info: Sequence[str] | None
    ) -> tuple[str, dict[str, Any]]:
        self._validator.validate_channel_name(channel_name)
        return f"/channels/{channel_name}", _info_params(info)

    def _channels_query(
        self, info: Sequence[str] | None, filter_by_prefix: str | None
    ) -> tuple[str, dict[str, Any]]:
        params = _info_params(info)
        if filter_by_prefix:
            params["filter_by_prefix"] = filter_by_prefix
        return "/channels", params

    def _users_query(self, channel_name: str) -> str:
        self._validator.validate_channel_name(channel_name)
        return f"/channels/{channel_name}/users"


def _info_params(info: Sequence[str] | None) -> dict[str, Any]:
    if not info:
        return {}
    return {"info": ",".join(info)}


class ChannelsClient(_BaseClient):
    """
    Server-side client for the HTTP API.

    Example:
        client = ChannelsClient("app-id", "app-key", "app-secret", transport=transport)
        client.trigger("my-channel", "my-event", {"message": "hello"})
        token = client.authenticate("private-user.123", socket_id)
    """

    def __init__(
        self,
        app_id: str | None = None,
        app_key: str | None = None,
        app_secret: str | None = None,
        *,
        config: ChannelsConfig | None = None,
        transport: Transport | None = None,
        serializer: JsonSerializer | None = None,
        deserializer: JsonDeserializer | None = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            app_id: Application ID (or use CHANNELS_APP_ID env var)
            app_key: Application key (or use CHANNELS_APP_KEY env var)
            app_secret: Application secret (or use CHANNELS_APP_SECRET env var)
            config: Optional ChannelsConfig instance (overrides individual params)
            transport: Sends requests to the HTTP API
            serializer: JSON serializer for event data and presence data
            deserializer: JSON deserializer for responses and webhooks
        """
        super().__init__(
            app_id,
            app_key,
            app_secret,
            config=config,
            serializer=serializer,
            deserializer=deserializer,
        )
        self._transport = transport

    @property
    def transport(self) -> Transport:
        if self._transport is None:
            raise RuntimeError("No transport configured")
        return self._transport

    def trigger(
        self,
        channels: str | Sequence[str],
        event_name: str,
        data: Any,
        socket_id: str | None = None,
    ) -> TriggerResult:
        """
        Trigger an event on one or more channels.

        Args:
            channels: Channel name, or a sequence of them
            event_name: Name of the event
            data: Event payload
            socket_id: Connection to exclude from receiving the event

        Raises:
            TriggerResponseError: For a non-2xx response or unparseable body
        """
        request = self._build_trigger(channels, event_name, data, socket_id)
        return self._trigger_result(self.transport.trigger(request))

    def trigger_batch(self, events: Sequence[Event]) -> TriggerResult:
        """Trigger up to the configured maximum of events in one call."""
        request = self._build_batch(events)
        return self._trigger_result(self.transport.trigger_batch(request))

    def get(self, resource: str, params: QueryParams | None = None) -> GetResult:
        """Make a GET request to a resource of the HTTP API."""
        logger.debug(f"GET {resource}")
        return self._get_result(resource, self.transport.get(resource, params))

    def fetch_state_for_channel(
        self, channel_name: str, info: Sequence[str] | None = None
    ) -> GetResult:
        """Query the state of a channel, e.g. info=["user_count"]."""
        resource, params = self._channel_query(channel_name, info)
        return self.get(resource, params)

    def fetch_state_for_channels(
        self,
        info: Sequence[str] | None = None,
        filter_by_prefix: str | None = None,
    ) -> GetResult:
        """Query the state of all channels. data is a ChannelsList."""
        resource, params = self._channels_query(info, filter_by_prefix)
        return self.get(resource, params)

    def fetch_users_from_presence_channel(self, channel_name: str) -> GetResult:
        """Query the users subscribed to a presence channel."""
        return self.get(self._users_query(channel_name))


class AsyncChannelsClient(_BaseClient):
    """
    Asyncio variant of ChannelsClient.

    Only calls that go through the transport are coroutines; authentication
    and webhook verification stay synchronous.

    Example:
        client = AsyncChannelsClient(config=config, transport=transport)
        await client.trigger(["a", "b"], "my-event", {"message": "hello"})
    """

    def __init__(
        self,
        app_id: str | None = None,
        app_key: str | None = None,
        app_secret: str | None = None,
        *,
        config: ChannelsConfig | None = None,
        transport: AsyncTransport | None = None,
        serializer: JsonSerializer | None = None,
        deserializer: JsonDeserializer | None = None,
    ) -> None:
        super().__init__(
            app_id,
            app_key,
            app_secret,
            config=config,
            serializer=serializer,
            deserializer=deserializer,
        )
        self._transport = transport

    @property
    def transport(self) -> AsyncTransport:
        if self._transport is None:
            raise RuntimeError("No transport configured")
        return self._transport

    async def trigger(
        self,
        channels: str | Sequence[str],
        event_name: str,
        data: Any,
        socket_id: str | None = None,
    ) -> TriggerResult:
        """Trigger an event on one or more channels."""
        request = self._build_trigger(channels, event_name, data, socket_id)
        return self._trigger_result(await self.transport.trigger(request))

    async def trigger_batch(self, events: Sequence[Event]) -> TriggerResult:
        """Trigger a batch of events."""
        request = self._build_batch(events)
        return self._trigger_result(await self.transport.trigger_batch(request))

    async def get(self, resource: str, params: QueryParams | None = None) -> GetResult:
        """Make a GET request to a resource of the HTTP API."""
        logger.debug(f"GET {resource}")
        return self._get_result(resource, await self.transport.get(resource, params))

    async def fetch_state_for_channel(
        self, channel_name: str, info: Sequence[str] | None = None
    ) -> GetResult:
        resource, params = self._channel_query(channel_name, info)
        return await self.get(resource, params)

    async def fetch_state_for_channels(
        self,
        info: Sequence[str] | None = None,
        filter_by_prefix: str | None = None,
    ) -> GetResult:
        resource, params = self._channels_query(info, filter_by_prefix)
        return await self.get(resource, params)

    async def fetch_users_from_presence_channel(self, channel_name: str) -> GetResult:
        return await self.get(self._users_query(channel_name))
