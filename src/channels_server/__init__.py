"""
channels-server - Server-side client for the Channels HTTP API.

Example:
    from channels_server import ChannelsClient

    client = ChannelsClient(transport=transport)
    client.trigger("my-channel", "my-event", {"message": "hello"})
    token = client.authenticate("private-user.123", socket_id)
    webhook = client.process_webhook(signature, body)
"""

from channels_server.auth import AuthenticationToken, Authenticator, PresenceChannelData
from channels_server.client import AsyncChannelsClient, ChannelsClient
from channels_server.config import ChannelsConfig
from channels_server.events import (
    BatchTriggerRequest,
    Event,
    EventPayload,
    TriggerRequest,
    TriggerRequestBuilder,
)
from channels_server.exceptions import (
    BatchSizeExceededError,
    ChannelNameFormatError,
    ChannelNameLengthError,
    ChannelsError,
    EventDataSizeExceededError,
    GetResponseError,
    InvalidInputError,
    MissingRequiredFieldError,
    ResponseError,
    SocketIdFormatError,
    TriggerResponseError,
)
from channels_server.results import ChannelsList, GetResult, TransportResponse, TriggerResult
from channels_server.signing import Signer, hmac_sha256_hex
from channels_server.types import AsyncTransport, Transport
from channels_server.validation import ValidationRules, Validator
from channels_server.webhooks import Webhook, WebhookData, WebhookVerifier

__version__ = "0.1.0"

__all__ = [
    # Main clients
    "ChannelsClient",
    "AsyncChannelsClient",
    "ChannelsConfig",
    # Core
    "Validator",
    "ValidationRules",
    "Signer",
    "hmac_sha256_hex",
    "Authenticator",
    "AuthenticationToken",
    "PresenceChannelData",
    "WebhookVerifier",
    "Webhook",
    "WebhookData",
    # Trigger requests
    "Event",
    "EventPayload",
    "TriggerRequest",
    "BatchTriggerRequest",
    "TriggerRequestBuilder",
    # Results
    "TransportResponse",
    "TriggerResult",
    "GetResult",
    "ChannelsList",
    # Transport
    "Transport",
    "AsyncTransport",
    # Exceptions
    "ChannelsError",
    "InvalidInputError",
    "ChannelNameFormatError",
    "ChannelNameLengthError",
    "SocketIdFormatError",
    "BatchSizeExceededError",
    "EventDataSizeExceededError",
    "MissingRequiredFieldError",
    "ResponseError",
    "TriggerResponseError",
    "GetResponseError",
]
