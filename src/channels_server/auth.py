"""Authentication tokens for private and presence channel subscriptions."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping

from .exceptions import MissingRequiredFieldError, SocketIdFormatError
from .serialization import to_json
from .signing import Signer
from .types import JsonSerializer
from .validation import Validator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PresenceChannelData:
    """Identity of a user subscribing to a presence channel."""

    user_id: str
    user_info: Any = None

    def __post_init__(self) -> None:
        if self.user_id is None or self.user_id == "":
            raise MissingRequiredFieldError("user_id")
        # user_id is always stored as a string
        object.__setattr__(self, "user_id", str(self.user_id))

    @classmethod
    def coerce(cls, value: PresenceChannelData | Mapping[str, Any]) -> PresenceChannelData:
        """Accept either an instance or a mapping with 'user_id' and optional 'user_info'."""
        if isinstance(value, cls):
            return value
        user_id = value.get("user_id")
        return cls(user_id=user_id, user_info=value.get("user_info"))

    def to_dict(self) -> dict[str, Any]:
        """Wire form: user_id first, user_info only when present."""
        data: dict[str, Any] = {"user_id": self.user_id}
        if self.user_info is not None:
            data["user_info"] = self.user_info
        return data


@dataclass(frozen=True)
class AuthenticationToken:
    """
    Payload returned to a subscribing client.

    auth is "<app_key>:<hex signature>". channel_data is the presence JSON
    that was signed, byte for byte, and is None for private channels.
    """

    auth: str
    channel_data: str | None = None

    def to_dict(self) -> dict[str, str]:
        data = {"auth": self.auth}
        if self.channel_data is not None:
            data["channel_data"] = self.channel_data
        return data

    def to_json(self) -> str:
        return to_json(self.to_dict())


class Authenticator:
    """
    Produces authentication tokens for channel subscriptions.

    Inputs are validated before anything is signed, and every token is
    computed fresh from its own inputs.
    """

    def __init__(
        self,
        app_key: str,
        signer: Signer,
        validator: Validator | None = None,
        serializer: JsonSerializer = to_json,
    ) -> None:
        self.app_key = app_key
        self._signer = signer
        self._validator = validator or Validator()
        self._serializer = serializer

    def authenticate(
        self,
        channel_name: str,
        socket_id: str,
        presence_data: PresenceChannelData | Mapping[str, Any] | None = None,
    ) -> AuthenticationToken:
        """
        Generate the authentication token for a channel subscription.

        Args:
            channel_name: The channel to authenticate for
            socket_id: The socket ID of the subscribing connection
            presence_data: User data for presence channels (must include 'user_id')

        Returns:
            AuthenticationToken, with channel_data for presence channels

        Raises:
            SocketIdFormatError: If socket_id is missing or malformed
            ChannelNameLengthError: If channel_name is too long
            ChannelNameFormatError: If channel_name has disallowed characters
            MissingRequiredFieldError: If presence_data has no user_id
        """
        if socket_id is None:
            raise SocketIdFormatError(socket_id)
        self._validator.validate_socket_id(socket_id)
        self._validator.validate_channel_name(channel_name)

        if presence_data is None:
            signature = self._signer.sign_for_channel_auth(socket_id, channel_name)
            logger.debug(f"Authenticated private subscription to '{channel_name}'")
            return AuthenticationToken(auth=f"{self.app_key}:{signature}")

        # Serialized once: the same string is signed and returned
        channel_data = self._serializer(PresenceChannelData.coerce(presence_data).to_dict())
        signature = self._signer.sign_for_channel_auth(socket_id, channel_name, channel_data)
        logger.debug(f"Authenticated presence subscription to '{channel_name}'")
        return AuthenticationToken(auth=f"{self.app_key}:{signature}", channel_data=channel_data)

    def authenticate_presence(
        self,
        channel_name: str,
        socket_id: str,
        presence_data: PresenceChannelData | Mapping[str, Any],
    ) -> AuthenticationToken:
        """Like authenticate(), but presence_data is mandatory."""
        if presence_data is None:
            raise MissingRequiredFieldError("presence_data")
        return self.authenticate(channel_name, socket_id, presence_data)
