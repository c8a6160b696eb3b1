"""HMAC-SHA256 signatures for channel auth and webhooks."""

import hashlib
import hmac

from .types import KeyedHash


def hmac_sha256_hex(key: str, message: bytes) -> str:
    """HMAC-SHA256 of message keyed with the UTF-8 bytes of key, as lowercase hex."""
    return hmac.new(key.encode("utf-8"), message, hashlib.sha256).hexdigest()


class Signer:
    """
    Builds the strings to sign and signs them with the app secret.

    Channel auth signs:
        f"{socket_id}:{channel_name}"
    or, for presence channels:
        f"{socket_id}:{channel_name}:{channel_data}"

    Webhooks sign the raw request body as received.
    """

    def __init__(self, app_secret: str, keyed_hash: KeyedHash = hmac_sha256_hex) -> None:
        self._app_secret = app_secret
        self._keyed_hash = keyed_hash

    def __repr__(self) -> str:
        return f"{type(self).__name__}(app_secret='**********')"

    def sign_for_channel_auth(
        self,
        socket_id: str,
        channel_name: str,
        channel_data: str | None = None,
    ) -> str:
        """
        Sign a subscription request.

        Args:
            socket_id: Socket ID of the subscribing connection
            channel_name: The channel being subscribed to
            channel_data: Presence JSON, exactly as returned to the client

        Returns:
            Hex digest of the signature
        """
        if channel_data is None:
            string_to_sign = f"{socket_id}:{channel_name}"
        else:
            string_to_sign = f"{socket_id}:{channel_name}:{channel_data}"
        return self._sign(string_to_sign.encode("utf-8"))

    def sign_for_webhook(self, body: bytes | str) -> str:
        """Sign a webhook body. Strings are encoded as UTF-8, bytes are used as-is."""
        if isinstance(body, str):
            body = body.encode("utf-8")
        return self._sign(body)

    def _sign(self, message: bytes) -> str:
        return self._keyed_hash(self._app_secret, message)
