"""Verification of inbound webhooks."""

from __future__ import annotations

import hmac
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from .serialization import from_json
from .signing import Signer
from .types import JsonDeserializer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WebhookData:
    """Parsed webhook body."""

    time_ms: int
    events: tuple[dict[str, Any], ...] = ()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> WebhookData:
        events = data.get("events") or []
        if not isinstance(events, list) or not all(isinstance(e, dict) for e in events):
            raise ValueError("'events' must be a list of objects")
        return cls(time_ms=int(data["time_ms"]), events=tuple(events))


@dataclass(frozen=True)
class Webhook:
    """
    Result of processing a webhook.

    The parsed data is only present when the signature checked out. An
    invalid webhook is a normal outcome: look at is_valid, not for exceptions.
    """

    is_valid: bool
    data: WebhookData | None = None
    validation_errors: tuple[str, ...] = field(default_factory=tuple)

    @property
    def events(self) -> tuple[dict[str, Any], ...]:
        """Webhook events, empty unless valid."""
        if self.data is None:
            return ()
        return self.data.events

    @property
    def time(self) -> datetime | None:
        """When the webhook was created, in UTC."""
        if self.data is None:
            return None
        return datetime.fromtimestamp(self.data.time_ms / 1000, tz=timezone.utc)


class WebhookVerifier:
    """Checks webhook signatures and only then parses the body."""

    def __init__(
        self,
        app_key: str,
        signer: Signer,
        deserializer: JsonDeserializer = from_json,
    ) -> None:
        self.app_key = app_key
        self._signer = signer
        self._deserializer = deserializer

    def process(
        self,
        signature: str | None,
        body: bytes | str | None,
        key: str | None = None,
    ) -> Webhook:
        """
        Verify a webhook.

        Args:
            signature: Value of the signature header
            body: Raw request body, exactly as received
            key: Value of the app key header, checked when given

        Returns:
            Webhook with is_valid set, and parsed data if valid
        """
        errors: list[str] = []
        if not signature:
            errors.append("The supplied signature to check was null or empty")
        if not body:
            errors.append("The supplied body to check was null or empty")
        if key is not None and key != self.app_key:
            errors.append(f"The supplied key '{key}' does not match the app key")
        if errors:
            return self._reject(errors)

        expected = self._signer.sign_for_webhook(body)
        if not hmac.compare_digest(expected.encode("utf-8"), signature.encode("utf-8")):
            return self._reject(["The signature did not validate"])

        raw = body.decode("utf-8") if isinstance(body, bytes) else body
        try:
            parsed = self._deserializer(raw)
            data = WebhookData.from_dict(parsed)
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            return self._reject([f"The body could not be parsed: {e}"])

        logger.debug(f"Verified webhook with {len(data.events)} event(s)")
        return Webhook(is_valid=True, data=data)

    def _reject(self, errors: list[str]) -> Webhook:
        logger.warning(f"Rejected webhook: {'; '.join(errors)}")
        return Webhook(is_valid=False, validation_errors=tuple(errors))
