"""Channel name, socket ID and event batch validation."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterable, Optional, Sequence

from .exceptions import (
    BatchSizeExceededError,
    ChannelNameFormatError,
    ChannelNameLengthError,
    EventDataSizeExceededError,
    SocketIdFormatError,
)

if TYPE_CHECKING:
    from .events import Event

CHANNEL_NAME_PATTERN = re.compile(r"[A-Za-z0-9_=@,.;\-]+")
SOCKET_ID_PATTERN = re.compile(r"[0-9]+\.[0-9]+")
CHANNEL_NAME_MAX_LENGTH = 164
MAX_BATCH_SIZE = 10


@dataclass(frozen=True)
class ValidationRules:
    """
    Immutable limits and grammars used by the Validator.

    Patterns are matched against the whole string, so they carry no anchors.
    """

    channel_name_max_length: int = CHANNEL_NAME_MAX_LENGTH
    max_batch_size: int = MAX_BATCH_SIZE
    batch_event_data_size_limit: Optional[int] = None
    channel_name_pattern: re.Pattern[str] = field(default=CHANNEL_NAME_PATTERN)
    socket_id_pattern: re.Pattern[str] = field(default=SOCKET_ID_PATTERN)


class Validator:
    """
    Pure checks run before anything is signed or sent.

    Every method either returns None or raises an InvalidInputError subclass.
    """

    def __init__(self, rules: ValidationRules | None = None) -> None:
        self.rules = rules or ValidationRules()

    def validate_channel_name(self, channel_name: str) -> None:
        """
        Check a channel name's length and characters.

        Raises:
            ChannelNameLengthError: If longer than the configured maximum
            ChannelNameFormatError: If any character is outside the allowed set
        """
        if len(channel_name) > self.rules.channel_name_max_length:
            raise ChannelNameLengthError(len(channel_name), self.rules.channel_name_max_length)

        if self.rules.channel_name_pattern.fullmatch(channel_name) is None:
            raise ChannelNameFormatError(channel_name)

    def validate_channel_names(self, channel_names: Iterable[str]) -> None:
        """Validate each name in order, stopping at the first bad one."""
        for name in channel_names:
            self.validate_channel_name(name)

    def validate_socket_id(self, socket_id: str | None) -> None:
        """
        Check a socket ID, if one was given.

        An empty string is a format violation, not an absent value.
        """
        if socket_id is None:
            return

        if self.rules.socket_id_pattern.fullmatch(socket_id) is None:
            raise SocketIdFormatError(socket_id)

    def validate_event_batch(self, events: Sequence[Event]) -> None:
        """Check the batch size, then every event's channel and socket ID."""
        if len(events) > self.rules.max_batch_size:
            raise BatchSizeExceededError(len(events), self.rules.max_batch_size)

        for event in events:
            self.validate_channel_name(event.channel)
            self.validate_socket_id(event.socket_id)

    def validate_batch_event_data(self, data: str | None) -> None:
        """Check serialized event data against the size limit, when one is set."""
        limit = self.rules.batch_event_data_size_limit
        if limit is None or data is None:
            return

        size = len(data.encode("utf-8"))
        if size > limit:
            raise EventDataSizeExceededError(size, limit)
