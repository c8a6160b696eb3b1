"""Custom exceptions for channels-server."""


class ChannelsError(Exception):
    """Base exception for all channels-server errors."""

    pass


class InvalidInputError(ChannelsError, ValueError):
    """Input rejected before any signing or transport work."""

    pass


class ChannelNameFormatError(InvalidInputError):
    """Channel name contains characters outside the allowed set."""

    def __init__(self, channel_name: str) -> None:
        super().__init__(f"Channel name is not in the allowed format: {channel_name!r}")
        self.channel_name = channel_name


class ChannelNameLengthError(InvalidInputError):
    """Channel name is longer than the allowed maximum."""

    def __init__(self, length: int, max_length: int) -> None:
        super().__init__(
            f"Channel name is {length} characters long, the maximum is {max_length}"
        )
        self.length = length
        self.max_length = max_length


class SocketIdFormatError(InvalidInputError):
    """Socket ID is not of the form '<digits>.<digits>'."""

    def __init__(self, socket_id: str | None) -> None:
        super().__init__(f"Socket ID is not in the allowed format: {socket_id!r}")
        self.socket_id = socket_id


class BatchSizeExceededError(InvalidInputError):
    """Too many events in a single batch trigger."""

    def __init__(self, size: int, max_size: int) -> None:
        super().__init__(f"Batch contains {size} events, the maximum is {max_size}")
        self.size = size
        self.max_size = max_size


class EventDataSizeExceededError(InvalidInputError):
    """Serialized event data is larger than the configured limit."""

    def __init__(self, size: int, limit: int) -> None:
        super().__init__(
            f"The data content of this event exceeds the allowed maximum ({limit} bytes). "
            f"The actual size is {size} bytes."
        )
        self.size = size
        self.limit = limit


class MissingRequiredFieldError(InvalidInputError):
    """A required argument or field was missing or empty."""

    def __init__(self, field: str) -> None:
        super().__init__(f"Required field is missing: {field}")
        self.field = field


class ResponseError(ChannelsError):
    """A transport response could not be turned into a result."""

    def __init__(self, message: str, status_code: int, body: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class TriggerResponseError(ResponseError):
    """The trigger call returned a non-2xx status or an unreadable body."""

    pass


class GetResponseError(ResponseError):
    """A successful GET call returned a body that could not be read."""

    pass
