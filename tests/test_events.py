"""Tests for trigger request construction."""

import json

import pytest

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
    EventDataSizeExceededError,
    MissingRequiredFieldError,
    SocketIdFormatError,
)
from channels_server.validation import ValidationRules, Validator


@pytest.fixture
def builder() -> TriggerRequestBuilder:
    return TriggerRequestBuilder()


class TestTriggerRequest:
    """Tests for the TriggerRequest class."""

    def test_to_dict(self):
        request = TriggerRequest(name="my_event", channels=("my-channel",), data='{"hello":"world"}')

        assert request.to_dict() == {
            "name": "my_event",
            "channels": ["my-channel"],
            "data": '{"hello":"world"}',
        }

    def test_to_json_with_socket_id(self):
        request = TriggerRequest(name="e", channels=("a", "b"), data="x", socket_id="123.098")

        result = json.loads(request.to_json())

        assert result["socket_id"] == "123.098"
        assert result["channels"] == ["a", "b"]


class TestBatchTriggerRequest:
    """Tests for the BatchTriggerRequest class."""

    def test_to_dict(self):
        request = BatchTriggerRequest(
            batch=(
                EventPayload(channel="a", name="e1", data="1"),
                EventPayload(channel="b", name="e2", data="2", socket_id="1.2"),
            )
        )

        assert request.to_dict() == {
            "batch": [
                {"channel": "a", "name": "e1", "data": "1"},
                {"channel": "b", "name": "e2", "data": "2", "socket_id": "1.2"},
            ]
        }


class TestBuild:
    """Tests for building single trigger requests."""

    def test_single_channel(self, builder):
        request = builder.build("my-channel", "my_event", {"hello": "world"})

        assert request.channels == ("my-channel",)
        assert request.name == "my_event"
        assert request.data == '{"hello":"world"}'
        assert request.socket_id is None

    def test_multiple_channels(self, builder):
        request = builder.build(["my-channel", "my-channel-2"], "my_event", {}, socket_id="123.456")

        assert request.channels == ("my-channel", "my-channel-2")
        assert request.socket_id == "123.456"

    def test_string_data_is_json_encoded(self, builder):
        """Test that string payloads go through the serializer like any other."""
        request = builder.build("my-channel", "my_event", "hello")

        assert request.data == json.dumps("hello")
        assert json.loads(request.to_json())["data"] == '"hello"'

    def test_custom_serializer(self):
        builder = TriggerRequestBuilder(serializer=lambda value: "custom")

        assert builder.build("c", "e", {"a": 1}).data == "custom"

    @pytest.mark.parametrize(
        "channel_name",
        ["test_channel:", ":test_channel", ":\ntest_channel", "test_channel\n:"],
    )
    def test_invalid_channel_name(self, builder, channel_name):
        with pytest.raises(ChannelNameFormatError):
            builder.build(channel_name, "my_event", {})

    def test_channel_names_in_list_are_validated(self, builder):
        with pytest.raises(ChannelNameFormatError):
            builder.build(["this_one_is_okay", "test_channel\n:"], "my_event", {})

    def test_channel_name_too_long(self, builder):
        with pytest.raises(ChannelNameLengthError):
            builder.build("a" * 165, "my_event", {})

    @pytest.mark.parametrize(
        "socket_id", [":444.444", "444.444:", "444.444a", "444", "\n444.444", "444.444\n", ""]
    )
    def test_invalid_socket_id(self, builder, socket_id):
        with pytest.raises(SocketIdFormatError):
            builder.build("my-channel", "my_event", {}, socket_id=socket_id)

    def test_empty_event_name(self, builder):
        with pytest.raises(MissingRequiredFieldError):
            builder.build("my-channel", "", {})

    def test_no_channels(self, builder):
        with pytest.raises(MissingRequiredFieldError):
            builder.build([], "my_event", {})


class TestBuildBatch:
    """Tests for building batch trigger requests."""

    def test_batch(self, builder):
        events = [
            Event(channel="a", name="e1", data={"n": 1}),
            Event(channel="b", name="e2", data="raw", socket_id="1.2"),
        ]

        request = builder.build_batch(events)

        assert request.batch == (
            EventPayload(channel="a", name="e1", data='{"n":1}'),
            EventPayload(channel="b", name="e2", data='"raw"', socket_id="1.2"),
        )

    def test_batch_too_large(self, builder):
        events = [Event(channel="a", name="e") for _ in range(11)]

        with pytest.raises(BatchSizeExceededError):
            builder.build_batch(events)

    def test_empty_batch(self, builder):
        with pytest.raises(MissingRequiredFieldError):
            builder.build_batch([])

    def test_event_without_name(self, builder):
        with pytest.raises(MissingRequiredFieldError):
            builder.build_batch([Event(channel="a", name="")])

    def test_data_size_limit(self):
        builder = TriggerRequestBuilder(
            Validator(ValidationRules(batch_event_data_size_limit=12))
        )

        builder.build_batch([Event(channel="a", name="e", data="0123456789")])
        with pytest.raises(EventDataSizeExceededError):
            builder.build_batch([Event(channel="a", name="e", data="0123456789a")])

    def test_data_size_limit_applies_to_serialized_data(self):
        """Test that the limit is measured on the JSON, not the Python object."""
        builder = TriggerRequestBuilder(
            Validator(ValidationRules(batch_event_data_size_limit=10))
        )

        with pytest.raises(EventDataSizeExceededError):
            builder.build_batch([Event(channel="a", name="e", data={"key": "val"})])

    def test_string_data_size_includes_json_quotes(self):
        """Test that a string payload is measured after JSON encoding."""
        builder = TriggerRequestBuilder(
            Validator(ValidationRules(batch_event_data_size_limit=5))
        )

        with pytest.raises(EventDataSizeExceededError) as exc_info:
            builder.build_batch([Event(channel="a", name="e", data="abcd")])

        assert exc_info.value.size == 6
