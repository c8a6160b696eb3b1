#!/usr/bin/env python3
"""
Channel authentication and webhook example for channels-server.

This example shows how an auth endpoint signs a subscription and how a
webhook endpoint checks a request before trusting it.

Environment variables required:
    CHANNELS_APP_ID: Your application ID
    CHANNELS_APP_KEY: Your application key
    CHANNELS_APP_SECRET: Your application secret
"""

import logging

from channels_server import ChannelsClient, SocketIdFormatError

logging.basicConfig(level=logging.INFO)


def auth_endpoint(client: ChannelsClient, channel_name: str, socket_id: str, user_id: str) -> str:
    """Return the JSON body an auth endpoint would send back."""
    if channel_name.startswith("presence-"):
        token = client.authenticate_presence(
            channel_name, socket_id, {"user_id": user_id, "user_info": {"name": "Alice"}}
        )
    else:
        token = client.authenticate(channel_name, socket_id)
    return token.to_json()


def webhook_endpoint(client: ChannelsClient, headers: dict[str, str], body: bytes) -> int:
    """Return the HTTP status a webhook endpoint would answer with."""
    webhook = client.process_webhook(
        headers.get("X-Pusher-Signature"), body, key=headers.get("X-Pusher-Key")
    )
    if not webhook.is_valid:
        print(f"Rejected webhook: {webhook.validation_errors}")
        return 401

    for event in webhook.events:
        print(f"{webhook.time}: {event['name']} on {event.get('channel')}")
    return 200


def main() -> None:
    """Main entry point."""
    client = ChannelsClient()

    print(auth_endpoint(client, "private-user.123", "123.456", "123"))
    print(auth_endpoint(client, "presence-chat.room1", "123.456", "123"))

    try:
        auth_endpoint(client, "private-user.123", "not-a-socket", "123")
    except SocketIdFormatError as e:
        print(f"Refused: {e}")

    body = b'{"time_ms":1327078148132,"events":[{"name":"channel_occupied","channel":"a"}]}'
    print(webhook_endpoint(client, {"X-Pusher-Signature": "forged"}, body))


if __name__ == "__main__":
    main()
