import json

import httpx
import pytest

from notifier.channels.client import ChatClientError, ChatDeliveryError, DiscordClient
from notifier.schemas.notification import Notification

API = "https://discord.test/api/v10"


def make_client(handler) -> DiscordClient:
    return DiscordClient(
        token="bot-token",
        channel_id="555",
        api_url=API,
        transport=httpx.MockTransport(handler),
    )


def ok_handler(requests):
    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        if request.url.path.endswith("/users/@me"):
            return httpx.Response(200, json={"id": "1", "username": "notifier-bot"})
        return httpx.Response(200, json={"id": "msg-1"})

    return handler


def test_constructor_requires_token_and_channel():
    with pytest.raises(ValueError):
        DiscordClient(token="", channel_id="555")
    with pytest.raises(ValueError):
        DiscordClient(token="bot-token", channel_id="")


async def test_start_checks_token():
    requests = []
    client = make_client(ok_handler(requests))

    await client.start()
    await client.close()

    assert len(requests) == 1
    assert requests[0].url.host == "discord.test"
    assert requests[0].url.path == "/api/v10/users/@me"
    assert requests[0].headers["Authorization"] == "Bot bot-token"


async def test_start_fails_on_rejected_token():
    client = make_client(lambda request: httpx.Response(401, json={"message": "401: Unauthorized"}))

    with pytest.raises(ChatClientError):
        await client.start()


async def test_start_fails_when_unreachable():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(ChatClientError):
        await make_client(handler).start()


async def test_send_posts_one_embed_to_channel():
    requests = []
    client = make_client(ok_handler(requests))
    await client.start()

    await client.send_notification(
        Notification.model_validate({"subject": "Dune", "event": "media.approved"})
    )
    await client.close()

    post = requests[-1]
    assert post.method == "POST"
    assert post.url.path == "/api/v10/channels/555/messages"
    body = json.loads(post.content)
    assert len(body["embeds"]) == 1
    assert body["embeds"][0]["title"] == "Dune"
    assert body["embeds"][0]["color"] == 0x00FF99


async def test_send_raises_on_error_status():
    def handler(request):
        if request.url.path.endswith("/users/@me"):
            return httpx.Response(200, json={"username": "notifier-bot"})
        return httpx.Response(403, json={"message": "Missing Access"})

    client = make_client(handler)
    await client.start()

    with pytest.raises(ChatDeliveryError, match="403"):
        await client.send_notification(Notification())
    await client.close()


async def test_send_raises_on_transport_error():
    def handler(request):
        if request.url.path.endswith("/users/@me"):
            return httpx.Response(200, json={"username": "notifier-bot"})
        raise httpx.ReadTimeout("timed out", request=request)

    client = make_client(handler)
    await client.start()

    with pytest.raises(ChatDeliveryError):
        await client.send_notification(Notification())
    await client.close()


async def test_send_before_start_fails():
    client = make_client(ok_handler([]))

    with pytest.raises(ChatDeliveryError):
        await client.send_notification(Notification())


async def test_close_without_start_is_noop():
    await make_client(ok_handler([])).close()


async def test_start_fails_on_non_json_identity_and_closes():
    client = make_client(lambda request: httpx.Response(200, text="<html>maintenance</html>"))

    with pytest.raises(ChatClientError):
        await client.start()

    assert client._http is None
