"""Discord bot client: posts notification embeds to one channel."""

import logging
from typing import Optional

import httpx

from notifier import __version__
from notifier.channels.discord import build_message
from notifier.schemas.notification import Notification

logger = logging.getLogger(__name__)


class ChatClientError(Exception):
    """The Discord client could not be set up."""


class ChatDeliveryError(ChatClientError):
    """A message could not be delivered to Discord."""


class DiscordClient:
    """
    Thin wrapper over the Discord REST API.

    Args:
        token: Bot token, sent as ``Authorization: Bot <token>``.
        channel_id: Channel every notification is posted to.
        api_url: REST API base URL.
        timeout: Per-request timeout in seconds.
        transport: Optional httpx transport (tests use ``httpx.MockTransport``).
    """

    def __init__(
        self,
        token: str,
        channel_id: str,
        api_url: str = "https://discord.com/api/v10",
        timeout: float = 10,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        if not token:
            raise ValueError("discord token is required")
        if not channel_id:
            raise ValueError("discord channel ID is required")
        self.channel_id = channel_id
        self._token = token
        self._api_url = api_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport
        self._http: Optional[httpx.AsyncClient] = None

    async def start(self) -> None:
        """Open the HTTP client and check the token against ``/users/@me``."""
        self._http = httpx.AsyncClient(
            base_url=self._api_url,
            timeout=self._timeout,
            transport=self._transport,
            headers={
                "Authorization": f"Bot {self._token}",
                "User-Agent": f"DiscordBot (seerr-notifier, {__version__})",
            },
        )
        try:
            response = await self._http.get("/users/@me")
        except httpx.HTTPError as exc:
            await self.close()
            raise ChatClientError(f"Cannot reach Discord: {exc}") from exc

        if response.status_code >= 400:
            await self.close()
            raise ChatClientError(
                f"Discord rejected the bot token (status {response.status_code})"
            )

        try:
            bot_name = response.json().get("username", "unknown")
        except (ValueError, AttributeError) as exc:
            await self.close()
            raise ChatClientError("Discord returned an unexpected /users/@me response") from exc
        logger.info("Discord bot %s connected, posting to channel %s", bot_name, self.channel_id)

    async def close(self) -> None:
        if self._http is not None:
            await self._http.aclose()
            self._http = None
            logger.debug("Discord client closed")

    async def send_notification(self, notification: Notification) -> None:
        if self._http is None:
            raise ChatDeliveryError("Discord client is not started")

        message = build_message(notification)
        try:
            response = await self._http.post(
                f"/channels/{self.channel_id}/messages",
                json={"embeds": [message.to_embed()]},
            )
        except httpx.HTTPError as exc:
            raise ChatDeliveryError(f"Error sending message to Discord: {exc}") from exc

        if response.status_code >= 400:
            raise ChatDeliveryError(
                f"Discord returned status {response.status_code}: {response.text[:200]}"
            )

        logger.info(
            "Sent %s notification to Discord channel %s",
            notification.event or "unknown",
            self.channel_id,
        )
