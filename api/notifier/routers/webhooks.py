import json
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import PlainTextResponse
from pydantic import ValidationError

from notifier.channels.client import DiscordClient
from notifier.resolver import resolve_platform_ids
from notifier.schemas.notification import Notification
from notifier.store import UserMappingStore, get_store

wh_logger = logging.getLogger("webhooks")

router = APIRouter(tags=["webhooks"])


def get_chat_client(request: Request) -> Optional[DiscordClient]:
    """The started Discord client, or None when chat delivery is disabled."""
    return getattr(request.app.state, "chat_client", None)


def _log_notification(notification: Notification) -> None:
    wh_logger.info(
        "Received notification: type=%s event=%s subject=%r",
        notification.notification_type,
        notification.event,
        notification.subject,
    )
    if notification.has_media:
        media = notification.media
        wh_logger.debug(
            "  media: type=%s tmdb=%s tvdb=%s status=%s status4k=%s",
            media.media_type, media.tmdb_id, media.tvdb_id, media.status, media.status_4k,
        )
    if notification.has_request:
        wh_logger.debug(
            "  request: id=%s by=%s",
            notification.request.request_id, notification.request.requested_by_username,
        )
    if notification.has_issue:
        issue = notification.issue
        wh_logger.debug(
            "  issue: id=%s type=%s status=%s by=%s",
            issue.issue_id, issue.issue_type, issue.issue_status, issue.reported_by_username,
        )
    if notification.has_comment:
        wh_logger.debug("  comment: by=%s", notification.comment.commented_by_username)


# ---------------------------------------------------------------------------
# Public: receive Overseerr notifications
# ---------------------------------------------------------------------------


@router.api_route(
    "/webhook",
    methods=["GET", "HEAD", "OPTIONS", "POST", "PUT", "PATCH", "DELETE"],
    response_class=PlainTextResponse,
    summary="Receive an Overseerr notification",
)
async def receive_webhook(
    request: Request,
    store: UserMappingStore = Depends(get_store),
    chat_client: Optional[DiscordClient] = Depends(get_chat_client),
):
    if request.method != "POST":
        wh_logger.warning("Method not allowed on /webhook: %s", request.method)
        raise HTTPException(status_code=405, detail="Method not allowed", headers={"Allow": "POST"})

    content_type = request.headers.get("content-type", "")
    if content_type.split(";")[0].strip().lower() != "application/json":
        wh_logger.warning("Invalid content type on /webhook: %r", content_type)
        raise HTTPException(status_code=400, detail="Content-Type must be application/json")

    try:
        payload = json.loads(await request.body())
        notification = Notification.model_validate(payload)
    except (ValueError, ValidationError) as exc:
        wh_logger.warning("Error parsing notification payload: %s", exc)
        raise HTTPException(status_code=400, detail="Bad request")

    _log_notification(notification)
    await resolve_platform_ids(notification, store)

    if chat_client is not None:
        try:
            await chat_client.send_notification(notification)
        except Exception:
            wh_logger.exception("Discord delivery failed for %s notification", notification.event)
    else:
        wh_logger.debug("Discord delivery disabled, skipping notification")

    return "Notification received"
