"""Discord embed formatting for Overseerr notifications."""

import datetime
import logging
from typing import Optional

from notifier.channels import ChatMessage, EmbedField
from notifier.schemas.notification import Notification

logger = logging.getLogger(__name__)

DEFAULT_COLOR = 0x999999  # Gray

EVENT_COLORS = {
    "media.available": 0x00FF00,  # Green
    "media.requested": 0x0099FF,  # Blue
    "media.approved": 0x00FF99,  # Teal
    "media.declined": 0xFF0000,  # Red
    "issue.created": 0xFF6600,  # Orange
    "issue.resolved": 0x00FF00,  # Green
    "comment.created": 0x9900FF,  # Purple
}

# Discord embed limits
TITLE_LIMIT = 256
DESCRIPTION_LIMIT = 4096
FIELD_VALUE_LIMIT = 1024
EMBED_LIMIT = 6000


def color_for_event(event: str) -> int:
    return EVENT_COLORS.get(event.lower(), DEFAULT_COLOR)


def _truncate(text: str, limit: int) -> str:
    return text if len(text) <= limit else f"{text[: limit - 3]}..."


def _embed_length(message: ChatMessage) -> int:
    return len(message.title) + len(message.description) + sum(
        len(f.name) + len(f.value) for f in message.fields
    )


def _fit_embed(message: ChatMessage) -> None:
    """Shorten the description, then the last fields, until the embed fits ``EMBED_LIMIT``."""
    overflow = _embed_length(message) - EMBED_LIMIT
    if overflow > 0 and message.description:
        keep = len(message.description) - overflow
        message.description = _truncate(message.description, keep) if keep > 3 else ""
        overflow = _embed_length(message) - EMBED_LIMIT

    for embed_field in reversed(list(message.fields)):
        if overflow <= 0:
            break
        keep = len(embed_field.value) - overflow
        if keep > 3:
            embed_field.value = _truncate(embed_field.value, keep)
        else:
            message.fields.remove(embed_field)
        overflow = _embed_length(message) - EMBED_LIMIT


def _mention(discord_id: str) -> str:
    return f"<@{discord_id}>"


def _block(name: str, lines: list[tuple[str, str]]) -> Optional[EmbedField]:
    """Join the present ``(label, value)`` pairs into one non-inline field."""
    rendered = [f"{label}: {value}" for label, value in lines if value]
    if not rendered:
        return None
    return EmbedField(name=name, value=_truncate("\n".join(rendered), FIELD_VALUE_LIMIT))


def build_message(notification: Notification) -> ChatMessage:
    """
    Render a notification as a chat message.

    Fields, in order and only when present: type, event, then one block each
    for media, request, issue and comment.
    """
    message = ChatMessage(
        title=_truncate(notification.subject, TITLE_LIMIT),
        description=_truncate(notification.message, DESCRIPTION_LIMIT),
        color=color_for_event(notification.event),
        timestamp=datetime.datetime.now(datetime.timezone.utc).isoformat(),
        thumbnail_url=notification.image or None,
    )

    if notification.notification_type:
        message.fields.append(
            EmbedField("📋 Type", _truncate(notification.notification_type, FIELD_VALUE_LIMIT), True)
        )
    if notification.event:
        message.fields.append(
            EmbedField("🎬 Event", _truncate(notification.event, FIELD_VALUE_LIMIT), True)
        )

    blocks = []
    if notification.has_media:
        media = notification.media
        blocks.append(_block("🎭 Media Info", [
            ("Type", media.media_type),
            ("Status", media.status),
            ("4K Status", media.status_4k),
            ("TMDB", media.tmdb_id),
            ("TVDB", media.tvdb_id),
        ]))

    if notification.has_request:
        request = notification.request
        blocks.append(_block("📝 Request Info", [
            ("ID", request.request_id),
            ("Requested by", request.requested_by_username),
            ("Email", request.requested_by_email),
            ("Discord", request.requested_by_discord_id and _mention(request.requested_by_discord_id)),
        ]))

    if notification.has_issue:
        issue = notification.issue
        blocks.append(_block("🐛 Issue Info", [
            ("ID", issue.issue_id),
            ("Type", issue.issue_type),
            ("Status", issue.issue_status),
            ("Reported by", issue.reported_by_username),
            ("Discord", issue.reported_by_discord_id and _mention(issue.reported_by_discord_id)),
        ]))

    if notification.has_comment:
        comment = notification.comment
        blocks.append(_block("💬 Comment", [
            ("Message", comment.comment_message),
            ("By", comment.commented_by_username),
            ("Discord", comment.commented_by_discord_id and _mention(comment.commented_by_discord_id)),
        ]))

    message.fields.extend(block for block in blocks if block is not None)
    _fit_embed(message)
    logger.debug("Built embed with %d fields, color %#08x", len(message.fields), message.color)
    return message
