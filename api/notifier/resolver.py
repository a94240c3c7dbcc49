"""Fill in missing Discord IDs on a notification from the user mapping store."""

import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError

from notifier.schemas.notification import Notification
from notifier.store import UserMappingStore

logger = logging.getLogger(__name__)


async def _lookup(store: UserMappingStore, username: str) -> Optional[str]:
    try:
        discord_id = await store.resolve(username)
    except SQLAlchemyError:
        logger.warning("Mapping store unavailable, cannot resolve %s", username, exc_info=True)
        return None
    if discord_id is None:
        logger.info("No Discord ID mapped for username %s", username)
    return discord_id


async def resolve_platform_ids(notification: Notification, store: UserMappingStore) -> None:
    """
    Resolve Discord IDs in place for the request, issue and comment authors.

    A sub-record is only considered when it is present (its key field is set),
    has a username, and does not already carry an inline Discord ID. Lookup
    failures leave the ID empty.
    """
    if notification.has_request:
        request = notification.request
        if not request.requested_by_discord_id and request.requested_by_username:
            resolved = await _lookup(store, request.requested_by_username)
            if resolved:
                logger.info("Resolved Discord ID for requester %s", request.requested_by_username)
                request.requested_by_discord_id = resolved

    if notification.has_issue:
        issue = notification.issue
        if not issue.reported_by_discord_id and issue.reported_by_username:
            resolved = await _lookup(store, issue.reported_by_username)
            if resolved:
                logger.info("Resolved Discord ID for reporter %s", issue.reported_by_username)
                issue.reported_by_discord_id = resolved

    if notification.has_comment:
        comment = notification.comment
        if not comment.commented_by_discord_id and comment.commented_by_username:
            resolved = await _lookup(store, comment.commented_by_username)
            if resolved:
                logger.info("Resolved Discord ID for commenter %s", comment.commented_by_username)
                comment.commented_by_discord_id = resolved
