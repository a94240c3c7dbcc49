from sqlalchemy.exc import OperationalError

from notifier.resolver import resolve_platform_ids
from notifier.schemas.notification import Notification


class DictStore:
    def __init__(self, mappings):
        self.mappings = mappings
        self.lookups = []

    async def resolve(self, username):
        self.lookups.append(username)
        return self.mappings.get(username)


class BrokenStore:
    async def resolve(self, username):
        raise OperationalError("SELECT", {}, Exception("database is locked"))


def full_notification(**overrides):
    payload = {
        "event": "issue.created",
        "{{request}}": {"request_id": "1", "requestedBy_username": "paul"},
        "{{issue}}": {"issue_id": "2", "reportedBy_username": "jessica"},
        "{{comment}}": {"comment_message": "hi", "commentedBy_username": "stilgar"},
    }
    payload.update(overrides)
    return Notification.model_validate(payload)


async def test_resolves_every_present_author():
    store = DictStore({"paul": "1", "jessica": "2", "stilgar": "3"})
    notification = full_notification()

    await resolve_platform_ids(notification, store)

    assert notification.request.requested_by_discord_id == "1"
    assert notification.issue.reported_by_discord_id == "2"
    assert notification.comment.commented_by_discord_id == "3"


async def test_inline_id_wins():
    store = DictStore({"paul": "from-store"})
    notification = full_notification(
        **{"{{request}}": {
            "request_id": "1",
            "requestedBy_username": "paul",
            "requestedBy_settings_discordId": "inline",
        }}
    )

    await resolve_platform_ids(notification, store)

    assert notification.request.requested_by_discord_id == "inline"
    assert "paul" not in store.lookups


async def test_absent_sub_records_are_not_looked_up():
    store = DictStore({"paul": "1"})
    notification = Notification.model_validate({
        "{{request}}": {"requestedBy_username": "paul"},
    })

    await resolve_platform_ids(notification, store)

    assert store.lookups == []
    assert notification.request.requested_by_discord_id == ""


async def test_unknown_username_leaves_field_empty():
    store = DictStore({})
    notification = full_notification()

    await resolve_platform_ids(notification, store)

    assert store.lookups == ["paul", "jessica", "stilgar"]
    assert notification.request.requested_by_discord_id == ""


async def test_storage_failure_is_not_fatal():
    notification = full_notification()

    await resolve_platform_ids(notification, BrokenStore())

    assert notification.issue.reported_by_discord_id == ""
