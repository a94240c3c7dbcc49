"""
Webhook payload sent by Overseerr / Jellyseerr.

The agent's default JSON template nests per-event data under template keys
such as ``{{media}}``; once rendered these arrive either verbatim or as plain
``media``. Both spellings are accepted. Every scalar is a string and an empty
string means "not set".
"""

from typing import Any

from pydantic import AliasChoices, BaseModel, Field, field_validator


class _Payload(BaseModel):
    model_config = {"populate_by_name": True, "coerce_numbers_to_str": True, "extra": "ignore"}

    @field_validator("*", mode="before")
    @classmethod
    def _null_as_empty(cls, value: Any, info) -> Any:
        if value is not None:
            return value
        field = cls.model_fields[info.field_name]
        return field.get_default(call_default_factory=True)


class Media(_Payload):
    media_type: str = ""
    tmdb_id: str = Field("", alias="tmdbId")
    tvdb_id: str = Field("", alias="tvdbId")
    status: str = ""
    status_4k: str = Field("", alias="status4k")


class Request(_Payload):
    request_id: str = ""
    requested_by_email: str = Field("", alias="requestedBy_email")
    requested_by_username: str = Field("", alias="requestedBy_username")
    requested_by_avatar: str = Field("", alias="requestedBy_avatar")
    requested_by_discord_id: str = Field("", alias="requestedBy_settings_discordId")
    requested_by_telegram_chat_id: str = Field("", alias="requestedBy_settings_telegramChatId")


class Issue(_Payload):
    issue_id: str = ""
    issue_type: str = ""
    issue_status: str = ""
    reported_by_email: str = Field("", alias="reportedBy_email")
    reported_by_username: str = Field("", alias="reportedBy_username")
    reported_by_avatar: str = Field("", alias="reportedBy_avatar")
    reported_by_discord_id: str = Field("", alias="reportedBy_settings_discordId")
    reported_by_telegram_chat_id: str = Field("", alias="reportedBy_settings_telegramChatId")


class Comment(_Payload):
    comment_message: str = ""
    commented_by_email: str = Field("", alias="commentedBy_email")
    commented_by_username: str = Field("", alias="commentedBy_username")
    commented_by_avatar: str = Field("", alias="commentedBy_avatar")
    commented_by_discord_id: str = Field("", alias="commentedBy_settings_discordId")
    commented_by_telegram_chat_id: str = Field("", alias="commentedBy_settings_telegramChatId")


class Notification(_Payload):
    notification_type: str = ""
    event: str = ""
    subject: str = ""
    message: str = ""
    image: str = ""
    media: Media = Field(
        default_factory=Media, validation_alias=AliasChoices("{{media}}", "media")
    )
    request: Request = Field(
        default_factory=Request, validation_alias=AliasChoices("{{request}}", "request")
    )
    issue: Issue = Field(
        default_factory=Issue, validation_alias=AliasChoices("{{issue}}", "issue")
    )
    comment: Comment = Field(
        default_factory=Comment, validation_alias=AliasChoices("{{comment}}", "comment")
    )
    extra: list[Any] = Field(
        default_factory=list, validation_alias=AliasChoices("{{extra}}", "extra")
    )

    @property
    def has_media(self) -> bool:
        return bool(self.media.media_type)

    @property
    def has_request(self) -> bool:
        return bool(self.request.request_id)

    @property
    def has_issue(self) -> bool:
        return bool(self.issue.issue_id)

    @property
    def has_comment(self) -> bool:
        return bool(self.comment.comment_message)
