"""Base types for chat messages."""

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class EmbedField:
    name: str
    value: str
    inline: bool = False


@dataclass
class ChatMessage:
    """A rendered notification, ready to be posted as a Discord embed."""
    title: str
    description: str
    color: int
    timestamp: str
    thumbnail_url: Optional[str] = None
    fields: list[EmbedField] = field(default_factory=list)

    def to_embed(self) -> dict:
        embed = {
            "title": self.title,
            "description": self.description,
            "color": self.color,
            "timestamp": self.timestamp,
            "fields": [
                {"name": f.name, "value": f.value, "inline": f.inline} for f in self.fields
            ],
        }
        if self.thumbnail_url:
            embed["thumbnail"] = {"url": self.thumbnail_url}
        return embed
