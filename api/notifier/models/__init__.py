from notifier.models.base import Base
from notifier.models.user_mapping import UserMapping

__all__ = ["Base", "UserMapping"]
