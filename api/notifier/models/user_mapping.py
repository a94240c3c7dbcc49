from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from notifier.models.base import Base, TimestampMixin


class UserMapping(Base, TimestampMixin):
    __tablename__ = "user_mappings"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    platform_id: Mapped[str] = mapped_column(String(64), nullable=False)
