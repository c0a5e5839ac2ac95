"""SQLAlchemy ORM model for the users table.

Stores credentials and the editable profile attributes. Username and
email are stored lower-cased, so the unique constraints are effectively
case-insensitive.
"""

from typing import Any

from sqlalchemy import Boolean, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base, JSONDocument, TimestampMixin

USERNAME_UNIQUE_CONSTRAINT = "uq_users_username"
EMAIL_UNIQUE_CONSTRAINT = "uq_users_email"


class UserModel(Base, TimestampMixin):
    """ORM model for users table.

    The theme is a camelCase JSON document; see Theme.to_document.
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(String(50), nullable=False, unique=True)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    display_name: Mapped[str] = mapped_column(String(100), nullable=False)
    bio: Mapped[str] = mapped_column(Text, nullable=False, default="")
    show_profile_picture: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True
    )
    profile_picture_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    theme: Mapped[dict[str, Any]] = mapped_column(JSONDocument, nullable=False)

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<UserModel(id={self.id}, username={self.username})>"
