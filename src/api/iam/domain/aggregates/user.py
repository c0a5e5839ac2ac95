"""User aggregate for IAM context."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from iam.domain.value_objects import Theme, UserId

# Profile attributes the owner may change after signup
PROFILE_FIELDS = (
    "display_name",
    "bio",
    "show_profile_picture",
    "profile_picture_url",
    "theme",
)


@dataclass
class User:
    """User aggregate: credentials plus the editable profile attributes.

    Username and email are unique and stored lower-cased. The password
    hash is opaque to everything except the security helpers.
    """

    id: UserId
    username: str
    email: str
    password_hash: str
    display_name: str
    bio: str = ""
    show_profile_picture: bool = True
    profile_picture_url: str | None = None
    theme: Theme = field(default_factory=Theme)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __str__(self) -> str:
        """Return string representation."""
        return f"User({self.username})"

    def __eq__(self, other: object) -> bool:
        """Users are equal if they have the same ID (identity-based equality)."""
        if not isinstance(other, User):
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        """Hash based on ID for use in sets and dicts."""
        return hash(self.id)

    def update_profile(self, **changes: Any) -> list[str]:
        """Apply profile attribute changes.

        Only attributes whose value actually differs are assigned. A
        ``bio`` of None clears the bio.

        Args:
            **changes: Subset of PROFILE_FIELDS mapped to new values

        Returns:
            Names of the attributes that changed, in PROFILE_FIELDS order

        Raises:
            ValueError: If a key is not a profile attribute
        """
        unknown = set(changes) - set(PROFILE_FIELDS)
        if unknown:
            raise ValueError(f"Not profile attributes: {sorted(unknown)}")

        if "bio" in changes and changes["bio"] is None:
            changes["bio"] = ""

        changed: list[str] = []
        for name in PROFILE_FIELDS:
            if name not in changes:
                continue
            if getattr(self, name) != changes[name]:
                setattr(self, name, changes[name])
                changed.append(name)
        return changed
