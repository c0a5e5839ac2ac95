"""Value objects for IAM domain.

Value objects are immutable descriptors that provide type safety and
domain semantics for identifiers and domain concepts.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from enum import StrEnum
from typing import Any, Mapping


@dataclass(frozen=True)
class UserId:
    """Identifier for a User aggregate.

    Server-assigned positive integer. On the wire it travels as a string.
    """

    value: int

    def __str__(self) -> str:
        """Return string representation."""
        return str(self.value)

    @classmethod
    def from_string(cls, value: str) -> UserId:
        """Create UserId from its wire form.

        Args:
            value: Decimal string

        Returns:
            UserId instance

        Raises:
            ValueError: If value is not a positive decimal integer
        """
        if not value.isdecimal() or int(value) < 1:
            raise ValueError(f"Invalid UserId: {value}")
        return cls(value=int(value))


class ButtonStyle(StrEnum):
    """Visual style of profile link buttons."""

    FILLED = "filled"
    OUTLINE = "outline"
    SOFT = "soft"


class ButtonSize(StrEnum):
    """Size of profile link buttons."""

    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"


# Attribute name -> stored document key
_THEME_KEYS = {
    "background_color": "backgroundColor",
    "background_image": "backgroundImage",
    "button_color": "buttonColor",
    "button_text_color": "buttonTextColor",
    "button_radius": "buttonRadius",
    "font_family": "fontFamily",
    "button_style": "buttonStyle",
    "button_size": "buttonSize",
    "text_color": "textColor",
}


@dataclass(frozen=True)
class Theme:
    """Visual styling of a public profile page.

    A theme is always complete: any sub-field that was not supplied takes
    its default. Themes are replaced as a whole, never merged.
    """

    background_color: str = "#000000"
    background_image: str | None = None
    button_color: str = "#ffffff"
    button_text_color: str = "#000000"
    button_radius: str = "8px"
    font_family: str = "Inter, sans-serif"
    button_style: ButtonStyle = ButtonStyle.FILLED
    button_size: ButtonSize = ButtonSize.MEDIUM
    text_color: str = "#ffffff"

    def to_document(self) -> dict[str, Any]:
        """Serialize to the camelCase document stored on the user row."""
        document: dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is None:
                continue
            document[_THEME_KEYS[f.name]] = str(value)
        return document

    @classmethod
    def from_document(cls, document: Mapping[str, Any] | None) -> Theme:
        """Build a complete theme from a stored document.

        Missing, null or unrecognised values fall back to the defaults so
        that rows written by older versions still load.
        """
        if not document:
            return cls()

        values: dict[str, Any] = {}
        for attr, key in _THEME_KEYS.items():
            raw = document.get(key)
            if not isinstance(raw, str):
                continue
            try:
                if attr == "button_style":
                    raw = ButtonStyle(raw)
                elif attr == "button_size":
                    raw = ButtonSize(raw)
            except ValueError:
                continue
            values[attr] = raw
        return cls(**values)


@dataclass(frozen=True)
class UserRegistration:
    """Everything needed to persist a new user.

    Username and email are already normalized to lower case and the
    password is already hashed.
    """

    username: str
    email: str
    password_hash: str
    display_name: str
