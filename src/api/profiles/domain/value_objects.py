"""Value objects for the profiles domain."""

from __future__ import annotations

from enum import StrEnum


class Platform(StrEnum):
    """Social network a social link points to."""

    TWITTER = "twitter"
    INSTAGRAM = "instagram"
    YOUTUBE = "youtube"
    TIKTOK = "tiktok"
    LINKEDIN = "linkedin"
    GITHUB = "github"
    FACEBOOK = "facebook"
    TWITCH = "twitch"
    SNAPCHAT = "snapchat"
    DISCORD = "discord"
    WHATSAPP = "whatsapp"
    EMAIL = "email"
    WEBSITE = "website"


def parse_wire_id(value: object) -> int | None:
    """Parse an id received from the client.

    Clients send server ids as strings and use temporary ids (often
    millisecond timestamps) for entries that were never saved. Positive
    integers and decimal strings become candidate ids; anything else
    means "no id".

    Args:
        value: Raw JSON value of the ``id`` field

    Returns:
        The candidate id, or None
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value > 0 else None
    if isinstance(value, str):
        text = value.strip()
        if text.isascii() and text.isdigit():
            parsed = int(text)
            return parsed if parsed > 0 else None
    return None


def normalize_url(url: str) -> str:
    """Return a navigable absolute form of a stored URL.

    URLs saved without an ``http://`` or ``https://`` scheme get
    ``https://`` prepended. The stored value is never rewritten.
    """
    stripped = url.strip()
    if stripped.lower().startswith(("http://", "https://")):
        return stripped
    return f"https://{stripped}"
