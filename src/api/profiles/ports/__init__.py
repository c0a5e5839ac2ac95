"""Ports (interfaces) for the profiles bounded context."""

from profiles.ports.exceptions import (
    InvalidProfileSubmissionError,
    ProfileNotFoundError,
    StaleSessionError,
)
from profiles.ports.repositories import ILinkRepository, ISocialLinkRepository

__all__ = [
    "ILinkRepository",
    "ISocialLinkRepository",
    "InvalidProfileSubmissionError",
    "ProfileNotFoundError",
    "StaleSessionError",
]
