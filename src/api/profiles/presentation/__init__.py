"""Profiles presentation layer: owner and public profile endpoints."""

from __future__ import annotations

from profiles.presentation.routes import router

__all__ = ["router"]
