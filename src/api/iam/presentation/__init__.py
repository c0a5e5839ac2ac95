"""IAM presentation layer: signup, login and logout endpoints."""

from __future__ import annotations

from iam.presentation.routes import router

__all__ = ["router"]
