"""Shared middleware for cross-cutting concerns.

This module contains FastAPI dependencies and middleware that are shared
across bounded contexts.
"""

from shared_kernel.middleware.request_context import (
    REQUEST_ID_HEADER,
    assign_request_id,
    get_observation_context,
)

__all__ = [
    "REQUEST_ID_HEADER",
    "assign_request_id",
    "get_observation_context",
]
