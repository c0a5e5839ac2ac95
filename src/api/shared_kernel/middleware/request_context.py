"""Request correlation for observability.

Every request gets an id, taken from the ``X-Request-ID`` header when the
caller sent one. The id is echoed on the response and bound into the
ObservationContext handed to domain probes.
"""

from __future__ import annotations

from typing import Awaitable, Callable
from uuid import uuid4

from fastapi import Request, Response

from shared_kernel.observability_context import ObservationContext

REQUEST_ID_HEADER = "X-Request-ID"


async def assign_request_id(
    request: Request,
    call_next: Callable[[Request], Awaitable[Response]],
) -> Response:
    """HTTP middleware assigning the request id."""
    request_id = request.headers.get(REQUEST_ID_HEADER) or uuid4().hex
    request.state.request_id = request_id
    response = await call_next(request)
    response.headers[REQUEST_ID_HEADER] = request_id
    return response


def get_observation_context(request: Request) -> ObservationContext:
    """Build the observation context for the current request (FastAPI dependency)."""
    return ObservationContext(request_id=getattr(request.state, "request_id", None))
