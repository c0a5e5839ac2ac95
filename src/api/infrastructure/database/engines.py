"""Async engine factory for PostgreSQL over asyncpg."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy.engine import URL
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

if TYPE_CHECKING:
    from infrastructure.settings import DatabaseSettings

__all__ = [
    "create_engine",
    "build_async_url",
]


def create_engine(settings: DatabaseSettings, echo: bool = False) -> AsyncEngine:
    """Create the async engine used for all profile storage.

    The pool keeps ``pool_min_connections`` connections open and may grow
    up to ``pool_max_connections`` under load. ``echo`` logs emitted SQL
    and is only enabled in debug mode.
    """
    return create_async_engine(
        build_async_url(settings),
        pool_size=settings.pool_min_connections,
        max_overflow=settings.pool_max_connections - settings.pool_min_connections,
        pool_pre_ping=True,  # Verify connections before using
        echo=echo,
    )


def build_async_url(settings: DatabaseSettings) -> str:
    """Render the asyncpg connection URL for ``settings``.

    Credentials go through SQLAlchemy's URL builder so reserved characters
    in a password (``@``, ``:``, ``/``) are percent-encoded.
    """
    url = URL.create(
        drivername="postgresql+asyncpg",
        username=settings.username,
        password=settings.password.get_secret_value(),
        host=settings.host,
        port=settings.port,
        database=settings.database,
    )
    return url.render_as_string(hide_password=False)
