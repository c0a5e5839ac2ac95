"""Unit tests for the PostgreSQL link repositories with a mocked session."""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest

from iam.domain.value_objects import UserId
from profiles.domain import NewLink, NewSocialLink, Platform
from profiles.infrastructure.link_repository import (
    LinkRepository,
    SocialLinkRepository,
)
from profiles.infrastructure.models import LinkModel, SocialLinkModel
from profiles.ports.repositories import ILinkRepository, ISocialLinkRepository

OWNER = UserId(value=7)


@pytest.fixture
def mock_session():
    """Create mock async session."""
    session = AsyncMock()
    session.add = MagicMock()
    return session


def _rows(*models):
    result = MagicMock()
    result.scalars.return_value.all.return_value = list(models)
    return result


def _rowcount(count: int):
    result = MagicMock()
    result.rowcount = count
    return result


class TestLinkRepository:
    """Tests for LinkRepository."""

    def test_implements_protocol(self, mock_session):
        assert isinstance(LinkRepository(mock_session), ILinkRepository)

    @pytest.mark.asyncio
    async def test_list_maps_models(self, mock_session):
        mock_session.execute.return_value = _rows(
            LinkModel(
                id=1,
                user_id=7,
                title="A",
                url="https://a.example",
                visible=True,
                sort_order=0,
                created_at=datetime.now(timezone.utc),
            )
        )

        links = await LinkRepository(mock_session).list_for_owner(OWNER)

        assert [(link.id, link.title) for link in links] == [(1, "A")]
        stmt = str(mock_session.execute.call_args[0][0])
        assert "ORDER BY links.sort_order, links.id" in stmt

    @pytest.mark.asyncio
    async def test_create_flushes_for_id(self, mock_session):
        async def _assign_id():
            mock_session.add.call_args[0][0].id = 11

        mock_session.flush.side_effect = _assign_id

        link = await LinkRepository(mock_session).create(
            OWNER, NewLink(title="A", url="a.example", visible=False, sort_order=3)
        )

        added = mock_session.add.call_args[0][0]
        assert isinstance(added, LinkModel)
        assert added.user_id == 7
        assert link.id == 11
        assert link.sort_order == 3
        assert link.visible is False

    @pytest.mark.asyncio
    async def test_update_is_owner_scoped(self, mock_session):
        mock_session.execute.return_value = _rowcount(0)

        changed = await LinkRepository(mock_session).update(OWNER, 5, {"title": "x"})

        assert changed is False
        params = mock_session.execute.call_args[0][0].compile().params
        assert params["id_1"] == 5
        assert params["user_id_1"] == 7

    @pytest.mark.asyncio
    async def test_delete_reports_rowcount(self, mock_session):
        mock_session.execute.return_value = _rowcount(1)

        assert await LinkRepository(mock_session).delete(OWNER, 5) is True


class TestSocialLinkRepository:
    """Tests for SocialLinkRepository."""

    def test_implements_protocol(self, mock_session):
        assert isinstance(SocialLinkRepository(mock_session), ISocialLinkRepository)

    @pytest.mark.asyncio
    async def test_create_stores_platform_value(self, mock_session):
        async def _assign_id():
            mock_session.add.call_args[0][0].id = 4

        mock_session.flush.side_effect = _assign_id

        link = await SocialLinkRepository(mock_session).create(
            OWNER, NewSocialLink(platform=Platform.DISCORD, url="d", visible=True)
        )

        assert mock_session.add.call_args[0][0].platform == "discord"
        assert link.platform is Platform.DISCORD

    @pytest.mark.asyncio
    async def test_list_converts_platform(self, mock_session):
        mock_session.execute.return_value = _rows(
            SocialLinkModel(
                id=2, user_id=7, platform="email", url="mailto:a@b.c", visible=True
            )
        )

        links = await SocialLinkRepository(mock_session).list_for_owner(OWNER)

        assert links[0].platform is Platform.EMAIL

    @pytest.mark.asyncio
    async def test_update_normalizes_platform(self, mock_session):
        mock_session.execute.return_value = _rowcount(1)

        changed = await SocialLinkRepository(mock_session).update(
            OWNER, 2, {"platform": Platform.TWITCH}
        )

        assert changed is True
        params = mock_session.execute.call_args[0][0].compile().params
        assert params["platform"] == "twitch"
