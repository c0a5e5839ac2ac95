"""PostgreSQL implementations of the link repositories.

Update and delete statements always filter on ``user_id`` as well as
``id``, so a row belonging to another user is never touched even if its
id is passed in.
"""

from __future__ import annotations

from typing import Any, Mapping

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from iam.domain.value_objects import UserId
from profiles.domain.entities import Link, NewLink, NewSocialLink, SocialLink
from profiles.domain.value_objects import Platform
from profiles.infrastructure.models import LinkModel, SocialLinkModel
from profiles.ports.repositories import ILinkRepository, ISocialLinkRepository


class LinkRepository(ILinkRepository):
    """PostgreSQL-backed repository for links."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def list_for_owner(self, owner_id: UserId) -> list[Link]:
        stmt = (
            select(LinkModel)
            .where(LinkModel.user_id == owner_id.value)
            .order_by(LinkModel.sort_order, LinkModel.id)
        )
        result = await self._session.execute(stmt)
        return [self._to_domain(model) for model in result.scalars().all()]

    async def create(self, owner_id: UserId, link: NewLink) -> Link:
        model = LinkModel(
            user_id=owner_id.value,
            title=link.title,
            url=link.url,
            visible=link.visible,
            sort_order=link.sort_order,
        )
        self._session.add(model)
        await self._session.flush()
        return self._to_domain(model)

    async def update(
        self, owner_id: UserId, link_id: int, changes: Mapping[str, Any]
    ) -> bool:
        stmt = (
            update(LinkModel)
            .where(LinkModel.id == link_id, LinkModel.user_id == owner_id.value)
            .values(**changes)
        )
        result = await self._session.execute(stmt)
        return result.rowcount > 0

    async def delete(self, owner_id: UserId, link_id: int) -> bool:
        stmt = delete(LinkModel).where(
            LinkModel.id == link_id, LinkModel.user_id == owner_id.value
        )
        result = await self._session.execute(stmt)
        return result.rowcount > 0

    @staticmethod
    def _to_domain(model: LinkModel) -> Link:
        return Link(
            id=model.id,
            user_id=model.user_id,
            title=model.title,
            url=model.url,
            visible=model.visible,
            sort_order=model.sort_order,
            created_at=model.created_at,
        )


class SocialLinkRepository(ISocialLinkRepository):
    """PostgreSQL-backed repository for social links."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def list_for_owner(self, owner_id: UserId) -> list[SocialLink]:
        stmt = (
            select(SocialLinkModel)
            .where(SocialLinkModel.user_id == owner_id.value)
            .order_by(SocialLinkModel.id)
        )
        result = await self._session.execute(stmt)
        return [self._to_domain(model) for model in result.scalars().all()]

    async def create(self, owner_id: UserId, link: NewSocialLink) -> SocialLink:
        model = SocialLinkModel(
            user_id=owner_id.value,
            platform=link.platform.value,
            url=link.url,
            visible=link.visible,
        )
        self._session.add(model)
        await self._session.flush()
        return self._to_domain(model)

    async def update(
        self, owner_id: UserId, link_id: int, changes: Mapping[str, Any]
    ) -> bool:
        values = dict(changes)
        if "platform" in values:
            values["platform"] = Platform(values["platform"]).value
        stmt = (
            update(SocialLinkModel)
            .where(
                SocialLinkModel.id == link_id,
                SocialLinkModel.user_id == owner_id.value,
            )
            .values(**values)
        )
        result = await self._session.execute(stmt)
        return result.rowcount > 0

    async def delete(self, owner_id: UserId, link_id: int) -> bool:
        stmt = delete(SocialLinkModel).where(
            SocialLinkModel.id == link_id,
            SocialLinkModel.user_id == owner_id.value,
        )
        result = await self._session.execute(stmt)
        return result.rowcount > 0

    @staticmethod
    def _to_domain(model: SocialLinkModel) -> SocialLink:
        return SocialLink(
            id=model.id,
            user_id=model.user_id,
            platform=Platform(model.platform),
            url=model.url,
            visible=model.visible,
            created_at=model.created_at,
        )
