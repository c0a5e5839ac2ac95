"""In-memory implementations of the link repositories."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Mapping

from iam.domain.value_objects import UserId
from infrastructure.memory import InMemoryDatabase
from profiles.domain.entities import Link, NewLink, NewSocialLink, SocialLink
from profiles.domain.value_objects import Platform
from profiles.ports.repositories import ILinkRepository, ISocialLinkRepository

LINKS_TABLE = "links"
SOCIAL_LINKS_TABLE = "social_links"


class _OwnedRows:
    """Owner-scoped access to one in-memory table."""

    def __init__(self, database: InMemoryDatabase, table: str) -> None:
        self._database = database
        self._table = table
        self._rows = database.table(table)

    def for_owner(self, owner_id: UserId) -> list[dict[str, Any]]:
        return [row for row in self._rows.values() if row["user_id"] == owner_id.value]

    def insert(self, owner_id: UserId, values: Mapping[str, Any]) -> dict[str, Any]:
        row_id = self._database.next_id(self._table)
        row = {
            **values,
            "id": row_id,
            "user_id": owner_id.value,
            "created_at": datetime.now(timezone.utc),
        }
        self._rows[row_id] = row
        return row

    def update(self, owner_id: UserId, row_id: int, changes: Mapping[str, Any]) -> bool:
        row = self._rows.get(row_id)
        if row is None or row["user_id"] != owner_id.value:
            return False
        row.update(changes)
        return True

    def delete(self, owner_id: UserId, row_id: int) -> bool:
        row = self._rows.get(row_id)
        if row is None or row["user_id"] != owner_id.value:
            return False
        del self._rows[row_id]
        return True


class InMemoryLinkRepository(ILinkRepository):
    """Dictionary-backed repository for links."""

    def __init__(self, database: InMemoryDatabase) -> None:
        self._rows = _OwnedRows(database, LINKS_TABLE)

    async def list_for_owner(self, owner_id: UserId) -> list[Link]:
        rows = sorted(
            self._rows.for_owner(owner_id),
            key=lambda row: (row["sort_order"], row["id"]),
        )
        return [Link(**row) for row in rows]

    async def create(self, owner_id: UserId, link: NewLink) -> Link:
        row = self._rows.insert(
            owner_id,
            {
                "title": link.title,
                "url": link.url,
                "visible": link.visible,
                "sort_order": link.sort_order,
            },
        )
        return Link(**row)

    async def update(
        self, owner_id: UserId, link_id: int, changes: Mapping[str, Any]
    ) -> bool:
        return self._rows.update(owner_id, link_id, changes)

    async def delete(self, owner_id: UserId, link_id: int) -> bool:
        return self._rows.delete(owner_id, link_id)


class InMemorySocialLinkRepository(ISocialLinkRepository):
    """Dictionary-backed repository for social links."""

    def __init__(self, database: InMemoryDatabase) -> None:
        self._rows = _OwnedRows(database, SOCIAL_LINKS_TABLE)

    async def list_for_owner(self, owner_id: UserId) -> list[SocialLink]:
        rows = sorted(self._rows.for_owner(owner_id), key=lambda row: row["id"])
        return [SocialLink(**row) for row in rows]

    async def create(self, owner_id: UserId, link: NewSocialLink) -> SocialLink:
        row = self._rows.insert(
            owner_id,
            {
                "platform": Platform(link.platform),
                "url": link.url,
                "visible": link.visible,
            },
        )
        return SocialLink(**row)

    async def update(
        self, owner_id: UserId, link_id: int, changes: Mapping[str, Any]
    ) -> bool:
        return self._rows.update(owner_id, link_id, changes)

    async def delete(self, owner_id: UserId, link_id: int) -> bool:
        return self._rows.delete(owner_id, link_id)
