"""Profile application service.

Reads the owner's full profile and reconciles submitted profile documents
against what is stored.
"""

from __future__ import annotations

from functools import partial
from typing import Any, Awaitable, Callable, Mapping, Sequence

from iam.application.value_objects import AuthenticatedUser
from iam.domain.aggregates import User
from iam.domain.value_objects import UserId
from iam.ports.repositories import IUserRepository
from profiles.application.observability import (
    DefaultProfileServiceProbe,
    ProfileServiceProbe,
)
from profiles.application.reconciliation import (
    LINK_FIELDS,
    LINK_REQUIRED,
    SOCIAL_LINK_FIELDS,
    SOCIAL_LINK_REQUIRED,
    CollectionPlan,
    plan_collection,
)
from profiles.application.value_objects import (
    FullProfile,
    LinkSubmission,
    ProfileSubmission,
    ReconciliationSummary,
    SocialLinkSubmission,
)
from profiles.domain.entities import NewLink, NewSocialLink
from profiles.ports.exceptions import ProfileNotFoundError, StaleSessionError
from profiles.ports.repositories import ILinkRepository, ISocialLinkRepository
from shared_kernel.persistence import ITransactionManager


class ProfileService:
    """Application service for the owner's view of their profile.

    Reconciliation runs inside one per-owner transaction, so two saves for
    the same owner never interleave. Within it, every individual write is
    isolated in a savepoint: a failing write is logged and counted, and
    the rest of the batch still applies.
    """

    def __init__(
        self,
        user_repository: IUserRepository,
        link_repository: ILinkRepository,
        social_link_repository: ISocialLinkRepository,
        transactions: ITransactionManager,
        probe: ProfileServiceProbe | None = None,
    ):
        """Initialize ProfileService with dependencies.

        Args:
            user_repository: Repository for the owner's profile attributes
            link_repository: Repository for links
            social_link_repository: Repository for social links
            transactions: Transaction boundary for the request
            probe: Optional domain probe for observability
        """
        self._users = user_repository
        self._links = link_repository
        self._social_links = social_link_repository
        self._transactions = transactions
        self._probe = probe or DefaultProfileServiceProbe()

    async def get_profile(
        self, owner_id: UserId, caller: AuthenticatedUser | None = None
    ) -> FullProfile:
        """Load the owner's complete profile.

        Args:
            owner_id: The owner to load
            caller: Session identity; when given, it must name the stored owner

        Raises:
            ProfileNotFoundError: If the owner does not exist
            StaleSessionError: If ``caller`` names a different user
            StorageUnavailableError: If storage stays unreachable
        """
        profile = await self._transactions.read(
            "get_profile", partial(self._load, owner_id)
        )
        if profile is None:
            self._probe.profile_not_found(owner_id.value)
            raise ProfileNotFoundError("User not found")
        self._ensure_caller(profile.user, caller)
        return profile

    async def reconcile(
        self,
        owner_id: UserId,
        submission: ProfileSubmission,
        caller: AuthenticatedUser | None = None,
    ) -> FullProfile:
        """Bring the stored profile in line with a submitted document.

        Only parts present in the submission are touched. Submitted
        collections are complete desired states: stored items missing
        from them are deleted.

        Args:
            owner_id: The authenticated owner
            submission: Validated profile document
            caller: Session identity; when given, it must name the stored owner

        Returns:
            The profile as stored once every write has been applied

        Raises:
            ProfileNotFoundError: If the owner does not exist (nothing is written)
            StaleSessionError: If ``caller`` names a different user (nothing
                is written)
        """
        summary = ReconciliationSummary()

        async with self._transactions.owner_transaction(owner_id.value):
            user = await self._users.get_by_id(owner_id)
            if user is None:
                self._probe.profile_not_found(owner_id.value)
                raise ProfileNotFoundError("User not found")
            self._ensure_caller(user, caller)

            if submission.attributes:
                await self._apply_attributes(user, submission.attributes, summary)
            if submission.links is not None:
                await self._reconcile_links(owner_id, submission.links, summary)
            if submission.social_links is not None:
                await self._reconcile_social_links(
                    owner_id, submission.social_links, summary
                )

        self._probe.profile_reconciled(owner_id.value, summary)
        return await self.get_profile(owner_id, caller)

    def _ensure_caller(self, user: User, caller: AuthenticatedUser | None) -> None:
        if caller is None:
            return
        if caller.username != user.username or caller.email != user.email:
            self._probe.stale_session_rejected(user.id.value, caller.username)
            raise StaleSessionError("Invalid token")

    async def _load(self, owner_id: UserId) -> FullProfile | None:
        user = await self._users.get_by_id(owner_id)
        if user is None:
            return None
        return FullProfile(
            user=user,
            links=await self._links.list_for_owner(owner_id),
            social_links=await self._social_links.list_for_owner(owner_id),
        )

    async def _apply_attributes(
        self,
        user: User,
        attributes: Mapping[str, Any],
        summary: ReconciliationSummary,
    ) -> None:
        changed = user.update_profile(**dict(attributes))
        if not changed:
            return

        written = await self._isolated(
            user.id,
            "profile",
            "update",
            None,
            partial(self._users.save_profile, user, changed),
            summary,
        )
        if written:
            summary.attributes_written.extend(changed)

    async def _reconcile_links(
        self,
        owner_id: UserId,
        submitted: Sequence[LinkSubmission],
        summary: ReconciliationSummary,
    ) -> None:
        stored = await self._links.list_for_owner(owner_id)
        plan = plan_collection(stored, submitted, LINK_FIELDS, LINK_REQUIRED)
        deleted = await self._apply_removals_and_updates(
            owner_id, "links", plan, self._links, summary
        )

        next_order = (
            max((link.sort_order for link in stored if link.id not in deleted), default=-1)
            + 1
        )
        for values in plan.creates:
            new_link = NewLink(
                title=values["title"],
                url=values["url"],
                visible=values["visible"],
                sort_order=next_order,
            )
            created = await self._isolated(
                owner_id,
                "links",
                "create",
                None,
                partial(self._links.create, owner_id, new_link),
                summary,
            )
            if created:
                summary.created += 1
                next_order += 1

    async def _reconcile_social_links(
        self,
        owner_id: UserId,
        submitted: Sequence[SocialLinkSubmission],
        summary: ReconciliationSummary,
    ) -> None:
        stored = await self._social_links.list_for_owner(owner_id)
        plan = plan_collection(
            stored, submitted, SOCIAL_LINK_FIELDS, SOCIAL_LINK_REQUIRED
        )
        await self._apply_removals_and_updates(
            owner_id, "social_links", plan, self._social_links, summary
        )

        for values in plan.creates:
            new_social_link = NewSocialLink(
                platform=values["platform"],
                url=values["url"],
                visible=values["visible"],
            )
            created = await self._isolated(
                owner_id,
                "social_links",
                "create",
                None,
                partial(self._social_links.create, owner_id, new_social_link),
                summary,
            )
            if created:
                summary.created += 1

    async def _apply_removals_and_updates(
        self,
        owner_id: UserId,
        collection: str,
        plan: CollectionPlan,
        repository: ILinkRepository | ISocialLinkRepository,
        summary: ReconciliationSummary,
    ) -> set[int]:
        """Apply deletes, then updates.

        Returns:
            Ids of the items that were actually deleted
        """
        summary.skipped += plan.skipped
        deleted: set[int] = set()

        for item_id in plan.deletes:
            removed = await self._isolated(
                owner_id,
                collection,
                "delete",
                item_id,
                partial(repository.delete, owner_id, item_id),
                summary,
            )
            if removed:
                summary.deleted += 1
                deleted.add(item_id)

        for item in plan.updates:
            changed = await self._isolated(
                owner_id,
                collection,
                "update",
                item.item_id,
                partial(repository.update, owner_id, item.item_id, item.changes),
                summary,
            )
            if changed:
                summary.updated += 1

        return deleted

    async def _isolated(
        self,
        owner_id: UserId,
        collection: str,
        action: str,
        item_id: int | None,
        write: Callable[[], Awaitable[Any]],
        summary: ReconciliationSummary,
    ) -> bool:
        """Run one write in a savepoint.

        Returns:
            False if the write raised or matched no row owned by the owner
        """
        try:
            async with self._transactions.savepoint():
                result = await write()
        except Exception as e:
            summary.failed += 1
            self._probe.profile_item_failed(
                owner_id=owner_id.value,
                collection=collection,
                action=action,
                item_id=item_id,
                error=str(e),
            )
            return False
        return result is not False
