"""Organization membership and ownership domain service.

Every organization has at most one OWNER, referenced explicitly by
``Organization.owner_user_id``. Role changes that would touch ownership go
through ``transfer_ownership``, which swaps both roles and the reference in
one atomic block.
"""

from datetime import datetime, timezone

import logfire

from certis.domain.error import (
    ForbiddenError,
    NotFoundError,
    PreconditionFailedError,
)
from certis.domain.model import Organization, User
from certis.domain.repository import (
    OrganizationRepository,
    TransactionManager,
    UserRepository,
)
from certis.domain.value import Capability, OrganizationId, Role, UserId

from .authorization_guard import AuthorizationGuard
from .base import Service

_NEVER = datetime.max.replace(tzinfo=timezone.utc)


def _seniority(user: User) -> tuple[datetime, str]:
    return (user.joined_at or _NEVER, str(user.id))


class OwnershipService(Service):
    """Domain service for role changes, removals and ownership transfer."""

    def __init__(
        self,
        user_repository: UserRepository,
        organization_repository: OrganizationRepository,
        transaction_manager: TransactionManager,
        authorization_guard: AuthorizationGuard,
    ) -> None:
        self.user_repository = user_repository
        self.organization_repository = organization_repository
        self.transaction_manager = transaction_manager
        self.authorization_guard = authorization_guard

    async def change_role(
        self, target_user_id: UserId, new_role: Role, requester_id: UserId
    ) -> User:
        """Change a user's role.

        Assigning OWNER to another member transfers ownership: the previous
        owner becomes ADMIN.

        Args:
            target_user_id: User whose role changes
            new_role: Role to assign
            requester_id: User asking for the change

        Returns:
            The updated target user

        Raises:
            NotFoundError: If either user does not exist
            ForbiddenError: If the requester may not make this change
            PreconditionFailedError: If the change would break membership or
                ownership rules (demoting the owner, org roles without an
                organization, system roles inside an organization)
        """
        with logfire.span(
            "ownership_service.change_role",
            target_user_id=str(target_user_id),
            new_role=new_role.value,
            requester_id=str(requester_id),
        ):
            requester = await self._get_user(requester_id)
            target = await self._get_user(target_user_id)

            self._authorize_role_change(requester, target, new_role)

            if new_role is target.role:
                return target
            if new_role.is_system_role and target.organization_id is not None:
                raise PreconditionFailedError(
                    "Remove the user from the organization before granting a system role"
                )
            if target.organization_id is None and new_role in (Role.OWNER, Role.ADMIN):
                raise PreconditionFailedError(
                    f"{new_role.value} requires membership in an organization"
                )
            if target.role is Role.OWNER:
                raise PreconditionFailedError(
                    "Transfer ownership before changing the owner's role"
                )

            if new_role is Role.OWNER:
                return await self._promote_to_owner(target)

            updated = await self.user_repository.save(
                target.model_copy(update={"role": new_role})
            )
            logfire.info(
                "Role changed",
                user_id=str(target.id),
                old_role=target.role.value,
                new_role=new_role.value,
            )
            return updated

    async def remove_from_organization(
        self, target_user_id: UserId, requester_id: UserId
    ) -> User:
        """Remove a member from their organization.

        The target becomes an unaffiliated USER.

        Raises:
            NotFoundError: If either user does not exist
            PreconditionFailedError: If the target is the OWNER or has no
                organization
            ForbiddenError: If the requester may not remove the target
        """
        with logfire.span(
            "ownership_service.remove_from_organization",
            target_user_id=str(target_user_id),
            requester_id=str(requester_id),
        ):
            requester = await self._get_user(requester_id)
            target = await self._get_user(target_user_id)

            if target.role is Role.OWNER:
                raise PreconditionFailedError(
                    "The owner cannot be removed; transfer ownership first"
                )
            if target.organization_id is None:
                raise PreconditionFailedError("User is not a member of an organization")

            if not requester.role.is_system_role:
                self.authorization_guard.require_capability(
                    requester, Capability.MANAGE_USERS
                )
                self.authorization_guard.require_same_organization(
                    requester, target.organization_id
                )
                if requester.role is Role.ADMIN and target.role is not Role.USER:
                    raise ForbiddenError("ADMIN may only remove USER members")

            organization = await self._get_organization(target.organization_id)
            now = datetime.now(timezone.utc)

            async with self.transaction_manager.atomic():
                removed = await self.user_repository.save(target.left_organization())
                await self.organization_repository.save(
                    organization.model_copy(
                        update={
                            "member_count": max(organization.member_count - 1, 0),
                            "updated_at": now,
                        }
                    )
                )

            logfire.info(
                "Member removed",
                user_id=str(target.id),
                organization_id=str(organization.id),
                requester_id=str(requester_id),
            )
            return removed

    async def transfer_ownership(
        self, current_owner_id: UserId, new_owner_id: UserId
    ) -> User:
        """Hand ownership from the current owner to another member.

        Returns:
            The new owner

        Raises:
            NotFoundError: If either user or the organization does not exist
            ForbiddenError: If ``current_owner_id`` is not an OWNER
            PreconditionFailedError: If the new owner is not a member of the
                same organization, or the organization references another owner
        """
        with logfire.span(
            "ownership_service.transfer_ownership",
            current_owner_id=str(current_owner_id),
            new_owner_id=str(new_owner_id),
        ):
            if current_owner_id == new_owner_id:
                raise PreconditionFailedError("User already owns the organization")

            current = await self._get_user(current_owner_id)
            new_owner = await self._get_user(new_owner_id)

            if current.role is not Role.OWNER or current.organization_id is None:
                raise ForbiddenError("Only the organization owner may transfer ownership")
            organization = await self._get_organization(current.organization_id)
            if organization.owner_user_id != current.id:
                raise PreconditionFailedError(
                    "Organization owner reference is inconsistent; reconcile it first"
                )
            if new_owner.organization_id != current.organization_id:
                raise PreconditionFailedError(
                    "The new owner must be a member of the organization"
                )

            return await self._swap_owner(organization, current, new_owner)

    async def resolve_fallback_owner(self, organization: Organization) -> User | None:
        """Pick the member who should own an organization that lost its owner.

        Most senior ADMIN (earliest joined_at), else most senior USER, else
        None. None means the organization needs manual intervention.
        """
        members = await self.user_repository.find_by_organization(organization.id)
        for role in (Role.ADMIN, Role.USER):
            candidates = sorted(
                (m for m in members if m.role is role), key=_seniority
            )
            if candidates:
                return candidates[0]
        return None

    async def reconcile_owner(
        self, organization_id: OrganizationId, requester_id: UserId
    ) -> Organization:
        """Repair an organization's owner reference.

        A valid reference is kept. Otherwise an existing OWNER member is
        re-referenced (extra OWNERs are demoted to ADMIN), or the fallback
        candidate is promoted. With no candidate the organization is left
        ownerless and flagged.

        Raises:
            ForbiddenError: Unless the requester holds a platform role
            NotFoundError: If the organization does not exist
        """
        with logfire.span(
            "ownership_service.reconcile_owner",
            organization_id=str(organization_id),
            requester_id=str(requester_id),
        ):
            requester = await self._get_user(requester_id)
            self.authorization_guard.require_capability(
                requester, Capability.MANAGE_PLATFORM
            )
            organization = await self._get_organization(organization_id)
            members = await self.user_repository.find_by_organization(organization_id)
            owners = sorted((m for m in members if m.role is Role.OWNER), key=_seniority)

            if len(owners) == 1 and organization.owner_user_id == owners[0].id:
                logfire.info("Owner reference is valid", organization_id=str(organization_id))
                return organization

            now = datetime.now(timezone.utc)
            async with self.transaction_manager.atomic():
                if owners:
                    keep = next(
                        (o for o in owners if o.id == organization.owner_user_id),
                        owners[0],
                    )
                    for extra in owners:
                        if extra.id != keep.id:
                            await self.user_repository.save(
                                extra.model_copy(update={"role": Role.ADMIN})
                            )
                    owner_id = keep.id
                else:
                    fallback = await self.resolve_fallback_owner(organization)
                    if fallback is None:
                        owner_id = None
                    else:
                        await self.user_repository.save(
                            fallback.model_copy(update={"role": Role.OWNER})
                        )
                        owner_id = fallback.id

                repaired = await self.organization_repository.save(
                    organization.model_copy(
                        update={
                            "owner_user_id": owner_id,
                            "member_count": len(members),
                            "updated_at": now,
                        }
                    )
                )

            if owner_id is None:
                logfire.warn(
                    "Organization has no owner and no member to promote; "
                    "manual intervention required",
                    organization_id=str(organization_id),
                )
            else:
                logfire.info(
                    "Owner reference repaired",
                    organization_id=str(organization_id),
                    owner_user_id=str(owner_id),
                )
            return repaired

    def _authorize_role_change(self, requester: User, target: User, new_role: Role) -> None:
        if requester.id == target.id:
            raise ForbiddenError("Users cannot change their own role")

        if requester.role.is_system_role:
            if requester.role is Role.STAFF and Role.SUDOER in (target.role, new_role):
                raise ForbiddenError("STAFF may not alter SUDOER accounts")
            return

        self.authorization_guard.require_capability(requester, Capability.MANAGE_USERS)
        if target.organization_id is None:
            raise ForbiddenError("Target is not a member of your organization")
        self.authorization_guard.require_same_organization(
            requester, target.organization_id
        )

        if requester.role is Role.OWNER:
            return
        if target.role is Role.USER and new_role in (Role.USER, Role.ADMIN):
            return
        raise ForbiddenError("ADMIN may only switch USER members between USER and ADMIN")

    async def _promote_to_owner(self, target: User) -> User:
        # target.organization_id is set: unaffiliated targets were rejected above
        organization = await self._get_organization(target.organization_id)
        if organization.owner_user_id is None:
            now = datetime.now(timezone.utc)
            async with self.transaction_manager.atomic():
                promoted = await self.user_repository.save(
                    target.model_copy(update={"role": Role.OWNER})
                )
                await self.organization_repository.save(
                    organization.model_copy(
                        update={"owner_user_id": target.id, "updated_at": now}
                    )
                )
            logfire.info(
                "Owner assigned", organization_id=str(organization.id), user_id=str(target.id)
            )
            return promoted

        current = await self._get_user(organization.owner_user_id)
        return await self._swap_owner(organization, current, target)

    async def _swap_owner(
        self, organization: Organization, current: User, new_owner: User
    ) -> User:
        now = datetime.now(timezone.utc)
        async with self.transaction_manager.atomic():
            await self.user_repository.save(
                current.model_copy(update={"role": Role.ADMIN})
            )
            promoted = await self.user_repository.save(
                new_owner.model_copy(update={"role": Role.OWNER})
            )
            await self.organization_repository.save(
                organization.model_copy(
                    update={"owner_user_id": new_owner.id, "updated_at": now}
                )
            )
        logfire.info(
            "Ownership transferred",
            organization_id=str(organization.id),
            previous_owner_id=str(current.id),
            new_owner_id=str(new_owner.id),
        )
        return promoted

    async def _get_user(self, user_id: UserId) -> User:
        user = await self.user_repository.find_by_id(user_id)
        if user is None:
            raise NotFoundError("User", str(user_id))
        return user

    async def _get_organization(self, organization_id: OrganizationId) -> Organization:
        organization = await self.organization_repository.find_by_id(organization_id)
        if organization is None:
            raise NotFoundError("Organization", str(organization_id))
        return organization
