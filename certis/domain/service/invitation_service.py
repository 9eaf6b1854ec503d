"""Invitation lifecycle domain service.

PENDING -> ACCEPTED | EXPIRED | REVOKED. Every transition is a conditional
write on the invitation's version, so two racing transitions (an accept and
a sweep, two accepts) have exactly one winner. The loser gets a
ConcurrencyConflictError.
"""

import secrets
from datetime import datetime, timedelta, timezone
from uuid import uuid4

import logfire

from certis.config import InvitationSettings
from certis.domain.error import (
    ConcurrencyConflictError,
    ConflictError,
    EmailMismatchError,
    InvitationExpiredError,
    NotFoundError,
    ValidationError,
)
from certis.domain.model import Invitation, Organization, User
from certis.domain.repository import (
    InvitationRepository,
    OrganizationRepository,
    TransactionManager,
    UserRepository,
)
from certis.domain.value import (
    InvitationId,
    InvitationStatus,
    InvitationToken,
    OrganizationId,
    Role,
    UserId,
    normalize_email,
)

from .authorization_guard import AuthorizationGuard
from .base import Service
from .notification import NotificationService


def _masked(token: InvitationToken) -> str:
    return token.root[:8] + "..."


class InvitationService(Service):
    """Domain service for invitation operations."""

    def __init__(
        self,
        invitation_repository: InvitationRepository,
        user_repository: UserRepository,
        organization_repository: OrganizationRepository,
        transaction_manager: TransactionManager,
        notification_service: NotificationService,
        authorization_guard: AuthorizationGuard,
        invitation_settings: InvitationSettings,
    ) -> None:
        self.invitation_repository = invitation_repository
        self.user_repository = user_repository
        self.organization_repository = organization_repository
        self.transaction_manager = transaction_manager
        self.notification_service = notification_service
        self.authorization_guard = authorization_guard
        self.invitation_settings = invitation_settings

    async def create(
        self,
        email: str,
        role: Role,
        organization_id: OrganizationId,
        inviter_id: UserId,
    ) -> Invitation:
        """Invite an email address to join an organization.

        The invitation email is scheduled once the invitation is committed; a
        delivery failure is logged and does not undo the invitation.

        Args:
            email: Invitee email address
            role: Role granted on acceptance (ADMIN or USER)
            organization_id: Target organization
            inviter_id: OWNER or ADMIN of the organization

        Returns:
            The created PENDING invitation

        Raises:
            ValidationError: If the role cannot be granted by invitation
            NotFoundError: If the organization or inviter does not exist
            ForbiddenError: If the inviter does not manage the organization
            ConflictError: If a pending invitation exists for this email and
                organization, or the invitee already belongs to an organization
        """
        with logfire.span(
            "invitation_service.create",
            organization_id=str(organization_id),
            inviter_id=str(inviter_id),
            role=role.value,
        ):
            email = normalize_email(email)
            if not role.is_org_role:
                raise ValidationError(
                    "Can only invite users with organization roles (ADMIN, USER)"
                )
            if role is Role.OWNER:
                raise ValidationError(
                    "Ownership is granted by transfer, not by invitation"
                )

            organization = await self._get_organization(organization_id)
            inviter = await self._get_user(inviter_id)
            self.authorization_guard.require_org_manager(inviter, organization_id)

            if await self.invitation_repository.exists_pending(email, organization_id):
                logfire.warn(
                    "Pending invitation already exists",
                    organization_id=str(organization_id),
                )
                raise ConflictError(
                    "A pending invitation already exists for this email"
                )

            invitee = await self.user_repository.find_by_email(email)
            if invitee is not None and (
                invitee.organization_id is not None or invitee.role.is_system_role
            ):
                raise ConflictError("User already belongs to an organization")

            now = datetime.now(timezone.utc)
            invitation = Invitation(
                id=InvitationId(uuid4()),
                token=InvitationToken(secrets.token_urlsafe(32)),
                email=email,
                role=role,
                organization_id=organization_id,
                invited_by_user_id=inviter_id,
                status=InvitationStatus.PENDING,
                expires_at=now + timedelta(days=self.invitation_settings.expiry_days),
                created_at=now,
            )
            saved = await self.invitation_repository.save(invitation)
            logfire.info(
                "Invitation created",
                invitation_id=str(saved.id),
                organization_id=str(organization_id),
                role=role.value,
            )

            self.transaction_manager.on_commit(
                lambda: self.notification_service.send_invitation(
                    saved, organization.name
                )
            )
            return saved

    async def accept(self, token: InvitationToken, user_id: UserId) -> Invitation:
        """Accept a pending invitation.

        Membership, invitation status and the organization's member count
        change in one atomic block. The welcome email waits for the commit.

        Args:
            token: Invitation token from the accept link
            user_id: The accepting user

        Returns:
            The ACCEPTED invitation

        Raises:
            NotFoundError: If no pending invitation has this token
            InvitationExpiredError: If the invitation is past its expiry
            EmailMismatchError: If the invitation was addressed to another email
            ConflictError: If the user already belongs to an organization
            ConcurrencyConflictError: If a concurrent transition won
        """
        with logfire.span(
            "invitation_service.accept", token=_masked(token), user_id=str(user_id)
        ):
            invitation = await self.invitation_repository.find_pending_by_token(token)
            if invitation is None:
                logfire.warn("Pending invitation not found", token=_masked(token))
                raise NotFoundError("Invitation", _masked(token))

            now = datetime.now(timezone.utc)
            if invitation.is_expired(now):
                await self._mark_expired(invitation)
                raise InvitationExpiredError(str(invitation.id))

            user = await self._get_user(user_id)
            if normalize_email(user.email) != invitation.email:
                logfire.warn(
                    "Invitation email mismatch",
                    invitation_id=str(invitation.id),
                    user_id=str(user_id),
                )
                raise EmailMismatchError()
            if user.organization_id is not None or user.role.is_system_role:
                raise ConflictError("User already belongs to an organization")

            organization = await self._get_organization(invitation.organization_id)

            async with self.transaction_manager.atomic():
                accepted = await self.invitation_repository.save(
                    invitation.model_copy(
                        update={"status": InvitationStatus.ACCEPTED, "accepted_at": now}
                    )
                )
                await self.user_repository.save(
                    user.joined(invitation.organization_id, invitation.role, now)
                )
                await self.organization_repository.save(
                    organization.model_copy(
                        update={
                            "member_count": organization.member_count + 1,
                            "updated_at": now,
                        }
                    )
                )

            logfire.info(
                "Invitation accepted",
                invitation_id=str(invitation.id),
                user_id=str(user_id),
                organization_id=str(invitation.organization_id),
            )
            self.transaction_manager.on_commit(
                lambda: self.notification_service.send_welcome(
                    user.email, organization.name
                )
            )
            return accepted

    async def revoke(self, token: InvitationToken, revoker_id: UserId) -> Invitation:
        """Revoke an invitation.

        Raises:
            NotFoundError: If the invitation or revoker does not exist
            ForbiddenError: If the revoker does not manage the organization
            ConflictError: If the invitation is already terminal
        """
        with logfire.span(
            "invitation_service.revoke",
            token=_masked(token),
            revoker_id=str(revoker_id),
        ):
            invitation = await self.invitation_repository.find_by_token(token)
            if invitation is None:
                raise NotFoundError("Invitation", _masked(token))

            revoker = await self._get_user(revoker_id)
            self.authorization_guard.require_org_manager(
                revoker, invitation.organization_id
            )

            if invitation.status.is_terminal:
                raise ConflictError(
                    f"Invitation is already {invitation.status.value}"
                )

            revoked = await self.invitation_repository.save(
                invitation.model_copy(update={"status": InvitationStatus.REVOKED})
            )
            logfire.info(
                "Invitation revoked",
                invitation_id=str(invitation.id),
                revoker_id=str(revoker_id),
            )
            return revoked

    async def sweep_expired(self, now: datetime | None = None) -> int:
        """Expire every pending invitation past its expiry.

        Idempotent and safe to run concurrently with itself and with accept.

        Returns:
            Number of invitations moved to EXPIRED
        """
        now = now or datetime.now(timezone.utc)
        with logfire.span("invitation_service.sweep_expired"):
            count = await self.invitation_repository.expire_pending_before(now)
            logfire.info("Expired invitations swept", count=count)
            return count

    async def list_pending(
        self, organization_id: OrganizationId, requester_id: UserId
    ) -> list[Invitation]:
        """List the pending invitations of an organization.

        Raises:
            NotFoundError: If the requester does not exist
            ForbiddenError: If the requester does not manage the organization
        """
        with logfire.span(
            "invitation_service.list_pending", organization_id=str(organization_id)
        ):
            requester = await self._get_user(requester_id)
            self.authorization_guard.require_org_manager(requester, organization_id)
            return await self.invitation_repository.find_pending_by_organization(
                organization_id
            )

    async def _mark_expired(self, invitation: Invitation) -> None:
        try:
            await self.invitation_repository.save(
                invitation.model_copy(update={"status": InvitationStatus.EXPIRED})
            )
            logfire.info("Invitation expired on use", invitation_id=str(invitation.id))
        except ConcurrencyConflictError:
            # Already transitioned by a sweep or another request
            logfire.info(
                "Invitation already transitioned", invitation_id=str(invitation.id)
            )

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
