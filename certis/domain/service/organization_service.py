"""Organization domain service."""

from datetime import datetime, timezone
from uuid import uuid4

import logfire

from certis.domain.error import (
    ConflictError,
    ForbiddenError,
    NotFoundError,
    PreconditionFailedError,
    ValidationError,
)
from certis.domain.model import Organization, TokenClaims
from certis.domain.repository import (
    OrganizationRepository,
    TransactionManager,
    UserRepository,
)
from certis.domain.value import DomainName, OrganizationId, Role, UserId

from .base import Service


class OrganizationService(Service):
    """Domain service for founding and reading organizations."""

    def __init__(
        self,
        organization_repository: OrganizationRepository,
        user_repository: UserRepository,
        transaction_manager: TransactionManager,
    ) -> None:
        self.organization_repository = organization_repository
        self.user_repository = user_repository
        self.transaction_manager = transaction_manager

    async def create_organization(
        self,
        founder_id: UserId,
        name: str,
        domain: str,
        description: str | None = None,
    ) -> Organization:
        """Found an organization.

        The organization and its founder's promotion to OWNER are written in
        one atomic block.

        Args:
            founder_id: Unaffiliated user founding the organization
            name: Display name
            domain: Organization domain, unique across the platform
            description: Optional description

        Returns:
            The created organization

        Raises:
            NotFoundError: If the founder does not exist
            ForbiddenError: If the founder holds a system role
            ConflictError: If the founder already belongs to an organization,
                or the domain is taken
            ValidationError: If the name or domain is invalid
        """
        with logfire.span(
            "organization_service.create_organization",
            founder_id=str(founder_id),
            domain=domain,
        ):
            founder = await self.user_repository.find_by_id(founder_id)
            if founder is None:
                raise NotFoundError("User", str(founder_id))
            if founder.role.is_system_role:
                raise ForbiddenError("Platform accounts cannot found organizations")
            if founder.organization_id is not None:
                raise ConflictError("User already belongs to an organization")

            now = datetime.now(timezone.utc)
            try:
                organization = Organization(
                    id=OrganizationId(uuid4()),
                    name=name,
                    domain=DomainName(domain),
                    description=description,
                    owner_user_id=founder.id,
                    member_count=1,
                    created_at=now,
                    updated_at=now,
                )
            except ValueError as e:
                raise ValidationError(str(e)) from e

            if await self.organization_repository.find_by_domain(organization.domain):
                logfire.warn("Domain already taken", domain=organization.domain.root)
                raise ConflictError(f"Domain already taken: {organization.domain.root}")

            async with self.transaction_manager.atomic():
                saved = await self.organization_repository.save(organization)
                await self.user_repository.save(
                    founder.joined(organization.id, Role.OWNER, now)
                )

            logfire.info(
                "Organization created",
                organization_id=str(saved.id),
                founder_id=str(founder_id),
            )
            return saved

    async def get_organization(self, organization_id: OrganizationId) -> Organization:
        """Get an organization by ID.

        Raises:
            NotFoundError: If the organization does not exist
        """
        organization = await self.organization_repository.find_by_id(organization_id)
        if organization is None:
            raise NotFoundError("Organization", str(organization_id))
        return organization

    async def get_for_tenant(self, claims: TokenClaims) -> Organization:
        """The caller's own organization, taken from the verified claims.

        Raises:
            PreconditionFailedError: If the caller has no organization
        """
        if claims.organization_id is None:
            raise PreconditionFailedError("User does not belong to an organization")
        return await self.get_organization(claims.organization_id)
