"""Test configuration and fixtures."""

import os
from datetime import datetime, timedelta, timezone
from uuid import uuid4

import logfire

# Settings are read from the environment when the container first resolves
# them; a signing key is mandatory.
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("AUTH__JWT_SECRET", "test-secret-key-with-at-least-32-bytes!")
os.environ.setdefault("INVITATIONS__BASE_URL", "https://app.certis.test")

# Keep telemetry local and quiet during tests
logfire.configure(send_to_logfire=False, console=False)

from certis.domain.model import Organization, TokenClaims, User  # noqa: E402
from certis.domain.repository import (  # noqa: E402
    OrganizationRepository,
    UserRepository,
)
from certis.domain.service import OrganizationService, TokenService  # noqa: E402
from certis.domain.value import OrganizationId, Role, UserId  # noqa: E402

# Not a real bcrypt hash; for users that never log in
FAKE_PASSWORD_HASH = "$2b$12$notarealhashnotarealhashnotarealhashnotarealhash12"


def make_user(
    email: str,
    role: Role = Role.USER,
    organization_id: OrganizationId | None = None,
    joined_at: datetime | None = None,
) -> User:
    """Build an unsaved user."""
    if organization_id is not None and joined_at is None:
        joined_at = datetime.now(timezone.utc)
    return User(
        id=UserId(uuid4()),
        email=email,
        password_hash=FAKE_PASSWORD_HASH,
        role=role,
        organization_id=organization_id,
        joined_at=joined_at,
    )


async def create_user(env, email: str, role: Role = Role.USER) -> User:
    """Save an unaffiliated user (or a platform account for system roles)."""
    user_repo = await env.get(UserRepository)
    return await user_repo.save(make_user(email, role=role))


async def create_organization(
    env,
    owner_email: str = "owner@acme.com",
    domain: str = "acme.test",
    name: str = "Acme Corp",
) -> tuple[Organization, User]:
    """Found an organization through the service; returns it with its owner."""
    founder = await create_user(env, owner_email)
    organization_service = await env.get(OrganizationService)
    organization = await organization_service.create_organization(
        founder.id, name, domain
    )
    user_repo = await env.get(UserRepository)
    owner = await user_repo.find_by_id(founder.id)
    return organization, owner


async def add_member(
    env,
    organization: Organization,
    email: str,
    role: Role = Role.USER,
    joined_days_ago: int = 0,
) -> User:
    """Save a member of an organization and bump its member count."""
    user_repo = await env.get(UserRepository)
    org_repo = await env.get(OrganizationRepository)

    joined_at = datetime.now(timezone.utc) - timedelta(days=joined_days_ago)
    member = await user_repo.save(
        make_user(email, role=role, organization_id=organization.id, joined_at=joined_at)
    )
    current = await org_repo.find_by_id(organization.id)
    await org_repo.save(
        current.model_copy(update={"member_count": current.member_count + 1})
    )
    return member


async def claims_for(env, user: User) -> TokenClaims:
    """Claims as the HTTP layer would see them for this user."""
    token_service = await env.get(TokenService)
    return token_service.verify(token_service.issue(user))
