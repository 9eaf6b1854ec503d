"""PostgreSQL implementation of User repository."""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from certis.domain.model import User
from certis.domain.repository import UserRepository
from certis.domain.value import OrganizationId, UserId
from certis.persistence.mappers import row_to_user, user_to_dict
from certis.persistence.repository.versioning import write_versioned
from certis.persistence.tables import users_table


class PostgresUserRepository(UserRepository):
    """PostgreSQL implementation of UserRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        stmt = select(users_table).where(users_table.c.id == user_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_user(dict(row)) if row else None

    async def find_by_email(self, email: str) -> Optional[User]:
        """Find a user by (lower-cased) email."""
        stmt = select(users_table).where(users_table.c.email == email.lower())
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_user(dict(row)) if row else None

    async def find_by_organization(self, organization_id: OrganizationId) -> list[User]:
        """Find all members of an organization, oldest membership first."""
        stmt = (
            select(users_table)
            .where(users_table.c.organization_id == organization_id)
            .order_by(users_table.c.joined_at.asc(), users_table.c.id.asc())
        )
        result = await self.session.execute(stmt)
        return [row_to_user(dict(row)) for row in result.mappings().all()]

    async def save(self, user: User) -> User:
        """Save a user (create or update) with a version check."""
        version = await write_versioned(
            self.session,
            users_table,
            user_to_dict(user),
            user.version,
            resource="User",
            conflict_message="Email already registered or organization already has an owner",
        )
        return user.model_copy(update={"version": version})
