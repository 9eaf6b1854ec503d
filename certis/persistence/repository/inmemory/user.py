"""In-memory user repository for testing."""

from datetime import datetime, timezone
from typing import Optional

from certis.domain.error import ConflictError
from certis.domain.model import User
from certis.domain.repository import UserRepository
from certis.domain.value import OrganizationId, Role, UserId

from .database import InMemoryDatabase

_NEVER = datetime.max.replace(tzinfo=timezone.utc)


class InMemoryUserRepository(UserRepository):
    """In-memory implementation of UserRepository for testing."""

    def __init__(self, database: InMemoryDatabase) -> None:
        self.database = database

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        return self.database.users.get(user_id)

    async def find_by_email(self, email: str) -> Optional[User]:
        """Find a user by email."""
        email = email.lower()
        for user in self.database.users.values():
            if user.email == email:
                return user
        return None

    async def find_by_organization(self, organization_id: OrganizationId) -> list[User]:
        """Find members of an organization, oldest membership first."""
        members = [
            u for u in self.database.users.values() if u.organization_id == organization_id
        ]
        members.sort(key=lambda u: (u.joined_at or _NEVER, str(u.id)))
        return members

    async def save(self, user: User) -> User:
        """Save a user (create or update).

        Raises:
            ConflictError: If the email is taken or the organization already
                has another OWNER
        """
        for other in self.database.users.values():
            if other.id == user.id:
                continue
            if other.email == user.email:
                raise ConflictError("Email already registered")
            if (
                user.role is Role.OWNER
                and other.role is Role.OWNER
                and other.organization_id == user.organization_id
            ):
                raise ConflictError("Organization already has an owner")
        return self.database.write_versioned(self.database.users, user, "User")
