"""User repository interface."""

from abc import ABC, abstractmethod

from certis.domain.model.user import User
from certis.domain.value import OrganizationId, UserId


class UserRepository(ABC):
    """Repository for User aggregate.

    Defines the contract for user persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> User | None:
        """Find a user by ID.

        Args:
            user_id: The user's unique identifier

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_email(self, email: str) -> User | None:
        """Find a user by email.

        Args:
            email: Normalized (lower-cased) email address

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_organization(self, organization_id: OrganizationId) -> list[User]:
        """Find all members of an organization, oldest membership first.

        Args:
            organization_id: The organization's ID

        Returns:
            Members ordered by joined_at ascending
        """
        pass

    @abstractmethod
    async def save(self, user: User) -> User:
        """Save a user (create or update).

        A user with version 0 is inserted. Any other user is written only if
        the stored version still equals ``user.version``.

        Args:
            user: The user to save

        Returns:
            The saved user with its incremented version

        Raises:
            ConflictError: If the email is already registered
            ConcurrencyConflictError: If the stored version changed since it was read
        """
        pass
