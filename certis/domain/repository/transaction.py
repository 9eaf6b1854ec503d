"""Transaction boundary interface."""

from abc import ABC, abstractmethod
from collections.abc import Callable
from contextlib import AbstractAsyncContextManager


class TransactionManager(ABC):
    """Unit of work spanning several repository writes.

    Usage:
        async with transaction_manager.atomic():
            await user_repository.save(user)
            await organization_repository.save(organization)

    Either every write inside the block persists or none does. Blocks may be
    nested; an inner failure only undoes the inner block.
    """

    @abstractmethod
    def atomic(self) -> AbstractAsyncContextManager[None]:
        """Open an atomic block."""
        pass

    @abstractmethod
    def on_commit(self, callback: Callable[[], None]) -> None:
        """Run ``callback`` once the current writes are durably committed.

        Callbacks registered inside a block that rolls back, or in a unit of
        work that never commits, are dropped.
        """
        pass
