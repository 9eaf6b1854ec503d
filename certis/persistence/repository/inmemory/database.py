"""Shared in-memory store backing the in-memory repositories."""

from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from typing import Any, TypeVar
from uuid import UUID

from certis.domain.error import ConcurrencyConflictError
from certis.domain.model.common import VersionedModel
from certis.domain.repository import TransactionManager

M = TypeVar("M", bound=VersionedModel)

TABLES = ("users", "organizations", "invitations", "certificates", "courses")


class InMemoryDatabase:
    """Tables of immutable entities keyed by ID.

    Entities are frozen, so a snapshot only needs shallow copies of the
    tables.
    """

    def __init__(self) -> None:
        self.users: dict[UUID, Any] = {}
        self.organizations: dict[UUID, Any] = {}
        self.invitations: dict[UUID, Any] = {}
        self.certificates: dict[UUID, Any] = {}
        self.courses: dict[UUID, Any] = {}

    def snapshot(self) -> dict[str, dict[UUID, Any]]:
        return {name: dict(getattr(self, name)) for name in TABLES}

    def restore(self, snapshot: dict[str, dict[UUID, Any]]) -> None:
        for name in TABLES:
            setattr(self, name, snapshot[name])

    @staticmethod
    def write_versioned(table: dict[UUID, Any], entity: M, resource: str) -> M:
        """Store an entity if its version matches, returning the stored copy.

        Raises:
            ConcurrencyConflictError: If the stored version differs
        """
        stored = table.get(entity.id)
        expected = stored.version if stored is not None else 0
        if entity.version != expected:
            raise ConcurrencyConflictError(resource, str(entity.id))
        saved = entity.model_copy(update={"version": entity.version + 1})
        table[entity.id] = saved
        return saved

    @staticmethod
    def delete_versioned(table: dict[UUID, Any], entity: M, resource: str) -> None:
        """Remove an entity if its version matches.

        Raises:
            ConcurrencyConflictError: If the entity changed or is already gone
        """
        stored = table.get(entity.id)
        if stored is None or stored.version != entity.version:
            raise ConcurrencyConflictError(resource, str(entity.id))
        del table[entity.id]


class InMemoryTransactionManager(TransactionManager):
    """Atomic blocks as snapshot/restore of the shared store.

    Writes are visible immediately, so outside an atomic block a commit
    callback runs at once; inside one it waits for the outermost block.
    """

    def __init__(self, database: InMemoryDatabase) -> None:
        self.database = database
        self._depth = 0
        self._callbacks: list[Callable[[], None]] = []

    @asynccontextmanager
    async def atomic(self) -> AsyncIterator[None]:
        snapshot = self.database.snapshot()
        registered = len(self._callbacks)
        self._depth += 1
        try:
            yield
        except BaseException:
            self.database.restore(snapshot)
            del self._callbacks[registered:]
            raise
        finally:
            self._depth -= 1
        if self._depth == 0:
            callbacks, self._callbacks = self._callbacks, []
            for callback in callbacks:
                callback()

    def on_commit(self, callback: Callable[[], None]) -> None:
        if self._depth:
            self._callbacks.append(callback)
        else:
            callback()
