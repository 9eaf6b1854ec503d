"""PostgreSQL transaction manager."""

from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager

import logfire
from sqlalchemy.ext.asyncio import AsyncSession

from certis.domain.repository import TransactionManager

ON_COMMIT_KEY = "certis.on_commit"


def _callbacks(session: AsyncSession) -> list[Callable[[], None]]:
    return session.info.setdefault(ON_COMMIT_KEY, [])


async def commit_session(session: AsyncSession) -> None:
    """Commit the session, then run the callbacks registered for the commit."""
    await session.commit()
    callbacks = session.info.pop(ON_COMMIT_KEY, [])
    for callback in callbacks:
        try:
            callback()
        except Exception as e:
            logfire.error("After-commit callback failed", error=str(e))


async def rollback_session(session: AsyncSession) -> None:
    """Roll the session back and drop its pending after-commit callbacks."""
    session.info.pop(ON_COMMIT_KEY, None)
    await session.rollback()


class PostgresTransactionManager(TransactionManager):
    """Atomic blocks as SAVEPOINTs inside the request transaction.

    The request-scoped session commits once at the end of the request; a
    failing block rolls back to its savepoint and re-raises.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    @asynccontextmanager
    async def atomic(self) -> AsyncIterator[None]:
        registered = len(_callbacks(self.session))
        try:
            async with self.session.begin_nested():
                yield
        except BaseException:
            del _callbacks(self.session)[registered:]
            raise

    def on_commit(self, callback: Callable[[], None]) -> None:
        _callbacks(self.session).append(callback)
