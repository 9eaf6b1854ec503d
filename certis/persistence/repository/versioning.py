"""Optimistic concurrency helpers for PostgreSQL repositories."""

from typing import Any
from uuid import UUID

from sqlalchemy import Table, delete, insert, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from certis.domain.error import ConcurrencyConflictError, ConflictError


async def write_versioned(
    session: AsyncSession,
    table: Table,
    values: dict[str, Any],
    version: int,
    resource: str,
    conflict_message: str,
) -> int:
    """Insert or conditionally update one row.

    Version 0 means a new entity and is inserted with version 1. Any other
    version updates the row only while its stored version still matches,
    then increments it.

    Args:
        session: Database session
        table: Target table (with ``id`` and ``version`` columns)
        values: Column values without ``version``
        version: Version the entity was read at
        resource: Entity name for error messages
        conflict_message: Message for unique constraint violations

    Returns:
        The new stored version

    Raises:
        ConflictError: If a unique constraint is violated
        ConcurrencyConflictError: If the row changed since it was read
    """
    entity_id: UUID = values["id"]
    try:
        # Savepoint: a constraint violation must not poison the request transaction
        async with session.begin_nested():
            if version == 0:
                await session.execute(insert(table).values(**values, version=1))
                return 1

            result = await session.execute(
                update(table)
                .where(table.c.id == entity_id, table.c.version == version)
                .values(**values, version=version + 1)
            )
    except IntegrityError as e:
        raise ConflictError(conflict_message) from e

    if result.rowcount != 1:
        raise ConcurrencyConflictError(resource, str(entity_id))
    return version + 1


async def delete_versioned(
    session: AsyncSession,
    table: Table,
    entity_id: UUID,
    version: int,
    resource: str,
    conflict_message: str,
) -> None:
    """Delete one row while its stored version still matches.

    Raises:
        ConflictError: If a foreign key still references the row
        ConcurrencyConflictError: If the row changed or is already gone
    """
    try:
        async with session.begin_nested():
            result = await session.execute(
                delete(table).where(table.c.id == entity_id, table.c.version == version)
            )
    except IntegrityError as e:
        raise ConflictError(conflict_message) from e

    if result.rowcount != 1:
        raise ConcurrencyConflictError(resource, str(entity_id))
