#!/usr/bin/env python3
"""Expire overdue pending invitations.

Meant to run on a schedule (cron, a Kubernetes CronJob, ...). Safe to run
repeatedly: an invitation that is already expired is not touched again.
"""

import asyncio
import sys

import logfire
from dishka import Scope

from certis.config import Settings
from certis.domain.service import InvitationService
from certis.util.di.container import create_container
from certis.util.observability import configure_logfire


async def sweep() -> int:
    """Run one sweep inside a request scope so the session is committed."""
    container = create_container()
    try:
        async with container(scope=Scope.REQUEST) as request_container:
            invitation_service = await request_container.get(InvitationService)
            return await invitation_service.sweep_expired()
    finally:
        await container.close()


def main() -> int:
    settings = Settings()
    configure_logfire(settings)

    try:
        expired = asyncio.run(sweep())
        logfire.info("Invitation sweep finished", expired=expired)
        return 0

    except Exception as e:
        logfire.error(
            "Invitation sweep failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise


if __name__ == "__main__":
    sys.exit(main())
