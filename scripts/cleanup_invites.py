#!/usr/bin/env python3
"""Run one invite cleanup sweep.

Meant for a scheduler (cron, Kubernetes CronJob). Safe to run repeatedly:
a second sweep over the same data reports zero changes.
"""

import asyncio
import sys

import logfire

from tenantlink.application.usecase.invite import (
    CleanupExpiredInvitesRequest,
    CleanupExpiredInvitesUseCase,
)
from tenantlink.config import Settings
from tenantlink.util.di.container import create_container
from tenantlink.util.logging import setup_logging
from tenantlink.util.observability import configure_logfire


async def run_cleanup() -> None:
    container = create_container(for_http=False)
    try:
        async with container() as request_container:
            use_case = await request_container.get(CleanupExpiredInvitesUseCase)
            result = await use_case.execute(CleanupExpiredInvitesRequest())

        logfire.info(
            "Invite cleanup finished",
            soft_deleted=result.soft_deleted,
            purged=result.purged,
            rate_limit_entries_pruned=result.rate_limit_entries_pruned,
            cleaned_at=result.cleaned_at.isoformat(),
        )
    finally:
        await container.close()


def main() -> int:
    settings = Settings()
    setup_logging(settings)
    configure_logfire(settings)

    try:
        asyncio.run(run_cleanup())
        return 0
    except Exception as e:
        logfire.error(
            "Invite cleanup failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise


if __name__ == "__main__":
    sys.exit(main())
