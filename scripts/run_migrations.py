#!/usr/bin/env python3
"""Apply database migrations up to head."""

import sys
import logfire
from alembic import command
from alembic.config import Config

from tenantlink.config import Settings
from tenantlink.util.observability import configure_logfire


def main(revision: str = "head") -> int:
    """Run migrations and log any errors to Logfire.

    Args:
        revision: Target revision, ``head`` unless given on the command line
    """
    settings = Settings()
    configure_logfire(settings)

    try:
        logfire.info("Starting database migrations", revision=revision)

        alembic_cfg = Config("alembic.ini")
        alembic_cfg.set_main_option(
            "sqlalchemy.url", settings.database_url.replace("%", "%%")
        )

        command.upgrade(alembic_cfg, revision)

        logfire.info("Database migrations completed successfully")
        return 0

    except Exception as e:
        logfire.error(
            "Database migration failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        # Re-raise so the deploy fails rather than serving a broken schema
        raise


if __name__ == "__main__":
    sys.exit(main(*sys.argv[1:2]))
