#!/usr/bin/env python3
"""Start the invites API with Logfire error tracking for startup errors."""

import sys
import logfire
import uvicorn

from tenantlink.config import Settings
from tenantlink.util.logging import setup_logging
from tenantlink.util.observability import configure_logfire


def main() -> int:
    """Start the application and log any startup errors to Logfire."""
    settings = Settings()

    setup_logging(settings)
    configure_logfire(settings)

    try:
        logfire.info(
            "Starting invites API",
            environment=settings.environment,
            git_sha=settings.git_sha,
        )

        # The app module configures Logfire again on import, which is a no-op
        uvicorn.run(
            "tenantlink.interface.api.app:app",
            host="0.0.0.0",
            port=settings.port,
            log_level="debug" if settings.debug else "info",
        )

        return 0

    except Exception as e:
        logfire.error(
            "Application startup failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise


if __name__ == "__main__":
    sys.exit(main())
