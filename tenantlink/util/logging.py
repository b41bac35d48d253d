"""Logging configuration for the application."""

import logging
import sys

from tenantlink.config import Settings

# Characters kept at each end of a redacted token
_PREVIEW_CHARS = 2


def setup_logging(settings: Settings) -> None:
    """Configure application logging.

    Sets up structured logging with appropriate levels based on environment.

    Args:
        settings: Application settings
    """
    if settings.debug:
        level = logging.DEBUG
    else:
        level = logging.INFO

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,  # Override any existing configuration
    )

    # Set third-party loggers to WARNING to reduce noise
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

    logging.getLogger("tenantlink").setLevel(level)

    logger = logging.getLogger(__name__)
    logger.info(
        f"Logging configured: environment={settings.environment}, level={logging.getLevelName(level)}"
    )


def redact_token(token: str | None) -> str:
    """Reduce a plaintext token to a short preview that is safe to log.

    Only the first and last two characters survive, which is not enough to
    reconstruct or brute-force the token.

    Examples:
        >>> redact_token("aB3dE5gH7jK9")
        'aB…K9'
        >>> redact_token("abc")
        '…'
    """
    if not token:
        return "…"
    token = token.strip()
    if len(token) <= _PREVIEW_CHARS * 2 + 2:
        return "…"
    return f"{token[:_PREVIEW_CHARS]}…{token[-_PREVIEW_CHARS:]}"
