"""Sentry error monitoring configuration."""

from typing import Sequence

import sentry_sdk

from .config import CheckerSettings
from .errors import CheckerError


def init_sentry(settings: CheckerSettings) -> bool:
    """Initialize Sentry error monitoring.

    Returns:
        True if Sentry was initialized, False if DSN not configured.
    """
    if not settings.sentry_dsn:
        return False

    sentry_sdk.init(
        dsn=settings.sentry_dsn,
        environment=settings.environment,
        attach_stacktrace=True,
    )
    return True


def report_fatal(error: CheckerError) -> None:
    """Send a fatal checker error, tagged with its type."""
    sentry_sdk.set_tag("checker.error", type(error).__name__)
    sentry_sdk.capture_exception(error)


def report_validation_failure(folders: Sequence[str]) -> None:
    """Record a run that finished with script errors."""
    sentry_sdk.set_context("scan", {"folders": list(folders)})
    sentry_sdk.capture_message("Script validation failed", level="warning")
