"""Runtime settings read from the environment (and a .env file, if present)."""

import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

DEFAULT_LOG_LEVEL = "INFO"


def is_log_level(name: str) -> bool:
    """True if ``name`` is a level the logging module knows, e.g. "DEBUG"."""
    return isinstance(logging.getLevelName(name), int)


@dataclass
class CheckerSettings:
    """Checker configuration.

    Attributes:
        core_path: Engine library to load instead of ./libocgcore.*
        sentry_dsn: Enables error reporting when set
        environment: Sentry environment tag
        log_level: Root logging level name
        rejected_log_level: LOG_LEVEL value that was not a logging level, if any
    """
    core_path: Optional[str] = None
    sentry_dsn: Optional[str] = None
    environment: str = "development"
    log_level: str = DEFAULT_LOG_LEVEL
    rejected_log_level: Optional[str] = None

    @classmethod
    def from_env(cls) -> "CheckerSettings":
        load_dotenv()
        log_level = os.getenv("LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()
        rejected_log_level = None
        if not is_log_level(log_level):
            rejected_log_level, log_level = log_level, DEFAULT_LOG_LEVEL
        return cls(
            core_path=os.getenv("OCGCORE_PATH") or None,
            sentry_dsn=os.getenv("SENTRY_DSN") or None,
            environment=os.getenv("ENVIRONMENT", "development"),
            log_level=log_level,
            rejected_log_level=rejected_log_level,
        )
