"""
Scheduling engine configuration using python-dotenv.

This module loads environment variables from a .env file into os.environ
and exposes the tunable scheduling values as module-level constants.
"""

import logging
import os
import pathlib
from dotenv import load_dotenv


# Determine if we're running in a test environment
# Don't load .env file during testing to ensure predictable test behavior
is_testing = os.getenv("PYTEST_VERSION") is not None or any("pytest" in str(frame) for frame in __import__('inspect').stack(0))

# Load .env file into os.environ (only outside of testing)
if not is_testing:
    possible_paths = [
        pathlib.Path(__file__).parent.parent.parent / ".env",  # backend/.env (when run from backend/src)
        pathlib.Path(__file__).parent.parent.parent.parent / ".env",  # repository root .env
        pathlib.Path.cwd() / ".env",  # .env in current directory
    ]

    for env_path in possible_paths:
        if env_path.exists():
            load_dotenv(env_path)
            break


def _get_int(name: str, default: int) -> int:
    """Read an integer setting from the environment, falling back to default."""
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return int(raw)


# Business hours bound the default scheduling grid (end hour is exclusive)
BUSINESS_START_HOUR = _get_int("BUSINESS_START_HOUR", 8)
BUSINESS_END_HOUR = _get_int("BUSINESS_END_HOUR", 17)

# Booking limits
MAX_SESSIONS_PER_DAY = _get_int("MAX_SESSIONS_PER_DAY", 8)
DEFAULT_DAYS_TO_SHOW = _get_int("DEFAULT_DAYS_TO_SHOW", 14)

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

if BUSINESS_START_HOUR >= BUSINESS_END_HOUR:
    raise ValueError(
        f"BUSINESS_START_HOUR ({BUSINESS_START_HOUR}) must be before BUSINESS_END_HOUR ({BUSINESS_END_HOUR})"
    )


def configure_logging(level: str = LOG_LEVEL) -> None:
    """
    Configure root logging for a host application embedding the engine.

    The engine modules only create loggers; handlers are installed here so
    that hosts and scripts share one format.

    Args:
        level: Logging level name (DEBUG, INFO, WARNING, ERROR)
    """
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler()],
    )
