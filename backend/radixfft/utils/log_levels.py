from __future__ import annotations

import logging

logger = logging.getLogger(__name__)

# Spellings accepted by --log-level and logging.level on top of the stdlib names
_ALIASES: dict[str, str] = {
    "WARN": "WARNING",
    "FATAL": "CRITICAL",
    "TRACE": "DEBUG",
    "VERBOSE": "DEBUG",
    "QUIET": "ERROR",
}

LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def parse_log_level(value: str | None, default: int) -> int:
    """Parse 'warn', 'Debug', 'quiet' or '10' into a numeric level.

    Unknown names fall back to `default`.
    """
    if not value:
        return default
    raw = value.strip()
    if not raw:
        return default
    if raw.isdigit():
        return int(raw)
    key = raw.upper().replace("-", "_")
    level = logging.getLevelName(_ALIASES.get(key, key))
    # getLevelName maps unknown names to the string "Level <name>"
    return level if isinstance(level, int) else default


def configure_logging(value: str | None, default: int = logging.INFO) -> int:
    """Set up root logging for command line use and return the level applied."""
    level = parse_log_level(value, default)
    logging.basicConfig(level=level, format=LOG_FORMAT, force=True)
    logging.getLogger("radixfft").setLevel(level)
    logger.debug(f"Logging at {logging.getLevelName(level)}")
    return level
