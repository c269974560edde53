"""Log Enricher - Runtime settings"""

import logging
import os
from dataclasses import dataclass
from typing import Optional

from .errors import ConfigError
from .patterns import DEFAULT_API_URL


@dataclass
class Settings:
    api_url: str = DEFAULT_API_URL
    timeout: Optional[float] = None
    log_level: str = 'WARNING'

    @classmethod
    def from_env(cls) -> 'Settings':
        return cls(
            api_url=os.getenv("LOG_ENRICHER_API_URL", DEFAULT_API_URL),
            timeout=_parse_timeout(os.getenv("LOG_ENRICHER_TIMEOUT")),
            log_level=_parse_log_level(os.getenv("LOG_ENRICHER_LOG_LEVEL", "WARNING")),
        )


def _parse_timeout(value: Optional[str]) -> Optional[float]:
    if not value:
        return None
    try:
        timeout = float(value)
    except ValueError:
        raise ConfigError("LOG_ENRICHER_TIMEOUT", value, "expected a number of seconds") from None
    if timeout <= 0:
        raise ConfigError("LOG_ENRICHER_TIMEOUT", value, "must be positive")
    return timeout


def _parse_log_level(value: str) -> str:
    level = value.upper()
    # getLevelName maps known names to their numeric level
    if not isinstance(logging.getLevelName(level), int):
        raise ConfigError("LOG_ENRICHER_LOG_LEVEL", value, "not a logging level name")
    return level
