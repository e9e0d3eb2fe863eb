"""Configuration management for summaly."""

from __future__ import annotations

import os
from dataclasses import dataclass

VERSION = "0.1.0"

DEFAULT_BOT_UA = (
    f"SummalyBot/{VERSION} (https://github.com/AmaseCocoa/summaly/blob/master/README.md)"
)
ROBOTS_USER_AGENT = "SummalyBot"

DEFAULT_RESPONSE_TIMEOUT = 20.0
DEFAULT_OPERATION_TIMEOUT = 60.0
DEFAULT_MAX_RESPONSE_SIZE = 10 * 1024 * 1024


def _env_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Config:
    """Process-wide defaults; per-call options take precedence."""

    allow_private_ip: bool = False
    user_agent: str = DEFAULT_BOT_UA
    response_timeout: float = DEFAULT_RESPONSE_TIMEOUT
    operation_timeout: float = DEFAULT_OPERATION_TIMEOUT
    max_response_size: int = DEFAULT_MAX_RESPONSE_SIZE
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> Config:
        return cls(
            allow_private_ip=_env_bool("SUMMALY_ALLOW_PRIVATE_IP"),
            user_agent=os.getenv("SUMMALY_USER_AGENT") or DEFAULT_BOT_UA,
            response_timeout=float(
                os.getenv("SUMMALY_RESPONSE_TIMEOUT", str(DEFAULT_RESPONSE_TIMEOUT))
            ),
            operation_timeout=float(
                os.getenv("SUMMALY_OPERATION_TIMEOUT", str(DEFAULT_OPERATION_TIMEOUT))
            ),
            max_response_size=int(
                os.getenv("SUMMALY_MAX_RESPONSE_SIZE", str(DEFAULT_MAX_RESPONSE_SIZE))
            ),
            log_level=os.getenv("SUMMALY_LOG_LEVEL", cls.log_level).upper(),
        )
