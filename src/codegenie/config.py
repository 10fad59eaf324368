"""
Configuration management for CodeGenie.

Loads settings from environment variables and provides configuration objects.
"""

import os
from dataclasses import dataclass
from typing import Optional


DEFAULT_ENDPOINT = "http://127.0.0.1:8000/generate"
DEFAULT_MAX_TOKENS = 500


def _parse_timeout(value: Optional[str]) -> Optional[float]:
    if value is None or not value.strip():
        return None
    return float(value)


@dataclass
class Config:
    """CodeGenie configuration."""

    endpoint: str = DEFAULT_ENDPOINT
    max_tokens: int = DEFAULT_MAX_TOKENS
    timeout: Optional[float] = None
    enabled: bool = True
    log_level: str = "INFO"

    def __init__(
        self,
        endpoint: Optional[str] = None,
        max_tokens: Optional[int] = None,
        timeout: Optional[float] = None,
        enabled: Optional[bool] = None,
        log_level: Optional[str] = None,
    ):
        """Initialize config from environment variables; explicit arguments win."""
        self.endpoint = endpoint or os.getenv("CODEGENIE_ENDPOINT", DEFAULT_ENDPOINT)
        self.max_tokens = (
            max_tokens
            if max_tokens is not None
            else int(os.getenv("CODEGENIE_MAX_TOKENS", str(DEFAULT_MAX_TOKENS)))
        )
        # No timeout unless asked for: the request blocks until the endpoint answers
        self.timeout = (
            timeout if timeout is not None else _parse_timeout(os.getenv("CODEGENIE_TIMEOUT"))
        )
        self.enabled = (
            enabled
            if enabled is not None
            else os.getenv("CODEGENIE_ENABLED", "true").lower() == "true"
        )
        self.log_level = log_level or os.getenv("CODEGENIE_LOG_LEVEL", "INFO")
