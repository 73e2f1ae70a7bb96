#!/usr/bin/env python3
"""
Client settings: built-in defaults, overridden by environment variables

Environment variables:
    LEANO_URL: Router base URL (default: http://192.168.0.1)
    LEANO_USERNAME: Username (default: admin)
    LEANO_PASSWORD: Password (no default, prompted when missing)
    LEANO_POLL_INTERVAL: Live dashboard refresh interval in seconds (default: 3)
    LEANO_AUTH_TIMEOUT: Authentication request timeout in seconds (default: 10)
    LEANO_COMMAND_TIMEOUT: Command request timeout in seconds (default: 30)
    LEANO_DMZ_IP: Default DMZ host (default: 192.168.0.98)

Nothing is ever written to disk.
"""

import logging
import os
from dataclasses import dataclass, replace
from typing import Mapping, Optional

from .transport import AUTH_TIMEOUT, COMMAND_TIMEOUT

log = logging.getLogger("leano.config")

DEFAULT_URL = "http://192.168.0.1"
DEFAULT_USERNAME = "admin"
DEFAULT_DMZ_IP = "192.168.0.98"
DEFAULT_POLL_INTERVAL = 3.0

POLL_MIN = 1.0
POLL_MAX = 60.0

ENV_MAP = {
    "base_url": "LEANO_URL",
    "username": "LEANO_USERNAME",
    "password": "LEANO_PASSWORD",
    "poll_interval": "LEANO_POLL_INTERVAL",
    "auth_timeout": "LEANO_AUTH_TIMEOUT",
    "command_timeout": "LEANO_COMMAND_TIMEOUT",
    "dmz_ip": "LEANO_DMZ_IP",
}

FLOAT_KEYS = {"poll_interval", "auth_timeout", "command_timeout"}


def normalize_url(url: str) -> str:
    """Add a scheme to a bare host and strip the trailing slash"""
    url = url.strip()
    if "://" not in url:
        url = f"http://{url}"
    return url.rstrip("/")


def clamp_interval(seconds: float) -> float:
    """Keep the poll interval within POLL_MIN..POLL_MAX"""
    clamped = min(max(seconds, POLL_MIN), POLL_MAX)
    if clamped != seconds:
        log.warning("Poll interval %ss out of range, using %ss", seconds, clamped)
    return clamped


@dataclass(frozen=True)
class Settings:
    """Resolved client settings"""

    base_url: str = DEFAULT_URL
    username: str = DEFAULT_USERNAME
    password: Optional[str] = None
    poll_interval: float = DEFAULT_POLL_INTERVAL
    auth_timeout: float = AUTH_TIMEOUT
    command_timeout: float = COMMAND_TIMEOUT
    dmz_ip: str = DEFAULT_DMZ_IP

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from defaults plus environment overrides"""
        environ = os.environ if environ is None else environ
        values = {}

        for key, env_name in ENV_MAP.items():
            raw = environ.get(env_name)
            if raw is None or raw.strip() == "":
                continue
            if key in FLOAT_KEYS:
                try:
                    value = float(raw)
                except ValueError:
                    log.warning("Ignoring %s=%r: not a number", env_name, raw)
                    continue
                if value <= 0:
                    log.warning("Ignoring %s=%r: must be positive", env_name, raw)
                    continue
                values[key] = value
            else:
                values[key] = raw.strip()

        settings = cls(**values)
        return settings.override()

    def override(self, **changes) -> "Settings":
        """
        Return a copy with the given non-None values applied

        The URL is normalized and the poll interval clamped.
        """
        changes = {k: v for k, v in changes.items() if v is not None}
        merged = replace(self, **changes)
        return replace(
            merged,
            base_url=normalize_url(merged.base_url),
            poll_interval=clamp_interval(merged.poll_interval),
        )
