"""Environment variable helpers."""
from __future__ import annotations

import os

CONFIG_ENV = "HTTPDIAG_CONFIG"
LOG_LEVEL_ENV = "HTTPDIAG_LOG_LEVEL"
BUILD_VERSION_ENV = "HTTPDIAG_BUILD_VERSION"


def env_str(name: str, default: str | None = None) -> str | None:
    """Return string environment variable, or default when unset/empty."""
    value = os.environ.get(name)
    if value is None:
        return default
    value = value.strip()
    return value if value else default
