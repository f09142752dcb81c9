"""Server configuration loaded from environment variables."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass

log = logging.getLogger(__name__)

_HIDDEN = "[HIDDEN]"

# Variables read at start-up, in the order they are checked.
_REQUIRED = ("MASTER_KEY", "AUTH_TOKEN", "STORE_PATH", "LISTEN_ADDR")


@dataclass(frozen=True, repr=False)
class SealboxConfig:
    """Settings the server needs to start."""

    master_key: str
    auth_token: str
    store_path: str
    listen_addr: str

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> SealboxConfig:
        """Read the configuration; raise ValueError if a variable is missing or blank."""
        log.info("Loading Sealbox configuration from environment variables...")
        env = os.environ if environ is None else environ

        def required(name: str) -> str:
            value = env.get(name)
            if value is None or not value.strip():
                log.error("Environment variable %s is missing or empty", name)
                raise ValueError(f"{name} is missing or empty")
            return value

        values = {name.lower(): required(name) for name in _REQUIRED}
        config = cls(**values)
        log.info("Sealbox configuration loaded: %r", config)
        return config

    def __repr__(self) -> str:
        return (
            f"SealboxConfig(master_key={_HIDDEN!r}, auth_token={_HIDDEN!r}, "
            f"store_path={self.store_path!r}, listen_addr={self.listen_addr!r})"
        )