"""
Configuration for the ctlptl CLI.

Loads all configuration from environment variables with sensible defaults.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

DEFAULT_LOG_LEVEL = "WARNING"

# Upper bound on how long analytics may hold up command exit.
MAX_ANALYTICS_FLUSH_TIMEOUT = 1.0


class Settings:
    """
    CLI settings from environment variables.

    Environment Variables:
        CTLPTL_HOME: Directory for local state. Default: ~/.ctlptl
        CTLPTL_ANALYTICS: "on" or "off". Default: on
        CTLPTL_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR). Default: WARNING
        CTLPTL_ANALYTICS_FLUSH_TIMEOUT: Seconds to wait for analytics on exit,
            at most 1.0. Default: 1.0

    Invalid values fall back to their defaults and are listed in ``problems``
    so the CLI can log them once logging is configured.

    Docker connection settings (DOCKER_HOST, DOCKER_TLS_VERIFY, DOCKER_CERT_PATH)
    are read by the docker SDK itself.
    """

    def __init__(self, environ: dict[str, str] | None = None):
        env = os.environ if environ is None else environ
        self.problems: list[str] = []

        self.HOME = Path(env.get("CTLPTL_HOME", "") or Path.home() / ".ctlptl")
        self.LOG_LEVEL = self._log_level(env.get("CTLPTL_LOG_LEVEL", DEFAULT_LOG_LEVEL))

        # Analytics
        self.ANALYTICS_ENABLED = env.get("CTLPTL_ANALYTICS", "on").lower() not in (
            "off",
            "0",
            "false",
        )
        self.ANALYTICS_DIR = self.HOME / "analytics"
        self.ANALYTICS_FLUSH_TIMEOUT = self._flush_timeout(
            env.get("CTLPTL_ANALYTICS_FLUSH_TIMEOUT", str(MAX_ANALYTICS_FLUSH_TIMEOUT))
        )

    def _log_level(self, raw: str) -> str:
        level = raw.strip().upper()
        # getLevelName maps known names to their numeric level
        if isinstance(logging.getLevelName(level), int):
            return level
        self.problems.append(
            f"ignoring CTLPTL_LOG_LEVEL={raw!r}: unknown level, using {DEFAULT_LOG_LEVEL}"
        )
        return DEFAULT_LOG_LEVEL

    def _flush_timeout(self, raw: str) -> float:
        try:
            timeout = float(raw)
        except ValueError:
            self.problems.append(
                f"ignoring CTLPTL_ANALYTICS_FLUSH_TIMEOUT={raw!r}: not a number, "
                f"using {MAX_ANALYTICS_FLUSH_TIMEOUT}"
            )
            return MAX_ANALYTICS_FLUSH_TIMEOUT
        if not 0 <= timeout <= MAX_ANALYTICS_FLUSH_TIMEOUT:
            self.problems.append(
                f"ignoring CTLPTL_ANALYTICS_FLUSH_TIMEOUT={raw!r}: must be between 0 and "
                f"{MAX_ANALYTICS_FLUSH_TIMEOUT}"
            )
            return MAX_ANALYTICS_FLUSH_TIMEOUT
        return timeout

    def __repr__(self):
        return (
            f"Settings(HOME={self.HOME}, LOG_LEVEL={self.LOG_LEVEL}, "
            f"ANALYTICS_ENABLED={self.ANALYTICS_ENABLED}, "
            f"ANALYTICS_FLUSH_TIMEOUT={self.ANALYTICS_FLUSH_TIMEOUT})"
        )
