"""Logging configuration.

Logs go to stderr: stdout carries CLI output and the stdio MCP
transport. Generated secrets are never logged.
"""

from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
REDACTED = "[REDACTED - generated secret filtered]"


class SecretFormatter(logging.Formatter):
    """Formatter that redacts records which look like they carry generated material.

    A redacted copy is formatted; the record itself reaches other handlers
    unchanged.
    """

    SENSITIVE_KEYS: frozenset[str] = frozenset({"passphrase", "rolls", "secret"})

    def carries_secret(self, record: logging.LogRecord) -> bool:
        lowered = record.getMessage().lower()
        return any(f"{key}=" in lowered for key in self.SENSITIVE_KEYS)

    def format(self, record: logging.LogRecord) -> str:
        if self.carries_secret(record):
            record = logging.makeLogRecord({**record.__dict__, "msg": REDACTED, "args": ()})
        return super().format(record)


def setup_logging(level: str | int = logging.WARNING) -> None:
    """Configure the ``rando`` logger hierarchy."""
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(SecretFormatter(LOG_FORMAT))

    if isinstance(level, str):
        level = level.upper()

    root = logging.getLogger("rando")
    root.setLevel(level)
    # Replace handlers so repeated CLI invocations in one process don't stack
    root.handlers = [handler]
    root.propagate = False
