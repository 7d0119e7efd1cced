"""
Error types shared across the shuffler.

Fatal errors propagate to the CLI unmodified. Only StatementError is subject
to the executor's exit_on_fail policy.
"""

from __future__ import annotations

from typing import Optional
from urllib.parse import urlsplit, urlunsplit


def mask_url(url: str) -> str:
    """Hide the password component of a database URL for logging."""
    try:
        parts = urlsplit(url)
    except ValueError:
        return url
    if parts.password is None:
        return url
    netloc = parts.netloc.rsplit("@", 1)
    userinfo = parts.username or ""
    masked = f"{userinfo}:***@{netloc[-1]}"
    return urlunsplit((parts.scheme, masked, parts.path, parts.query, parts.fragment))


class ShufflerError(Exception):
    """Base class for shuffler errors."""


class ConfigError(ShufflerError):
    """Process configuration could not be resolved."""


class ScriptError(ShufflerError):
    """A SQL script could not be read or yielded no usable input."""


class ConnectError(ShufflerError):
    """Establishing a pooled client connection failed."""

    def __init__(self, client_id: int, url: str, cause: BaseException):
        self.client_id = client_id
        self.url = mask_url(url)
        self.cause = cause
        super().__init__(
            f"[Client {client_id}] failed to connect to {self.url}: {cause}"
        )


class StatementError(ShufflerError):
    """A single statement failed on the database."""

    def __init__(self, message: str, sqlstate: Optional[str] = None):
        self.message = message
        self.sqlstate = sqlstate
        super().__init__(message)

    def __str__(self) -> str:
        if self.sqlstate:
            return f"{self.message} (SQLSTATE {self.sqlstate})"
        return self.message


class InsufficientClientsError(AssertionError):
    """
    A task referenced a client id the pool does not hold.

    Raised only when the generator and the pool disagree about how many
    clients a task needs, so it is an AssertionError and never handled by the
    statement failure policy.
    """

    def __init__(self, client_id: int, available: int):
        self.client_id = client_id
        self.available = available
        super().__init__(
            f"client not enough, expect: {client_id}, but only has: {available}"
        )
