"""
Postgres Client

One persistent asyncpg session per simulated client. Statements are sent as
plain text with no timeout, one at a time.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Optional

import asyncpg
from asyncpg.exceptions import InterfaceError, PostgresError

from shuffler.core.errors import ConnectError, StatementError, mask_url

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class StatementOutcome:
    """Result of a successful statement."""

    status: str
    rowcount: Optional[int] = None

    @classmethod
    def from_status(cls, status: Optional[str]) -> "StatementOutcome":
        # Last number of the status string is the row count ("INSERT 0 1", "UPDATE 5")
        rowcount = None
        text = str(status) if status else ""
        parts = text.split()
        if len(parts) >= 2:
            try:
                rowcount = int(parts[-1])
            except ValueError:
                pass
        return cls(status=text, rowcount=rowcount)


class DatabaseClient:
    """A single live database session owned by one client id."""

    def __init__(self, client_id: int, db_url: str, conn: asyncpg.Connection):
        self.client_id = client_id
        self.db_url = db_url
        self._conn = conn

    @classmethod
    async def connect(
        cls,
        client_id: int,
        db_url: str,
        timeout: float = 60.0,
    ) -> "DatabaseClient":
        """
        Open a session for ``client_id``.

        Raises:
            ConnectError: the driver could not establish the session.
        """
        logger.debug(f"[Client {client_id}] Connecting to: {mask_url(db_url)}...")
        try:
            conn = await asyncpg.connect(dsn=db_url, timeout=timeout)
        except (OSError, asyncio.TimeoutError, PostgresError, InterfaceError) as e:
            raise ConnectError(client_id, db_url, e) from e
        return cls(client_id, db_url, conn)

    async def execute(self, sql: str) -> StatementOutcome:
        """
        Execute one statement and return its status.

        Raises:
            StatementError: the database rejected the statement.
        """
        try:
            status = await self._conn.execute(sql)
        except PostgresError as e:
            raise StatementError(str(e), getattr(e, "sqlstate", None)) from e
        except InterfaceError as e:
            raise StatementError(str(e)) from e
        return StatementOutcome.from_status(status)

    @property
    def closed(self) -> bool:
        return self._conn.is_closed()

    async def close(self) -> None:
        if not self._conn.is_closed():
            await self._conn.close()

    def __repr__(self) -> str:
        return f"DatabaseClient(id={self.client_id}, url={mask_url(self.db_url)!r})"
