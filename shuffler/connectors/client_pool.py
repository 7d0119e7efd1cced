"""
Client Pool

Holds one persistent connection per client id. The pool only grows: a
connection, once opened, serves every later task that uses its client id
until the process shuts down.
"""

from __future__ import annotations

import logging
from typing import Awaitable, Callable, List, Protocol

from shuffler.connectors.postgres_client import DatabaseClient, StatementOutcome
from shuffler.core.errors import InsufficientClientsError, mask_url

logger = logging.getLogger(__name__)


class Client(Protocol):
    async def execute(self, sql: str) -> StatementOutcome: ...

    async def close(self) -> None: ...


Connector = Callable[[int, str, float], Awaitable[Client]]


class ClientPool:
    """Growable, index-addressed collection of client connections."""

    def __init__(
        self,
        db_url: str,
        connector: Connector = DatabaseClient.connect,
        connect_timeout: float = 60.0,
    ):
        """
        Args:
            db_url: Database endpoint every client connects to
            connector: Coroutine factory ``(client_id, db_url, timeout) -> client``
            connect_timeout: Timeout for establishing each connection
        """
        self.db_url = db_url
        self._connector = connector
        self.connect_timeout = connect_timeout
        self._clients: List[Client] = []

    @property
    def size(self) -> int:
        return len(self._clients)

    def __len__(self) -> int:
        return len(self._clients)

    async def reserve(self, need: int) -> None:
        """
        Ensure clients 0..need-1 exist, connecting missing ones in order.

        A ConnectError propagates as-is. Clients connected before the failure
        stay in the pool.
        """
        curr = len(self._clients)
        if need <= curr:
            return

        logger.info(f"Scaling client pool {curr} -> {need} ({mask_url(self.db_url)})")
        for client_id in range(curr, need):
            client = await self._connector(client_id, self.db_url, self.connect_timeout)
            self._clients.append(client)

    def get(self, client_id: int) -> Client:
        """
        Return the client for ``client_id``.

        Raises:
            InsufficientClientsError: the id was never reserved.
        """
        if client_id < 0 or client_id >= len(self._clients):
            raise InsufficientClientsError(client_id, len(self._clients))
        return self._clients[client_id]

    async def close_all(self) -> None:
        """Close every client. Used by the process driver at shutdown."""
        if not self._clients:
            return
        logger.info(f"Closing {len(self._clients)} client connections...")
        for client in self._clients:
            try:
                await client.close()
            except Exception as e:
                logger.warning(f"Error closing client connection: {e}")
        self._clients = []
