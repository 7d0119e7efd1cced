"""
Database connectors: per-client sessions and the client pool.
"""

from shuffler.connectors.client_pool import ClientPool
from shuffler.connectors.postgres_client import DatabaseClient, StatementOutcome

__all__ = ["ClientPool", "DatabaseClient", "StatementOutcome"]
