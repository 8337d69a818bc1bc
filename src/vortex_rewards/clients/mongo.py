"""MongoDB read client for the dashboard collections.

Wraps a blocking ``pymongo`` client so adapters can await queries without
blocking the event loop.
"""

from __future__ import annotations

import asyncio
from typing import Any, Mapping

import backoff
from pymongo import MongoClient
from pymongo.errors import AutoReconnect, ConnectionFailure

from ..logger import get_logger
from ..settings import VortexSettings

logger = get_logger(__name__)

RETRYABLE_ERRORS = (AutoReconnect, ConnectionFailure)


class MongoReader:
    """Read-only access to one database of the dashboard MongoDB.

    Every query opens its own client and closes it again, so readers hold no
    connection state between calls.
    """

    def __init__(self, config: VortexSettings, database: str | None = None):
        """Initialize the reader.

        Args:
            config: Application settings (URI, default database, retries)
            database: Database name overriding ``mongodb_default_db``
        """
        self.config = config
        self.database = database or config.mongodb_default_db

    def _find_sync(
        self,
        collection: str,
        query: Mapping[str, Any],
        limit: int,
    ) -> list[dict[str, Any]]:
        client: MongoClient = MongoClient(
            self.config.mongodb_uri.get_secret_value(),
            serverSelectionTimeoutMS=self.config.mongodb_timeout_ms,
        )
        try:
            cursor = client[self.database][collection].find(dict(query), limit=limit)
            return list(cursor)
        finally:
            client.close()

    async def find(
        self,
        collection: str,
        query: Mapping[str, Any],
        *,
        limit: int = 0,
    ) -> list[dict[str, Any]]:
        """Return all documents of ``collection`` matching ``query``.

        Connection failures are retried ``adapter_retries`` times with
        exponential backoff before being raised.
        """

        def _on_backoff(details: Any) -> None:
            logger.warning(
                "MongoDB query on %s.%s failed (attempt %d of %d): %s",
                self.database,
                collection,
                details["tries"],
                self.config.adapter_retries + 1,
                details.get("exception"),
            )

        @backoff.on_exception(
            backoff.expo,
            RETRYABLE_ERRORS,
            max_tries=self.config.adapter_retries + 1,
            jitter=backoff.full_jitter,
            on_backoff=_on_backoff,
        )
        async def _find_with_retry() -> list[dict[str, Any]]:
            return await asyncio.to_thread(self._find_sync, collection, query, limit)

        logger.debug("Querying %s.%s with %s", self.database, collection, query)
        documents = await _find_with_retry()
        logger.debug(
            "Query on %s.%s returned %d document(s)",
            self.database,
            collection,
            len(documents),
        )
        return documents
