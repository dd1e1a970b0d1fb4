"""Best-effort storage of summary history rows."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Callable

import httpx

from learning_assistant.config import Settings
from learning_assistant.summarizer.errors import PersistenceError
from learning_assistant.summarizer.models import PersistedRecord

logger = logging.getLogger(__name__)


class ResultStore(ABC):
    enabled = True

    @abstractmethod
    async def insert(self, record: PersistedRecord) -> None:
        """Write one row; raise PersistenceError on failure."""


class NullResultStore(ResultStore):
    """Used when no record store is configured."""

    enabled = False

    async def insert(self, record: PersistedRecord) -> None:
        logger.debug("Persistence disabled, dropping summary record")


class SupabaseResultStore(ResultStore):
    """Insert rows through the Supabase PostgREST endpoint."""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        table: str = "processing_results",
        timeout: float = 30.0,
        client_factory: Callable[..., httpx.AsyncClient] = httpx.AsyncClient,
    ) -> None:
        self.endpoint = f"{base_url.rstrip('/')}/rest/v1/{table}"
        self.headers = {
            "apikey": api_key,
            "Authorization": f"Bearer {api_key}",
            "Prefer": "return=minimal",
        }
        self.timeout = timeout
        self.client_factory = client_factory

    async def insert(self, record: PersistedRecord) -> None:
        try:
            async with self.client_factory(timeout=self.timeout) as client:
                response = await client.post(
                    self.endpoint, json=record.to_row(), headers=self.headers
                )
                response.raise_for_status()
        except httpx.HTTPError as exc:
            raise PersistenceError(f"Failed to store summary: {exc}") from exc


def build_result_store(settings: Settings) -> ResultStore:
    if not settings.persistence_enabled:
        logger.info("Supabase not configured, summary history is disabled")
        return NullResultStore()
    return SupabaseResultStore(
        settings.supabase_url,
        settings.supabase_key,
        table=settings.supabase_table,
        timeout=settings.http_timeout_seconds,
    )


async def persist_best_effort(store: ResultStore, record: PersistedRecord) -> bool:
    """
    Try once to store ``record``.

    Failures are logged and swallowed: history is optional, the summary the
    user already has is not affected, and nothing is retried.
    """
    try:
        await store.insert(record)
    except Exception as exc:
        logger.warning(f"Error storing summary record: {exc}")
        return False
    return True
