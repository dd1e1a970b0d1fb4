"""Guard against re-triggering an action that is still in flight."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, Set, Tuple

from learning_assistant.summarizer.errors import ActionInProgressError


class ActionDispatcher:
    """
    Track in-flight actions per session.

    All handlers run on one event loop and the check-and-add below has no
    await in between, so a plain set is enough.
    """

    def __init__(self) -> None:
        self._in_flight: Set[Tuple[str, str]] = set()

    @asynccontextmanager
    async def claim(self, session_key: str, action: str) -> AsyncIterator[None]:
        key = (session_key, action)
        if key in self._in_flight:
            raise ActionInProgressError(
                f"A {action} request is already running for this session"
            )
        self._in_flight.add(key)
        try:
            yield
        finally:
            self._in_flight.discard(key)
