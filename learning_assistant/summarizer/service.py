"""The assistant object wiring acquisition, completion and persistence."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

import anyio
import anyio.to_thread

from learning_assistant.config import Settings
from learning_assistant.prompts.loader import PromptProfileRegistry, load_registry
from learning_assistant.prompts.models import PromptProfile
from learning_assistant.summarizer.acquisition import (
    TranscriptFetcher,
    acquire_document,
    extract_video_id,
)
from learning_assistant.summarizer.completion import CompletionService
from learning_assistant.summarizer.dispatcher import ActionDispatcher
from learning_assistant.summarizer.errors import InvalidInputError
from learning_assistant.summarizer.formatter import format_sections
from learning_assistant.summarizer.models import (
    LengthOption,
    PersistedRecord,
    SummaryOptions,
    SummaryResult,
)
from learning_assistant.summarizer.persistence import (
    ResultStore,
    build_result_store,
    persist_best_effort,
)
from learning_assistant.summarizer.providers import CompletionProvider, build_provider
from learning_assistant.todos.store import TodoStore

logger = logging.getLogger(__name__)


@dataclass
class Assistant:
    """
    Everything a request handler needs, built once per application.

    Handlers receive this through ``app.state`` instead of reaching for
    module-level clients, so tests can swap any collaborator.
    """

    settings: Settings
    provider: Optional[CompletionProvider]
    transcripts: TranscriptFetcher
    store: ResultStore
    profiles: PromptProfileRegistry
    dispatcher: ActionDispatcher = field(default_factory=ActionDispatcher)
    todos: TodoStore = field(default_factory=TodoStore)

    @classmethod
    def from_settings(cls, settings: Settings) -> "Assistant":
        return cls(
            settings=settings,
            provider=build_provider(settings),
            transcripts=TranscriptFetcher(settings),
            store=build_result_store(settings),
            profiles=load_registry(settings.prompt_profiles_dir),
        )

    @property
    def completions(self) -> CompletionService:
        return CompletionService(self.provider)

    def profile(self, profile_id: str) -> PromptProfile:
        profile = self.profiles.get(profile_id)
        if profile is None:
            raise LookupError(f"Prompt profile '{profile_id}' is not loaded")
        return profile

    async def extract_document(
        self, filename: Optional[str], content_type: Optional[str], data: bytes
    ) -> str:
        if len(data) > self.settings.max_upload_bytes:
            raise InvalidInputError(
                f"File exceeds the {self.settings.max_upload_bytes} byte upload limit"
            )
        # Parsers are synchronous; keep them off the event loop.
        return await anyio.to_thread.run_sync(
            acquire_document, filename, content_type, data
        )

    async def summarize_text(
        self,
        text: str,
        options: SummaryOptions,
        length: LengthOption = "medium",
        user_id: Optional[str] = None,
    ) -> SummaryResult:
        summary = await self.completions.run(
            text, options, self.profile("text"), length=length
        )
        record = PersistedRecord(
            input_type="text",
            original_content=text,
            processed_content=summary,
            user_id=user_id,
        )
        return SummaryResult(
            summary=summary, sections=format_sections(summary), record=record
        )

    async def summarize_video(
        self,
        url: str,
        options: SummaryOptions,
        user_id: Optional[str] = None,
    ) -> SummaryResult:
        if not url or not url.strip():
            raise InvalidInputError("Please enter a YouTube video URL")
        video_id = extract_video_id(url)
        logger.info(f"Summarizing video {video_id}")
        transcript = await self.transcripts.fetch(video_id)
        summary = await self.completions.run(
            transcript, options, self.profile("video")
        )
        record = PersistedRecord(
            input_type="url",
            original_content=url,
            processed_content=summary,
            user_id=user_id,
        )
        return SummaryResult(
            summary=summary,
            sections=format_sections(summary),
            record=record,
            video_id=video_id,
        )

    async def persist(self, record: PersistedRecord) -> bool:
        return await persist_best_effort(self.store, record)
