"""Pytest configuration and shared fakes for tests."""

from types import SimpleNamespace
from typing import List, Optional

import pytest

from learning_assistant.config import get_settings
from learning_assistant.prompts.loader import load_registry
from learning_assistant.summarizer.acquisition import TranscriptFetcher
from learning_assistant.summarizer.errors import PersistenceError
from learning_assistant.summarizer.persistence import ResultStore
from learning_assistant.summarizer.providers import CompletionProvider
from learning_assistant.summarizer.service import Assistant


@pytest.fixture(scope="session")
def anyio_backend():
    """Configure anyio to use only asyncio backend."""
    return "asyncio"


class FakeProvider(CompletionProvider):
    """Answers prompts in order; optionally fails on the n-th call."""

    name = "fake"

    def __init__(self, responses: Optional[List[str]] = None, fail_on: Optional[int] = None):
        self.responses = list(responses or [])
        self.fail_on = fail_on
        self.prompts: List[str] = []

    async def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        index = len(self.prompts) - 1
        if self.fail_on is not None and index == self.fail_on:
            raise RuntimeError("quota exceeded")
        if index < len(self.responses):
            return self.responses[index]
        return f"response {index}"


class FakeTranscriptApi:
    def __init__(self, texts: Optional[List[str]] = None, error: Optional[Exception] = None):
        self.texts = texts or []
        self.error = error
        self.calls: List[str] = []

    def fetch(self, video_id, languages=("en",)):
        self.calls.append(video_id)
        if self.error is not None:
            raise self.error
        return [SimpleNamespace(text=text) for text in self.texts]


class RecordingStore(ResultStore):
    def __init__(self) -> None:
        self.records = []

    async def insert(self, record) -> None:
        self.records.append(record)


class FailingStore(ResultStore):
    def __init__(self) -> None:
        self.attempts = 0

    async def insert(self, record) -> None:
        self.attempts += 1
        raise PersistenceError("permission denied for table processing_results")


@pytest.fixture
def settings():
    return get_settings().model_copy(
        update={
            "youtube_data_api_key": None,
            "supabase_url": None,
            "supabase_key": None,
            "transcript_languages": ["en"],
        }
    )


@pytest.fixture
def build_assistant(settings):
    def _build(provider=None, transcript_api=None, store=None, settings_override=None):
        active = settings_override or settings
        return Assistant(
            settings=active,
            provider=provider if provider is not None else FakeProvider(),
            transcripts=TranscriptFetcher(
                active, transcript_api=transcript_api or FakeTranscriptApi(["hello"])
            ),
            store=store if store is not None else RecordingStore(),
            profiles=load_registry(active.prompt_profiles_dir),
        )

    return _build
