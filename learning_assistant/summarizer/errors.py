"""Failure taxonomy for the summarization flows.

Every surfaced error carries a machine-readable ``code`` and the HTTP status
the API answers with; the message is what the user gets to see.
"""

from __future__ import annotations


class AssistantError(Exception):
    code = "assistant_error"
    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_payload(self) -> dict[str, str]:
        return {"error": self.code, "details": self.message}


class InvalidInputError(AssistantError):
    """Empty text, malformed URL, unsupported or oversized upload."""

    code = "invalid_input"
    status_code = 400


class ExtractionError(AssistantError):
    """A document could not be turned into text."""

    code = "extraction_failed"
    status_code = 422


class FetchError(AssistantError):
    """A transcript, video-metadata or completion request failed."""

    code = "fetch_failed"
    status_code = 502


class ProviderUnavailableError(AssistantError):
    code = "provider_unavailable"
    status_code = 503


class ActionInProgressError(AssistantError):
    code = "action_in_progress"
    status_code = 409


class PersistenceError(AssistantError):
    """Raised by result stores; always recovered by the caller."""

    code = "persistence_failed"
