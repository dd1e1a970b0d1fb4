"""Prompt profiles: the templates sent to the completion provider."""

from learning_assistant.prompts.loader import PromptProfileRegistry, load_registry
from learning_assistant.prompts.models import PromptProfile, PromptProfileSummary

__all__ = [
    "PromptProfile",
    "PromptProfileSummary",
    "PromptProfileRegistry",
    "load_registry",
]
