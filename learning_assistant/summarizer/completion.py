"""Sequential multi-section completion against a single provider."""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from learning_assistant.prompts.models import PromptProfile
from learning_assistant.summarizer.errors import (
    FetchError,
    InvalidInputError,
    ProviderUnavailableError,
)
from learning_assistant.summarizer.models import LengthOption, SummaryOptions
from learning_assistant.summarizer.providers import CompletionProvider

logger = logging.getLogger(__name__)

EMPTY_INPUT = "please provide input"

# (prompt key, header title) in request order.
SECTIONS: Tuple[Tuple[str, str], ...] = (
    ("summary", "Summary"),
    ("key_points", "Key Points"),
    ("qa", "Questions and Answers"),
    ("code_explanation", "Code Explanation"),
)


def requested_sections(options: SummaryOptions) -> List[Tuple[str, str]]:
    """The summary is always requested; the rest follow their flags."""
    flags = {
        "summary": True,
        "key_points": options.key_points,
        "qa": options.qa,
        "code_explanation": options.code_explanation,
    }
    return [(key, title) for key, title in SECTIONS if flags[key]]


class CompletionService:
    def __init__(self, provider: Optional[CompletionProvider]) -> None:
        self.provider = provider

    async def run(
        self,
        raw_input: str,
        options: SummaryOptions,
        profile: PromptProfile,
        length: LengthOption = "medium",
    ) -> str:
        """
        Request every selected section, one call at a time, in fixed order.

        Each response is appended as ``## <Section>\\n<text>\\n\\n``. The
        text is only returned once every call succeeded: a failure part way
        through discards the sections already received.

        Raises:
            InvalidInputError: ``raw_input`` is empty or whitespace-only.
            ProviderUnavailableError: No provider is configured.
            FetchError: A completion call failed.
        """
        if not raw_input or not raw_input.strip():
            raise InvalidInputError(EMPTY_INPUT)
        if self.provider is None:
            raise ProviderUnavailableError("No completion provider is configured")

        result = ""
        for key, title in requested_sections(options):
            prompt = profile.render(key, content=raw_input, length=length)
            try:
                text = await self.provider.generate(prompt)
            except Exception as exc:
                logger.error(f"Completion for section '{title}' failed: {exc}")
                raise FetchError(f"Failed to generate {title.lower()}") from exc
            result += f"## {title}\n{text}\n\n"
        return result
