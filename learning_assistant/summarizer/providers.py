"""
Generative-language providers.

Each provider answers one stateless, single-turn prompt with free text.
Gemini is the default; the others share the same contract so a deployment
can point the assistant at whichever API it holds a key for.
"""

from typing import Optional
import logging
from abc import ABC, abstractmethod

import httpx

from learning_assistant.config import Settings

logger = logging.getLogger(__name__)

DEFAULT_MODELS = {
    "gemini": "gemini-2.5-flash",
    "openai": "gpt-4o-mini",
    "anthropic": "claude-3-haiku-20240307",
    "ollama": "llama3.2",
}


class CompletionProvider(ABC):
    """Abstract base class for completion providers."""

    name: str

    @abstractmethod
    async def generate(self, prompt: str) -> str:
        """Return the completion text for a single prompt."""


class GeminiProvider(CompletionProvider):
    """Google Gemini API provider."""

    name = "gemini"

    def __init__(self, api_key: str, model: str, max_tokens: int = 2048):
        try:
            from google import genai
            from google.genai import types
        except ImportError:
            raise ImportError(
                "google-genai package not installed. Install with: pip install google-genai"
            )

        self.client = genai.Client(api_key=api_key)
        self.model = model
        self.config = types.GenerateContentConfig(max_output_tokens=max_tokens)

    async def generate(self, prompt: str) -> str:
        response = await self.client.aio.models.generate_content(
            model=self.model, contents=prompt, config=self.config
        )
        return response.text or ""


class OpenAIProvider(CompletionProvider):
    """OpenAI API provider."""

    name = "openai"

    def __init__(self, api_key: str, model: str, max_tokens: int = 2048):
        try:
            from openai import AsyncOpenAI
        except ImportError:
            raise ImportError(
                "OpenAI package not installed. Install with: pip install openai"
            )

        self.client = AsyncOpenAI(api_key=api_key)
        self.model = model
        self.max_tokens = max_tokens

    async def generate(self, prompt: str) -> str:
        response = await self.client.chat.completions.create(
            model=self.model,
            messages=[{"role": "user", "content": prompt}],
            max_tokens=self.max_tokens,
        )
        return response.choices[0].message.content or ""


class AnthropicProvider(CompletionProvider):
    """Anthropic Claude API provider."""

    name = "anthropic"

    def __init__(self, api_key: str, model: str, max_tokens: int = 2048):
        try:
            from anthropic import AsyncAnthropic
        except ImportError:
            raise ImportError(
                "Anthropic package not installed. Install with: pip install anthropic"
            )

        self.client = AsyncAnthropic(api_key=api_key)
        self.model = model
        self.max_tokens = max_tokens

    async def generate(self, prompt: str) -> str:
        response = await self.client.messages.create(
            model=self.model,
            max_tokens=self.max_tokens,
            messages=[{"role": "user", "content": prompt}],
        )
        return "".join(
            block.text for block in response.content if getattr(block, "text", None)
        )


class OllamaProvider(CompletionProvider):
    """Ollama local LLM provider."""

    name = "ollama"

    def __init__(
        self,
        model: str,
        base_url: str = "http://localhost:11434",
        timeout: float = 60.0,
    ):
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    async def generate(self, prompt: str) -> str:
        payload = {"model": self.model, "prompt": prompt, "stream": False}
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            response = await client.post(f"{self.base_url}/api/generate", json=payload)
            response.raise_for_status()
            result = response.json()
        return result.get("response", "")


def build_provider(settings: Settings) -> Optional[CompletionProvider]:
    """
    Create the provider named by ``settings.llm_provider``.

    Returns None when the provider is disabled, unknown, missing its
    credentials or its client package; summarization requests then fail
    with ``provider_unavailable`` while the rest of the API keeps working.
    """
    provider_name = settings.llm_provider.lower()
    if provider_name == "none":
        return None

    model = settings.llm_model or DEFAULT_MODELS.get(provider_name)
    try:
        if provider_name == "gemini":
            if not settings.gemini_api_key:
                logger.warning("Gemini API key not configured, skipping provider")
                return None
            provider: CompletionProvider = GeminiProvider(
                settings.gemini_api_key, model, settings.llm_max_tokens
            )

        elif provider_name == "openai":
            if not settings.openai_api_key:
                logger.warning("OpenAI API key not configured, skipping provider")
                return None
            provider = OpenAIProvider(
                settings.openai_api_key, model, settings.llm_max_tokens
            )

        elif provider_name == "anthropic":
            if not settings.anthropic_api_key:
                logger.warning("Anthropic API key not configured, skipping provider")
                return None
            provider = AnthropicProvider(
                settings.anthropic_api_key, model, settings.llm_max_tokens
            )

        elif provider_name == "ollama":
            provider = OllamaProvider(
                model, settings.ollama_base_url, settings.http_timeout_seconds
            )

        else:
            logger.warning(f"Unknown LLM provider: {settings.llm_provider}")
            return None
    except ImportError as e:
        logger.error(f"Failed to initialize {provider_name} provider: {e}")
        return None

    logger.info(f"Initialized {provider_name} provider with model: {model}")
    return provider
