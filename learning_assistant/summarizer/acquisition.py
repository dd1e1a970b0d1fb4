"""Turn uploads and video URLs into raw text for summarization."""

from __future__ import annotations

import io
import logging
from pathlib import PurePath
from typing import Any, Callable, Dict, List, Optional

import anyio
import anyio.to_thread
import httpx
import mammoth
from pypdf import PdfReader
from youtube_transcript_api import CouldNotRetrieveTranscript, YouTubeTranscriptApi

from learning_assistant.config import Settings
from learning_assistant.summarizer.errors import (
    ExtractionError,
    FetchError,
    InvalidInputError,
)

logger = logging.getLogger(__name__)

PDF_ERROR = (
    "Failed to process PDF file. "
    "Please ensure the file is not corrupted or password protected."
)
WORD_ERROR = "Failed to process DOC file"
INVALID_URL = "Invalid URL"
NO_TRANSCRIPT = "No transcript available"

PDF_TYPE = "application/pdf"
WORD_TYPES = {
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
}
TEXT_TYPES = {"text/plain", "text/csv", "application/json", "text/markdown"}

EXTENSION_TYPES = {
    ".txt": "text/plain",
    ".csv": "text/csv",
    ".json": "application/json",
    ".md": "text/markdown",
    ".pdf": PDF_TYPE,
    ".doc": "application/msword",
    ".docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
}


def read_plain_text(data: bytes) -> str:
    # Undecodable bytes become U+FFFD, the way a browser reads text files.
    return data.decode("utf-8", errors="replace")


def _run_text(operand: Any) -> str:
    if isinstance(operand, bytes):
        return operand.decode("latin-1")
    if isinstance(operand, str):
        return str(operand)
    # TJ arrays interleave kerning numbers with the strings.
    if isinstance(operand, list):
        return "".join(
            _run_text(item) for item in operand if isinstance(item, (str, bytes))
        )
    return ""


def _is_readable(text: str) -> bool:
    return all(ch.isprintable() or ch.isspace() for ch in text)


def _page_text(page: Any) -> str:
    runs: List[str] = []
    lines: List[str] = []

    def collect_run(operator: bytes, operands: List[Any], *_: Any) -> None:
        if operator in (b"Tj", b"'", b"TJ") and operands:
            runs.append(_run_text(operands[0]))
        elif operator == b'"' and len(operands) >= 3:
            runs.append(_run_text(operands[2]))

    def collect_line(text: str, *_: Any) -> None:
        lines.append(text)

    page.extract_text(visitor_operand_before=collect_run, visitor_text=collect_line)

    fragments = [run for run in runs if run.strip()]
    if not all(_is_readable(fragment) for fragment in fragments):
        # Composite fonts show glyph codes, not characters; use decoded lines.
        fragments = [line for line in lines if line.strip()]
    return " ".join(fragments)


def extract_pdf_text(data: bytes) -> str:
    """
    Extract the text of a PDF page by page.

    Every text-show operator is one fragment. Fragments inside a page are
    joined with a single space after dropping whitespace-only ones; pages
    are separated by newlines.

    Raises:
        ExtractionError: The file is corrupt or password protected.
    """
    try:
        reader = PdfReader(io.BytesIO(data))
        if reader.is_encrypted and not reader.decrypt(""):
            raise ExtractionError(PDF_ERROR)

        pages = [_page_text(page) for page in reader.pages]
    except ExtractionError:
        raise
    except Exception as exc:
        logger.error(f"Error processing PDF: {exc}")
        raise ExtractionError(PDF_ERROR) from exc

    return "\n".join(pages).strip()


def extract_word_text(data: bytes) -> str:
    """Extract raw text from a word-processor document."""
    try:
        result = mammoth.extract_raw_text(io.BytesIO(data))
    except Exception as exc:
        logger.error(f"Error processing DOC: {exc}")
        raise ExtractionError(WORD_ERROR) from exc
    return result.value.strip()


def resolve_content_type(filename: Optional[str], content_type: Optional[str]) -> str:
    declared = (content_type or "").split(";")[0].strip().lower()
    if declared == PDF_TYPE or declared in WORD_TYPES or declared in TEXT_TYPES:
        return declared
    suffix = PurePath(filename or "").suffix.lower()
    if suffix in EXTENSION_TYPES:
        return EXTENSION_TYPES[suffix]
    raise InvalidInputError("Unsupported file type")


def acquire_document(
    filename: Optional[str], content_type: Optional[str], data: bytes
) -> str:
    """Dispatch an upload to the matching extractor and return its text."""
    resolved = resolve_content_type(filename, content_type)
    if resolved == PDF_TYPE:
        return extract_pdf_text(data)
    if resolved in WORD_TYPES:
        return extract_word_text(data)
    return read_plain_text(data)


def extract_video_id(url: str) -> str:
    """
    Pull the video identifier out of a YouTube URL.

    Two shapes are recognised: ``youtu.be/<id>`` (id ends at the next ``?``)
    and ``youtube.com/watch?v=<id>`` (id ends at the next ``&``).
    """
    if "youtu.be/" in url:
        video_id = url.split("youtu.be/", 1)[1].split("?", 1)[0]
    elif "youtube.com/watch?v=" in url:
        video_id = url.split("watch?v=", 1)[1].split("&", 1)[0]
    else:
        raise InvalidInputError(INVALID_URL)

    if not video_id.strip():
        raise InvalidInputError(INVALID_URL)
    return video_id


class TranscriptFetcher:
    """
    Resolve a video identifier to text worth summarizing.

    Captions come first. When a video has none and a YouTube Data API key is
    configured, the video description is used instead.
    """

    def __init__(
        self,
        settings: Settings,
        transcript_api: Optional[Any] = None,
        client_factory: Callable[..., httpx.AsyncClient] = httpx.AsyncClient,
    ) -> None:
        self.settings = settings
        self.transcript_api = transcript_api or YouTubeTranscriptApi()
        self.client_factory = client_factory

    async def fetch(self, video_id: str) -> str:
        text = await self.fetch_transcript(video_id)
        if not text and self.settings.youtube_data_api_key:
            text = await self.fetch_description(video_id)
        if not text or not text.strip():
            raise FetchError(NO_TRANSCRIPT)
        return text

    async def fetch_transcript(self, video_id: str) -> Optional[str]:
        languages = list(self.settings.transcript_languages)

        def _fetch() -> List[str]:
            snippets = self.transcript_api.fetch(video_id, languages=languages)
            return [snippet.text for snippet in snippets]

        try:
            texts = await anyio.to_thread.run_sync(_fetch)
        except CouldNotRetrieveTranscript as exc:
            logger.info(f"No captions for video {video_id}: {type(exc).__name__}")
            return None
        except Exception as exc:
            logger.error(f"Transcript request failed for video {video_id}: {exc}")
            raise FetchError("Failed to fetch transcript") from exc
        return " ".join(text.strip() for text in texts if text.strip())

    async def fetch_description(self, video_id: str) -> Optional[str]:
        params = {
            "part": "snippet",
            "id": video_id,
            "key": self.settings.youtube_data_api_key,
        }
        timeout = httpx.Timeout(self.settings.http_timeout_seconds)
        try:
            async with self.client_factory(timeout=timeout) as client:
                response = await client.get(
                    self.settings.youtube_data_api_url, params=params
                )
                response.raise_for_status()
                details: Dict[str, Any] = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.error(f"Failed to fetch video details for {video_id}: {exc}")
            raise FetchError("Failed to fetch video details") from exc

        items = details.get("items") or []
        if not items:
            raise FetchError("Video not found")
        return items[0].get("snippet", {}).get("description")
