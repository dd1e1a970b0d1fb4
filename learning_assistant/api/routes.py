"""HTTP route handlers for the learning assistant API."""

from __future__ import annotations

from typing import Any, Dict, List, Type

import orjson
from fastapi import (
    APIRouter,
    BackgroundTasks,
    Depends,
    File,
    HTTPException,
    Request,
    UploadFile,
    status,
)
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, ValidationError

from learning_assistant.config import Settings
from learning_assistant.prompts.models import PromptProfileSummary
from learning_assistant.summarizer.errors import InvalidInputError
from learning_assistant.summarizer.formatter import format_sections
from learning_assistant.summarizer.service import Assistant
from learning_assistant.todos.store import TodoNotFoundError

from .schemas import (
    DocumentTextModel,
    SectionModel,
    SectionsRequestModel,
    SectionsResponseModel,
    SummaryResponseModel,
    TextSummaryRequestModel,
    TodoCreateModel,
    TodoModel,
    VideoSummaryRequestModel,
)


router = APIRouter()


def get_assistant(http_request: Request) -> Assistant:
    return http_request.app.state.assistant


def session_key(http_request: Request) -> str:
    """Identify the caller for the in-flight guard."""
    header = http_request.headers.get("x-session-id")
    if header:
        return header
    if http_request.client is not None:
        return http_request.client.host
    return "anonymous"


def _payload_too_large(settings: Settings) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
        detail={
            "error": "payload_too_large",
            "limit_bytes": settings.max_payload_bytes,
        },
    )


def _upload_too_large(limit: int) -> InvalidInputError:
    return InvalidInputError(f"File exceeds the {limit} byte upload limit")


async def _load_request_model(
    http_request: Request, model_cls: Type[BaseModel], settings: Settings
) -> BaseModel:
    header_length = http_request.headers.get("content-length")
    if header_length:
        try:
            content_length = int(header_length)
        except ValueError:
            content_length = None
        if content_length is not None and content_length > settings.max_payload_bytes:
            raise _payload_too_large(settings)

    body_bytes = await http_request.body()
    if body_bytes and len(body_bytes) > settings.max_payload_bytes:
        raise _payload_too_large(settings)

    if not body_bytes:
        data: Dict[str, Any] = {}
    else:
        try:
            data = orjson.loads(body_bytes)
        except orjson.JSONDecodeError as exc:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail={"error": "invalid_json", "details": str(exc)},
            ) from exc

    try:
        return model_cls.model_validate(data)
    except ValidationError as exc:
        raise RequestValidationError(exc.errors()) from exc


async def load_text_request(http_request: Request) -> TextSummaryRequestModel:
    settings = get_assistant(http_request).settings
    return await _load_request_model(http_request, TextSummaryRequestModel, settings)


async def load_video_request(http_request: Request) -> VideoSummaryRequestModel:
    settings = get_assistant(http_request).settings
    return await _load_request_model(http_request, VideoSummaryRequestModel, settings)


async def load_sections_request(http_request: Request) -> SectionsRequestModel:
    settings = get_assistant(http_request).settings
    return await _load_request_model(http_request, SectionsRequestModel, settings)


async def load_todo_request(http_request: Request) -> TodoCreateModel:
    settings = get_assistant(http_request).settings
    return await _load_request_model(http_request, TodoCreateModel, settings)


@router.get("/v1/prompt-profiles", response_model=List[PromptProfileSummary])
async def list_prompt_profiles(assistant: Assistant = Depends(get_assistant)):
    return assistant.profiles.list_profiles()


@router.post("/v1/documents/extract", response_model=DocumentTextModel)
async def extract_document(
    http_request: Request,
    file: UploadFile = File(...),
    assistant: Assistant = Depends(get_assistant),
):
    limit = assistant.settings.max_upload_bytes
    if file.size is not None and file.size > limit:
        raise _upload_too_large(limit)
    async with assistant.dispatcher.claim(session_key(http_request), "extract"):
        # One byte past the limit is enough to tell an oversized upload.
        data = await file.read(limit + 1)
        text = await assistant.extract_document(file.filename, file.content_type, data)
    return DocumentTextModel(filename=file.filename, text=text, characters=len(text))


@router.post("/v1/summaries/text", response_model=SummaryResponseModel)
async def summarize_text(
    http_request: Request,
    background_tasks: BackgroundTasks,
    summary_request: TextSummaryRequestModel = Depends(load_text_request),
    assistant: Assistant = Depends(get_assistant),
):
    async with assistant.dispatcher.claim(session_key(http_request), "summarize_text"):
        result = await assistant.summarize_text(
            summary_request.text,
            summary_request.options.to_domain(),
            length=summary_request.length,
            user_id=summary_request.user_id,
        )
    background_tasks.add_task(assistant.persist, result.record)
    return SummaryResponseModel.from_domain(result)


@router.post("/v1/summaries/video", response_model=SummaryResponseModel)
async def summarize_video(
    http_request: Request,
    background_tasks: BackgroundTasks,
    summary_request: VideoSummaryRequestModel = Depends(load_video_request),
    assistant: Assistant = Depends(get_assistant),
):
    async with assistant.dispatcher.claim(session_key(http_request), "summarize_video"):
        result = await assistant.summarize_video(
            summary_request.url,
            summary_request.options.to_domain(),
            user_id=summary_request.user_id,
        )
    background_tasks.add_task(assistant.persist, result.record)
    return SummaryResponseModel.from_domain(result)


@router.post("/v1/sections", response_model=SectionsResponseModel)
async def split_sections(
    sections_request: SectionsRequestModel = Depends(load_sections_request),
):
    sections = format_sections(sections_request.text)
    return SectionsResponseModel(
        sections=[SectionModel.from_domain(section) for section in sections]
    )


def _todo_not_found(todo_id: int) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail={"error": "todo_not_found", "details": f"No todo with id {todo_id}"},
    )


@router.get("/v1/todos", response_model=List[TodoModel])
async def list_todos(assistant: Assistant = Depends(get_assistant)):
    return [TodoModel.from_domain(item) for item in assistant.todos.list()]


@router.post("/v1/todos", response_model=TodoModel, status_code=status.HTTP_201_CREATED)
async def add_todo(
    todo_request: TodoCreateModel = Depends(load_todo_request),
    assistant: Assistant = Depends(get_assistant),
):
    return TodoModel.from_domain(assistant.todos.add(todo_request.text))


@router.post("/v1/todos/{todo_id}/toggle", response_model=TodoModel)
async def toggle_todo(todo_id: int, assistant: Assistant = Depends(get_assistant)):
    try:
        return TodoModel.from_domain(assistant.todos.toggle(todo_id))
    except TodoNotFoundError as exc:
        raise _todo_not_found(todo_id) from exc


@router.delete("/v1/todos/{todo_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_todo(todo_id: int, assistant: Assistant = Depends(get_assistant)):
    try:
        assistant.todos.delete(todo_id)
    except TodoNotFoundError as exc:
        raise _todo_not_found(todo_id) from exc
