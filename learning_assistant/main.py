"""FastAPI application factory and global exception handling."""

from __future__ import annotations

import logging
from typing import Any, Optional

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.requests import Request
from starlette.responses import JSONResponse

from learning_assistant import __version__ as app_version
from learning_assistant.api.routes import router
from learning_assistant.config import Settings, get_settings
from learning_assistant.summarizer.errors import AssistantError
from learning_assistant.summarizer.service import Assistant

logger = logging.getLogger(__name__)


def create_application(
    settings: Optional[Settings] = None, assistant: Optional[Assistant] = None
) -> FastAPI:
    """Create and configure the FastAPI application instance."""
    if assistant is not None:
        settings = assistant.settings
    settings = settings or get_settings()
    logging.getLogger("learning_assistant").setLevel(settings.log_level.upper())

    app = FastAPI(
        title=settings.app_name,
        description="Summarize pasted text, documents and YouTube videos.",
        version=app_version,
    )
    app.state.assistant = assistant or Assistant.from_settings(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(AssistantError)
    async def assistant_exception_handler(
        request: Request, exc: AssistantError
    ) -> JSONResponse:
        logger.info(f"{request.url.path} failed with {exc.code}: {exc.message}")
        return JSONResponse(status_code=exc.status_code, content=exc.to_payload())

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content={"error": "validation_error", "details": exc.errors()},
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        detail = exc.detail
        if isinstance(detail, dict) and "error" in detail:
            payload = detail
        elif detail == "There was an error parsing the body":
            payload = {"error": "invalid_json", "details": detail}
        else:
            payload = {"error": "http_error", "details": detail}
        return JSONResponse(status_code=exc.status_code, content=payload)

    @app.get("/healthz", tags=["health"])
    async def healthz() -> dict[str, Any]:
        current = app.state.assistant
        return {
            "status": "ok",
            "version": app_version,
            "provider": current.provider.name if current.provider else None,
            "persistence_enabled": current.store.enabled,
            "prompt_profiles": current.profiles.get_available_ids(),
        }

    app.include_router(router)
    return app


app = create_application()
