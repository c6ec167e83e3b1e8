from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.core.llm.openai_client import LLMError, LLMUnavailableError
from app.core.routing import route_template
from app.domain.exceptions import (
    QuizGenerationError,
    QuizNotFoundError,
    TopicRejectedError,
)

logger = logging.getLogger("app.api_errors")

GENERATION_FAILED = "Failed to generate quiz"


def flatten_field_errors(errors: list[dict[str, Any]]) -> dict[str, list[str]]:
    """Group validation messages by field name (last element of the error location)."""

    details: dict[str, list[str]] = {}
    for err in errors:
        loc = err.get("loc") or ()
        field = str(loc[-1]) if loc else "body"
        details.setdefault(field, []).append(str(err.get("msg", "Invalid value")))
    return details


def _log_failure(request: Request, *, status_code: int, error: str) -> None:
    # Metadata only: no body, no topic, no model output.
    logger.info(
        "Request failed",
        extra={
            "request_id": getattr(request.state, "request_id", None),
            "http_method": request.method,
            "request_path": route_template(request),
            "status_code": status_code,
            "error": error,
        },
    )


def _error_response(
    request: Request, *, status_code: int, error: str, **body: Any
) -> JSONResponse:
    _log_failure(request, status_code=status_code, error=error)
    return JSONResponse(status_code=status_code, content={"error": error, **body})


def register_exception_handlers(app: FastAPI) -> None:
    """Register application exception handlers."""

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return _error_response(
            request,
            status_code=status.HTTP_400_BAD_REQUEST,
            error="Invalid request",
            details=flatten_field_errors(list(exc.errors())),
        )

    @app.exception_handler(TopicRejectedError)
    async def handle_topic_rejected(request: Request, exc: TopicRejectedError) -> JSONResponse:
        return _error_response(
            request,
            status_code=status.HTTP_400_BAD_REQUEST,
            error="Invalid topic",
            message=exc.message,
        )

    @app.exception_handler(QuizGenerationError)
    async def handle_quiz_generation_error(
        request: Request, exc: QuizGenerationError
    ) -> JSONResponse:
        return _error_response(
            request,
            status_code=status.HTTP_502_BAD_GATEWAY,
            error=GENERATION_FAILED,
            message=exc.message,
        )

    @app.exception_handler(LLMError)
    async def handle_llm_error(request: Request, exc: LLMError) -> JSONResponse:
        # Upstream details stay in the exception chain, not in the response.
        message = (
            "LLM service unavailable"
            if isinstance(exc, LLMUnavailableError)
            else "LLM service failed"
        )
        return _error_response(
            request,
            status_code=status.HTTP_502_BAD_GATEWAY,
            error=GENERATION_FAILED,
            message=message,
        )

    @app.exception_handler(QuizNotFoundError)
    async def handle_quiz_not_found(request: Request, exc: QuizNotFoundError) -> JSONResponse:
        return _error_response(
            request, status_code=status.HTTP_404_NOT_FOUND, error="Quiz not found"
        )
