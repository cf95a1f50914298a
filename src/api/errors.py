# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Exception handlers mapping domain errors to HTTP responses.

Every error response body has the shape {"error": "<message>"}; validation
failures also carry {"kind": "<failure kind>"}.

Status mapping:
- PracticeValidationError, malformed request body -> 400
- BookNotFoundError, NoMatchingQuestionsError -> 404
- StoreQueryFailedError -> 500 with the store's message
- Any other exception -> 500 "Internal server error"
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.domains.books.service import BookNotFoundError
from src.domains.practice.errors import (
    NoMatchingQuestionsError,
    PracticeValidationError,
    StoreQueryFailedError,
)

logger = logging.getLogger(__name__)


def error_response(status_code: int, message: str, kind: str | None = None) -> JSONResponse:
    """Build an error response.

    Args:
        status_code: HTTP status code.
        message: Explanatory message.
        kind: Optional failure kind for validation errors.

    Returns:
        JSONResponse with the error payload.
    """
    content: dict[str, str] = {"error": message}
    if kind:
        content["kind"] = kind
    return JSONResponse(status_code=status_code, content=content)


async def practice_validation_handler(
    request: Request, exc: PracticeValidationError
) -> JSONResponse:
    logger.info("Rejected request %s: %s (%s)", request.url.path, exc.message, exc.kind)
    return error_response(status.HTTP_400_BAD_REQUEST, exc.message, exc.kind)


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report malformed bodies (invalid JSON, wrong top-level type) as 400."""
    errors = exc.errors()
    message = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
    logger.info("Malformed request %s: %s", request.url.path, message)
    return error_response(status.HTTP_400_BAD_REQUEST, f"Invalid request body: {message}")


async def book_not_found_handler(request: Request, exc: BookNotFoundError) -> JSONResponse:
    return error_response(status.HTTP_404_NOT_FOUND, str(exc))


async def no_matching_questions_handler(
    request: Request, exc: NoMatchingQuestionsError
) -> JSONResponse:
    return error_response(status.HTTP_404_NOT_FOUND, str(exc))


async def store_query_failed_handler(
    request: Request, exc: StoreQueryFailedError
) -> JSONResponse:
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, exc.message)


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unexpected error handling %s %s", request.method, request.url.path)
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


def register_exception_handlers(app: FastAPI) -> None:
    """Register all error handlers on the application.

    Args:
        app: FastAPI application.
    """
    app.add_exception_handler(PracticeValidationError, practice_validation_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(BookNotFoundError, book_not_found_handler)
    app.add_exception_handler(NoMatchingQuestionsError, no_matching_questions_handler)
    app.add_exception_handler(StoreQueryFailedError, store_query_failed_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)
