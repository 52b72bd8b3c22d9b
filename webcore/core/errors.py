"""API error types and exception handlers emitting validation problem payloads."""

from __future__ import annotations

from collections.abc import Mapping
from collections.abc import Sequence
from http import HTTPStatus
import logging

from fastapi import FastAPI
from fastapi import Request
from fastapi import status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from webcore.core.config import ProblemSettings
from webcore.core.config import get_problem_settings
from webcore.validation.model_state import DEFAULT_ERROR_KEY
from webcore.validation.model_state import ModelState
from webcore.validation.problem import ValidationProblem

logger = logging.getLogger(__name__)

PROBLEM_MEDIA_TYPE = "application/problem+json"


class APIError(Exception):
    """Application exception reported as a validation problem."""

    def __init__(
        self,
        *,
        status_code: int,
        errors: Mapping[str, Sequence[str]],
        title: str | None = None,
    ) -> None:
        super().__init__(title or "API error")
        self.status_code = status_code
        self.errors = {key: list(messages) for key, messages in errors.items()}
        self.title = title


class NotFoundError(APIError):
    """Convenience exception for missing resources."""

    def __init__(self, *, key: str = DEFAULT_ERROR_KEY, message: str = "Resource not found") -> None:
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, errors={key: [message]}, title=_status_phrase(404))


def _status_phrase(status_code: int) -> str | None:
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return None


def _settings(request: Request) -> ProblemSettings:
    settings = getattr(request.app.state, "problem_settings", None)
    return settings if settings is not None else get_problem_settings()


def build_problem_response(
    problem: ValidationProblem,
    status_code: int | None = None,
    headers: Mapping[str, str] | None = None,
) -> JSONResponse:
    """Serialize a problem into a `application/problem+json` response."""
    return JSONResponse(
        status_code=status_code if status_code is not None else problem.status or status.HTTP_400_BAD_REQUEST,
        content=problem.to_response_content(),
        media_type=PROBLEM_MEDIA_TYPE,
        headers=headers,
    )


async def request_validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report FastAPI validation errors as a validation problem."""
    model_state = ModelState.from_validation_error(exc)
    settings = _settings(request)
    logger.info(
        "Request validation failed for path=%s with %s error(s)",
        request.url.path,
        model_state.error_count,
    )
    problem = ValidationProblem.from_request(request, settings.validation_status_code, model_state)
    return build_problem_response(problem)


async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    """Return explicit domain errors as a validation problem."""
    problem = ValidationProblem.from_errors(exc.errors)
    problem.status = exc.status_code
    problem.title = exc.title
    problem.instance = request.url.path
    return build_problem_response(problem)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Wrap HTTP exceptions in the validation problem shape."""
    detail = str(exc.detail) if exc.detail else _status_phrase(exc.status_code) or "Request failed"
    problem = ValidationProblem.from_errors({DEFAULT_ERROR_KEY: [detail]})
    problem.status = exc.status_code
    problem.title = _status_phrase(exc.status_code)
    problem.instance = request.url.path
    return build_problem_response(problem, headers=getattr(exc, "headers", None))


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Report unexpected failures, exposing the cause chain only when configured."""
    logger.exception("Unhandled error for path=%s", request.url.path)
    settings = _settings(request)
    problem = ValidationProblem.from_exception(
        settings.unhandled_error_message,
        exc if settings.include_exception_details else None,
    )
    problem.status = status.HTTP_500_INTERNAL_SERVER_ERROR
    problem.title = _status_phrase(status.HTTP_500_INTERNAL_SERVER_ERROR)
    problem.instance = request.url.path
    return build_problem_response(problem)


def register_error_handlers(app: FastAPI, settings: ProblemSettings | None = None) -> None:
    """Attach the validation problem handlers to a FastAPI app instance."""
    if settings is not None:
        app.state.problem_settings = settings

    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
