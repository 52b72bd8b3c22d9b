"""Validation problem payload aggregated from model state, error maps or exceptions."""

from __future__ import annotations

from collections.abc import Mapping
from collections.abc import Sequence
from http import HTTPStatus
from typing import Any

from pydantic import BaseModel
from pydantic import Field
from pydantic import SerializerFunctionWrapHandler
from pydantic import computed_field
from pydantic import model_serializer
from starlette.requests import Request

from webcore.schemas.error import ErrorItem
from webcore.validation.model_state import ModelState

VALIDATION_PROBLEM_TYPE = "https://tools.ietf.org/html/rfc7231#section-6.5.1"
VALIDATION_PROBLEM_TITLE = "One or more model validation errors occurred."
VALIDATION_PROBLEM_DETAIL = "See the errors property for details"


class ValidationProblem(BaseModel):
    """Client-facing problem details with coded errors grouped by key.

    Raw messages live in `raw_errors` and are never serialized; the public
    `errors` view is parsed from them on every read.
    """

    type: str | None = None
    title: str | None = None
    status: int | None = None
    detail: str | None = None
    instance: str | None = None
    raw_errors: dict[str, list[str | None]] = Field(default_factory=dict, exclude=True, repr=False)

    @classmethod
    def from_request(
        cls,
        request: Request,
        status_code: int | HTTPStatus,
        model_state: Mapping[str, Sequence[str | None]],
    ) -> ValidationProblem:
        """Build a fully described problem for a failed request."""
        return cls(
            type=VALIDATION_PROBLEM_TYPE,
            title=VALIDATION_PROBLEM_TITLE,
            status=int(status_code),
            detail=VALIDATION_PROBLEM_DETAIL,
            instance=request.url.path,
            raw_errors=_copy_errors(model_state),
        )

    @classmethod
    def from_model_state(cls, model_state: ModelState) -> ValidationProblem:
        return cls(raw_errors=_copy_errors(model_state))

    @classmethod
    def from_errors(cls, errors: Mapping[str, Sequence[str | None]]) -> ValidationProblem:
        return cls(raw_errors=_copy_errors(errors))

    @classmethod
    def from_exception(cls, message: str, exc: BaseException | None = None) -> ValidationProblem:
        """Report `exc` and its causes, outermost first, under `message`."""
        return cls(raw_errors={message: exception_messages(exc)})

    @computed_field  # type: ignore[prop-decorator]
    @property
    def errors(self) -> dict[str, list[ErrorItem]]:
        return self.get_errors()

    def get_errors(self) -> dict[str, list[ErrorItem]]:
        """Parse every raw message, keeping key and message order."""
        return {
            key: [ErrorItem.parse(key, raw) for raw in messages]
            for key, messages in self.raw_errors.items()
        }

    @model_serializer(mode="wrap")
    def _omit_unset_fields(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        # Problem fields appear only when set, whichever way the model is dumped.
        return {key: value for key, value in handler(self).items() if value is not None}

    def add_error(self, key: str, message: str | None) -> None:
        self.raw_errors.setdefault(key, []).append(message)

    def to_response_content(self) -> dict[str, Any]:
        """Return the JSON body, omitting unset problem fields."""
        return self.model_dump(mode="json")


def exception_messages(exc: BaseException | None) -> list[str]:
    """Return the messages of `exc` and its cause chain, outermost first."""
    messages: list[str] = []
    seen: set[int] = set()
    current = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        messages.append(str(current))
        current = _inner_exception(current)
    return messages


def _inner_exception(exc: BaseException) -> BaseException | None:
    if exc.__cause__ is not None:
        return exc.__cause__
    if exc.__suppress_context__:
        return None
    return exc.__context__


def _copy_errors(errors: Mapping[str, Sequence[str | None]]) -> dict[str, list[str | None]]:
    return {key: list(messages) for key, messages in errors.items()}
