"""Ordered key -> raw error messages map fed by request validation."""

from __future__ import annotations

from collections.abc import Iterator
from collections.abc import Mapping
from collections.abc import MutableMapping
from collections.abc import Sequence
from typing import Any

from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError

LOCATION_PREFIXES = frozenset({"body", "query", "path", "header", "cookie"})
DEFAULT_ERROR_KEY = "request"


class ModelState(MutableMapping[str, list[str | None]]):
    """Raw validation messages grouped by field key.

    Keys keep insertion order and compare by exact string equality, as do the
    messages filed under each key.
    """

    def __init__(self, errors: Mapping[str, Sequence[str | None]] | None = None) -> None:
        self._errors: dict[str, list[str | None]] = {}
        if errors:
            for key, messages in errors.items():
                self._errors[key] = list(messages)

    def __getitem__(self, key: str) -> list[str | None]:
        return self._errors[key]

    def __setitem__(self, key: str, messages: list[str | None]) -> None:
        self._errors[key] = list(messages)

    def __delitem__(self, key: str) -> None:
        del self._errors[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._errors)

    def __len__(self) -> int:
        return len(self._errors)

    def __repr__(self) -> str:
        return f"ModelState({self._errors!r})"

    def add_model_error(self, key: str, message: str | None) -> None:
        """Append a raw message under `key`."""
        self._errors.setdefault(key, []).append(message)

    @property
    def error_count(self) -> int:
        return sum(len(messages) for messages in self._errors.values())

    @property
    def is_valid(self) -> bool:
        return self.error_count == 0

    @classmethod
    def from_validation_error(cls, exc: RequestValidationError | ValidationError) -> ModelState:
        """Collect FastAPI/pydantic validation issues into a model state."""
        state = cls()
        for issue in exc.errors():
            state.add_model_error(_format_location(issue.get("loc", ())), _issue_message(issue))
        return state


def _issue_message(issue: Mapping[str, Any]) -> str:
    # Custom validators raise ValueError("<code>|<message>"); pydantic prefixes
    # `msg` with "Value error, ", so the original text is taken from ctx.
    ctx = issue.get("ctx") or {}
    error = ctx.get("error")
    if isinstance(error, BaseException) and str(error):
        return str(error)
    if isinstance(error, str) and error:
        return error
    return str(issue.get("msg", "Invalid value"))


def _format_location(location: tuple[Any, ...] | list[Any] | Any) -> str:
    if not isinstance(location, (tuple, list)):
        return str(location)

    filtered = [str(part) for part in location if part not in LOCATION_PREFIXES]
    if filtered:
        return ".".join(filtered)

    if not location:
        return DEFAULT_ERROR_KEY

    return str(location[0])
