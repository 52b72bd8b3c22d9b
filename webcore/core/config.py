"""Application configuration helpers."""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
import os

DEFAULT_VALIDATION_STATUS_CODE = 400
DEFAULT_INCLUDE_EXCEPTION_DETAILS = False
DEFAULT_UNHANDLED_ERROR_MESSAGE = "An unexpected error occurred."

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})


def _get_int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    return int(raw)


def _get_bool_env(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUE_VALUES


@dataclass(frozen=True)
class ProblemSettings:
    """Runtime settings for problem responses."""

    validation_status_code: int
    include_exception_details: bool
    unhandled_error_message: str

    def safe_for_logging(self) -> dict[str, str | int | bool]:
        """Return problem settings safe for logs."""
        return {
            "validation_status_code": self.validation_status_code,
            "include_exception_details": self.include_exception_details,
            "unhandled_error_message": self.unhandled_error_message,
        }


@lru_cache(maxsize=1)
def get_problem_settings() -> ProblemSettings:
    """Load problem settings from the environment."""
    return ProblemSettings(
        validation_status_code=_get_int_env("WEBCORE_VALIDATION_STATUS_CODE", DEFAULT_VALIDATION_STATUS_CODE),
        include_exception_details=_get_bool_env("WEBCORE_INCLUDE_EXCEPTION_DETAILS", DEFAULT_INCLUDE_EXCEPTION_DETAILS),
        unhandled_error_message=os.getenv("WEBCORE_UNHANDLED_ERROR_MESSAGE", DEFAULT_UNHANDLED_ERROR_MESSAGE),
    )
