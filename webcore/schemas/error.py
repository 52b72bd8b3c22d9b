"""Error item schema and the parser for raw `<code>|<message>` strings."""

from __future__ import annotations

import re

from pydantic import BaseModel
from pydantic import ConfigDict

FALLBACK_ERROR_CODE = "0000"
ERROR_CODE_SEPARATOR = "|"

_INTEGER_LITERAL = re.compile(r"\s*[+-]?[0-9]+\s*")


class ErrorItem(BaseModel):
    """Single coded error message reported under a field or context key."""

    model_config = ConfigDict(frozen=True)

    code: str
    message: str

    @classmethod
    def parse(cls, key: str, raw: str | None) -> ErrorItem:
        """Decode a raw error string filed under `key`.

        A raw string may carry a numeric code ahead of the first `|`
        (`"100|Email is required"`). Strings without one are reported under
        the fallback code with their text untouched. A missing message reads
        as an empty one.
        """
        if raw is None:
            raw = ""
        parts = raw.split(ERROR_CODE_SEPARATOR)
        if _INTEGER_LITERAL.fullmatch(parts[0]) is None:
            return cls(code=FALLBACK_ERROR_CODE, message=raw)

        if len(parts) > 1:
            message = ERROR_CODE_SEPARATOR.join(parts[1:])
        else:
            message = f"{key} error occurred"
        return cls(code=parts[0], message=message)


def parse_error_item(key: str, raw: str | None) -> ErrorItem:
    """Parse one raw error string into an `ErrorItem`."""
    return ErrorItem.parse(key, raw)
