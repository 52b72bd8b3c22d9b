"""Accessors for claims, headers and the client address of the current request."""

from __future__ import annotations

from collections.abc import Callable
from collections.abc import Iterable
from collections.abc import Mapping
from typing import Any
from typing import TypeVar
import logging

from starlette.requests import Request

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _iter_claims(request: Request) -> Iterable[tuple[str, Any]]:
    claims = getattr(request.state, "claims", None)
    if claims is None:
        return ()
    if isinstance(claims, Mapping):
        return claims.items()
    return claims


def get_claim_value(request: Request, key: str, value_type: Callable[[Any], T] = str) -> T | None:  # type: ignore[assignment]
    """Return the first claim whose type equals `key`, converted with `value_type`.

    Claims are `(type, value)` pairs on `request.state.claims`. A missing claim
    or a value that cannot be converted yields `None`.
    """
    for claim_type, claim_value in _iter_claims(request):
        if claim_type != key:
            continue
        try:
            return value_type(claim_value)
        except (TypeError, ValueError):
            logger.debug("Claim %s could not be converted with %s", key, value_type)
            return None
    return None


def get_request_header(request: Request, key: str) -> str | None:
    """Return the first value of header `key`, or `None` when it is absent."""
    return request.headers.get(key)


def get_client_ip_address(request: Request) -> str | None:
    if request.client is None:
        return None
    return request.client.host
