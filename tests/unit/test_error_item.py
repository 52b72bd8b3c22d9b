"""Unit tests for raw error string parsing."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from webcore.schemas.error import FALLBACK_ERROR_CODE
from webcore.schemas.error import ErrorItem
from webcore.schemas.error import parse_error_item


def test_coded_message_is_split_on_first_separator() -> None:
    item = parse_error_item("Email", "100|Email is required")

    assert item == ErrorItem(code="100", message="Email is required")


def test_additional_separators_stay_in_message() -> None:
    item = parse_error_item("Name", "42|a|b|c")

    assert item.code == "42"
    assert item.message == "a|b|c"


def test_bare_code_gets_default_message_from_key() -> None:
    item = parse_error_item("Age", "7")

    assert item == ErrorItem(code="7", message="Age error occurred")


def test_code_with_empty_message_keeps_empty_message() -> None:
    item = parse_error_item("Age", "7|")

    assert item == ErrorItem(code="7", message="")


@pytest.mark.parametrize("raw", ["-15|negative", "+15|signed", "123456789012345678901234567890|huge"])
def test_signed_and_large_codes_are_accepted(raw: str) -> None:
    code, message = raw.split("|", 1)

    assert parse_error_item("Field", raw) == ErrorItem(code=code, message=message)


@pytest.mark.parametrize(
    "raw",
    [
        "Name is required",
        "",
        "|",
        "|leading separator",
        "abc|not a code",
        "1.5|decimal",
        "1_000|underscored",
        "0x10|hex",
    ],
)
def test_uncoded_messages_fall_back_unchanged(raw: str) -> None:
    item = parse_error_item("X", raw)

    assert item.code == FALLBACK_ERROR_CODE
    assert item.message == raw


def test_fallback_code_is_fixed_sentinel() -> None:
    assert FALLBACK_ERROR_CODE == "0000"


def test_error_items_are_immutable() -> None:
    item = ErrorItem(code="1", message="x")

    with pytest.raises(ValidationError):
        item.code = "2"  # type: ignore[misc]


def test_serialized_item_uses_code_and_message_fields() -> None:
    assert ErrorItem.parse("Email", "100|Email is required").model_dump() == {
        "code": "100",
        "message": "Email is required",
    }


@pytest.mark.parametrize(
    ("raw", "code", "message"),
    [
        (" 7 |x", " 7 ", "x"),
        ("\t12|tabbed", "\t12", "tabbed"),
        (" -3 ", " -3 ", "Field error occurred"),
    ],
)
def test_whitespace_around_code_is_tolerated_and_kept(raw: str, code: str, message: str) -> None:
    assert parse_error_item("Field", raw) == ErrorItem(code=code, message=message)


def test_missing_message_reads_as_empty_uncoded_message() -> None:
    assert parse_error_item("Field", None) == ErrorItem(code=FALLBACK_ERROR_CODE, message="")
