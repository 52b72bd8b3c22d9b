"""Unit tests for model state collection from validation errors."""

from __future__ import annotations

import pytest
from pydantic import BaseModel
from pydantic import ValidationError
from pydantic import field_validator

from webcore.validation.model_state import ModelState


class _Signup(BaseModel):
    email: str
    age: int

    @field_validator("email")
    @classmethod
    def _email_has_at(cls, value: str) -> str:
        if "@" not in value:
            raise ValueError("101|Email is malformed")
        return value


def _validation_error(payload: dict[str, object]) -> ValidationError:
    with pytest.raises(ValidationError) as excinfo:
        _Signup.model_validate(payload)
    return excinfo.value


def test_add_model_error_appends_in_order() -> None:
    state = ModelState()

    state.add_model_error("Email", "first")
    state.add_model_error("Name", "second")
    state.add_model_error("Email", "third")

    assert dict(state) == {"Email": ["first", "third"], "Name": ["second"]}
    assert list(state) == ["Email", "Name"]
    assert state.error_count == 3
    assert not state.is_valid


def test_empty_state_is_valid() -> None:
    state = ModelState({"Email": []})

    assert state.is_valid
    assert state.error_count == 0


def test_constructor_copies_messages() -> None:
    source = {"Email": ["required"]}
    state = ModelState(source)

    source["Email"].append("other")

    assert state["Email"] == ["required"]


def test_validator_value_errors_keep_coded_text() -> None:
    state = ModelState.from_validation_error(_validation_error({"email": "nope", "age": 3}))

    assert dict(state) == {"email": ["101|Email is malformed"]}


def test_builtin_errors_use_pydantic_message() -> None:
    state = ModelState.from_validation_error(_validation_error({"email": "a@b.c"}))

    assert list(state) == ["age"]
    assert state["age"] == ["Field required"]
