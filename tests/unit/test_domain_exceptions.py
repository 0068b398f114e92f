"""Tests for domain exceptions (error_code, message, details)."""

import pytest

from objectsearch.domain.exceptions import (
    AuthenticationException,
    InvalidArgumentException,
    ObjectSearchException,
    SqlNotConfiguredException,
    ValidationException,
)


def test_base_exception_default_error_code() -> None:
    """ObjectSearchException uses class name as error_code when not provided."""
    exc = ObjectSearchException("Something failed")
    assert exc.message == "Something failed"
    assert exc.error_code == "ObjectSearchException"
    assert exc.details == {}


def test_invalid_argument_names_the_object() -> None:
    exc = InvalidArgumentException("Ghost")
    assert str(exc) == 'The "Ghost" object doesn\'t exist'
    assert exc.to_dict() == {
        "error": "INVALID_ARGUMENT",
        "message": 'The "Ghost" object doesn\'t exist',
        "details": {"object": "Ghost"},
    }


def test_validation_exception_field_detail() -> None:
    assert ValidationException("bad", field="limit").details == {"field": "limit"}
    assert ValidationException("bad").details == {}


@pytest.mark.parametrize(
    ("exc", "code"),
    [
        (InvalidArgumentException("x"), "INVALID_ARGUMENT"),
        (ValidationException("x"), "VALIDATION_ERROR"),
        (AuthenticationException(), "AUTHENTICATION_ERROR"),
        (SqlNotConfiguredException(), "SERVICE_UNAVAILABLE"),
    ],
)
def test_error_codes(exc: ObjectSearchException, code: str) -> None:
    assert isinstance(exc, ObjectSearchException)
    assert exc.error_code == code
