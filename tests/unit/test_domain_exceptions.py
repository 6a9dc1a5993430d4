"""Tests for domain exceptions (error_code, message, details, to_dict)."""

from app.domain.exceptions import (
    DuplicateEmailException,
    ResourceNotFoundException,
    StudentsApiException,
    ValidationException,
)


def test_base_exception_default_error_code() -> None:
    """Base StudentsApiException uses class name as error_code when not provided."""
    exc = StudentsApiException("Something failed")
    assert exc.message == "Something failed"
    assert exc.error_code == "StudentsApiException"
    assert exc.details == {}
    assert str(exc) == "Something failed"


def test_base_exception_custom_error_code_and_details() -> None:
    exc = StudentsApiException("Oops", error_code="CUSTOM", details={"key": "value"})
    assert exc.error_code == "CUSTOM"
    assert exc.details == {"key": "value"}


def test_validation_exception() -> None:
    """ValidationException sets VALIDATION_ERROR and optional field in details."""
    exc = ValidationException("Invalid format", field="email")
    assert exc.error_code == "VALIDATION_ERROR"
    assert exc.details == {"field": "email"}


def test_validation_exception_without_field() -> None:
    exc = ValidationException("Invalid")
    assert exc.details == {}


def test_resource_not_found_exception() -> None:
    exc = ResourceNotFoundException("student", "abc")
    assert exc.message == "student not found: abc"
    assert exc.error_code == "RESOURCE_NOT_FOUND"
    assert exc.details == {"resource_type": "student", "resource_id": "abc"}


def test_duplicate_email_exception() -> None:
    exc = DuplicateEmailException("a@x.com")
    assert exc.error_code == "DUPLICATE_EMAIL"
    assert exc.details == {"email": "a@x.com"}


def test_to_dict_omits_empty_details() -> None:
    assert ValidationException("Invalid").to_dict() == {
        "error": "VALIDATION_ERROR",
        "message": "Invalid",
    }
    assert DuplicateEmailException("a@x.com").to_dict() == {
        "error": "DUPLICATE_EMAIL",
        "message": "Email is already registered",
        "details": {"email": "a@x.com"},
    }
