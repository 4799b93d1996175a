"""Validation of new-user registration requests."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class CreateUserRequest:
    """Fields submitted when a user registers."""

    username: str
    first_name: str
    last_name: str
    email: str
    password: str


class ValidationError(ValueError):
    """A registration request failed validation."""

    message = "Validation failed"

    def __init__(self, detail: str | None = None) -> None:
        super().__init__(detail if detail is not None else self.message)
        self.detail = detail

    def __str__(self) -> str:
        return self.message


class EmptyFieldError(ValidationError):
    message = "Empty String not allowed"


class FieldLengthError(ValidationError):
    message = "Invalid Length of data"


class InvalidEmailError(ValidationError):
    message = "Invalid Email"


def _byte_length(text: str) -> int:
    return len(text.encode("utf-8"))


def check_create_user(request: CreateUserRequest) -> None:
    """Raise a ValidationError subclass for the first problem found."""
    required = (
        ("username", request.username),
        ("first name", request.first_name),
        ("last name", request.last_name),
        ("email", request.email),
        ("password", request.password),
    )
    for label, value in required:
        if not value:
            raise EmptyFieldError(f"{label} field must not be empty")

    bounds = (
        (request.username, 3, 15, "username must be between 3 and 15 characters"),
        (request.first_name, 3, 20, "first name must be between 3 and 20 characters"),
        (request.last_name, 3, 20, "last name must be between 3 and 20 characters"),
        (
            request.password,
            6,
            15,
            "password must be at least 6 characters to 15 characters",
        ),
    )
    for value, low, high, detail in bounds:
        if not low <= _byte_length(value) <= high:
            raise FieldLengthError(detail)

    if "@" not in request.email:
        raise InvalidEmailError()