"""JSON response envelopes returned by the HTTP API."""

from __future__ import annotations

import dataclasses
import json
from dataclasses import dataclass
from enum import Enum
from http import HTTPStatus
from typing import Any, ClassVar
from uuid import UUID


def _jsonable(value: Any) -> Any:
    """Convert dataclasses, UUIDs, enums and containers into JSON-ready values."""
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {
            field.name: _jsonable(getattr(value, field.name))
            for field in dataclasses.fields(value)
        }
    if isinstance(value, UUID):
        return str(value)
    if isinstance(value, Enum):
        return _jsonable(value.value)
    if isinstance(value, dict):
        return {str(key): _jsonable(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(item) for item in value]
    return value


def _dumps(payload: dict[str, Any]) -> str:
    return json.dumps(payload, separators=(",", ":"), ensure_ascii=False)


@dataclass
class ApiSuccessResponse:
    """A successful response carrying a status label and data."""

    status: str
    data: Any

    STATUS_CODE: ClassVar[int] = HTTPStatus.OK

    def body(self) -> dict[str, Any]:
        return {"status": self.status, "data": _jsonable(self.data)}

    def to_json(self) -> str:
        return _dumps(self.body())


@dataclass
class ApiCreatedResponse:
    """A response for a newly created resource."""

    status: str
    message: str
    data: Any

    STATUS_CODE: ClassVar[int] = HTTPStatus.CREATED

    def body(self) -> dict[str, Any]:
        return {
            "status": self.status,
            "message": self.message,
            "data": _jsonable(self.data),
        }

    def to_json(self) -> str:
        return _dumps(self.body())


@dataclass
class ApiUpdateResponse:
    """A response for an updated resource."""

    status: str
    message: str
    data: Any

    STATUS_CODE: ClassVar[int] = HTTPStatus.OK

    def body(self) -> dict[str, Any]:
        return {
            "status": self.status,
            "message": self.message,
            "data": _jsonable(self.data),
        }

    def to_json(self) -> str:
        return _dumps(self.body())


@dataclass
class ApiErrorResponse(Exception):
    """An error response; its status doubles as the HTTP status code."""

    status: int
    message: str

    def __post_init__(self) -> None:
        Exception.__init__(self, self.message)

    def __str__(self) -> str:
        return self.message

    def body(self) -> dict[str, Any]:
        return {"status": self.status, "message": self.message}

    def to_json(self) -> str:
        return _dumps(self.body())

    def http_status(self) -> int:
        """The HTTP status to send; unknown codes fall back to 500."""
        try:
            return int(HTTPStatus(self.status))
        except ValueError:
            return int(HTTPStatus.INTERNAL_SERVER_ERROR)