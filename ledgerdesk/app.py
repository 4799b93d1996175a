"""The HTTP application: health checks and company endpoints."""

from __future__ import annotations

import sqlite3
from collections.abc import Callable
from typing import Any
from uuid import UUID

from flask import Flask, Response, g, request

from ledgerdesk.company_repository import (
    CompanyConflict,
    CompanyDeleteFailed,
    CompanyInternalError,
    CompanyNotFound,
    CompanyRepository,
    CompanyRepositoryError,
    CompanyUpdateFailed,
    CompanyUuidError,
    CreateCompanyRequest,
    UpdateCompanyRequest,
)
from ledgerdesk.middleware import (
    AuthenticatedUser,
    AuthenticationError,
    add_cors_headers,
    authenticate,
)
from ledgerdesk.responses import (
    ApiCreatedResponse,
    ApiErrorResponse,
    ApiSuccessResponse,
    ApiUpdateResponse,
)

_ERRORS: dict[type, tuple[int, str]] = {
    CompanyNotFound: (404, "Company not found"),
    CompanyInternalError: (500, "Internal server error"),
    CompanyConflict: (409, "Conflicting company"),
    CompanyUuidError: (500, "Uuid convert error"),
    CompanyDeleteFailed: (500, "Delete failed"),
    CompanyUpdateFailed: (500, "Update failed"),
}


def error_response(error: CompanyRepositoryError) -> ApiErrorResponse:
    """The API error sent for a failed company operation."""
    status, message = _ERRORS.get(type(error), (500, "Internal server error"))
    return ApiErrorResponse(status, message)


def _send(payload: Any, status: int) -> Response:
    return Response(payload.to_json(), status=status, mimetype="application/json")


def _json_object() -> dict[str, Any]:
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        raise ApiErrorResponse(422, "Unprocessable Entity")
    return body


def _optional_text(body: dict[str, Any], key: str) -> str | None:
    value = body.get(key)
    if value is not None and not isinstance(value, str):
        raise ApiErrorResponse(422, "Unprocessable Entity")
    return value


def _parse_uuid(text: str, status: int, message: str) -> UUID:
    try:
        return UUID(text)
    except ValueError as exc:
        raise ApiErrorResponse(status, message) from exc


def create_app(
    connection_factory: Callable[[], sqlite3.Connection], secret_key: str
) -> Flask:
    """Build the application; each request opens its own database connection."""
    app = Flask(__name__)

    def repository() -> CompanyRepository:
        if "connection" not in g:
            g.connection = connection_factory()
        return CompanyRepository(g.connection)

    def current_user() -> AuthenticatedUser:
        return authenticate(request.headers.get("Authorization"), secret_key)

    @app.teardown_appcontext
    def _close_connection(_exc: BaseException | None) -> None:
        connection = g.pop("connection", None)
        if connection is not None:
            connection.close()

    @app.after_request
    def _cors(response: Response) -> Response:
        add_cors_headers(response.headers)
        return response

    @app.errorhandler(ApiErrorResponse)
    def _api_error(error: ApiErrorResponse) -> Response:
        return _send(error, error.http_status())

    @app.errorhandler(CompanyRepositoryError)
    def _company_error(error: CompanyRepositoryError) -> Response:
        api_error = error_response(error)
        return _send(api_error, api_error.http_status())

    @app.errorhandler(AuthenticationError)
    def _auth_error(error: AuthenticationError) -> Response:
        return _send(ApiErrorResponse(error.status_code, error.message), error.status_code)

    @app.route("/v1/<path:_path>", methods=["OPTIONS"])
    def options(_path: str) -> str:
        return ""

    @app.get("/v1/check/server_status")
    def server_check() -> Response:
        reply = ApiSuccessResponse("200", "Server is running")
        return _send(reply, reply.STATUS_CODE)

    @app.get("/v1/check/database_status")
    def database_check() -> Response:
        try:
            connection = connection_factory()
        except (sqlite3.Error, OSError) as exc:
            raise ApiErrorResponse(200, "Database is not running") from exc
        connection.close()
        reply = ApiSuccessResponse("success", "Database is running")
        return _send(reply, reply.STATUS_CODE)

    @app.post("/v1/company/", strict_slashes=False)
    def create_company() -> Response:
        user = current_user()
        body = _json_object()
        name = body.get("name")
        description = body.get("description")
        if not isinstance(name, str) or not isinstance(description, str):
            raise ApiErrorResponse(422, "Unprocessable Entity")
        if not name or not description:
            raise ApiErrorResponse(400, "Invalid company name or description")
        created = repository().create_company(
            user.id, CreateCompanyRequest(name=name, description=description)
        )
        reply = ApiCreatedResponse("success", "Company created", created)
        return _send(reply, reply.STATUS_CODE)

    @app.put("/v1/company/<company_id>")
    def edit_company(company_id: str) -> Response:
        user = current_user()
        body = _json_object()
        changes = UpdateCompanyRequest(
            name=_optional_text(body, "name"),
            description=_optional_text(body, "description"),
        )
        target = _parse_uuid(company_id, 500, "Internal server error")
        updated = repository().update_company(user.id, target, changes)
        reply = ApiUpdateResponse("success", "Company edited", updated)
        return _send(reply, reply.STATUS_CODE)

    @app.delete("/v1/company/<target_id>")
    def delete_company(target_id: str) -> Response:
        user = current_user()
        target = _parse_uuid(target_id, 400, "Invalid company id")
        repository().delete_company(user.id, target)
        reply = ApiSuccessResponse("success", "Company deleted")
        return _send(reply, reply.STATUS_CODE)

    @app.get("/v1/company/<company_id>")
    def view_company(company_id: str) -> Response:
        user = current_user()
        target = _parse_uuid(company_id, 500, "Internal server error")
        entry = repository().get_company(user.id, target)
        reply = ApiSuccessResponse("success", entry)
        return _send(reply, reply.STATUS_CODE)

    @app.get("/v1/company/", strict_slashes=False)
    def view_companies() -> Response:
        user = current_user()
        listing = repository().get_companies(user.id)
        reply = ApiSuccessResponse("success", listing)
        return _send(reply, reply.STATUS_CODE)

    return app