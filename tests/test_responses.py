import json
from dataclasses import dataclass
from uuid import uuid4

import pytest

from ledgerdesk.responses import (
    ApiCreatedResponse,
    ApiErrorResponse,
    ApiSuccessResponse,
    ApiUpdateResponse,
)


@dataclass
class _Item:
    id: object
    name: str


def test_success_wire_format():
    response = ApiSuccessResponse(status="success", data="Company deleted")
    assert response.to_json() == '{"status":"success","data":"Company deleted"}'


def test_success_body_serialises_dataclass_and_uuid():
    item_id = uuid4()
    response = ApiSuccessResponse(status="success", data=_Item(id=item_id, name="acme"))
    assert response.body() == {
        "status": "success",
        "data": {"id": str(item_id), "name": "acme"},
    }


def test_success_round_trip_through_json():
    response = ApiSuccessResponse(status="success", data=[1, 2, 3])
    assert json.loads(response.to_json()) == response.body()


def test_created_body_field_order():
    response = ApiCreatedResponse(status="success", message="Company created", data="x")
    assert list(response.body()) == ["status", "message", "data"]
    assert json.loads(response.to_json())["message"] == "Company created"


def test_created_status_code():
    response = ApiCreatedResponse(status="success", message="Company created", data="x")
    assert response.STATUS_CODE == 201


def test_update_body_and_json_agree():
    item_id = uuid4()
    response = ApiUpdateResponse(
        status="success", message="Company edited", data={"id": item_id}
    )
    assert json.loads(response.to_json()) == {
        "status": "success",
        "message": "Company edited",
        "data": {"id": str(item_id)},
    }


def test_success_and_update_share_ok_status():
    success = ApiSuccessResponse(status="success", data="x")
    update = ApiUpdateResponse(status="success", message="m", data="x")
    assert success.STATUS_CODE == update.STATUS_CODE == 200


def test_error_body():
    error = ApiErrorResponse(status=404, message="Company not found")
    assert error.body() == {"status": 404, "message": "Company not found"}
    assert json.loads(error.to_json()) == error.body()


@pytest.mark.parametrize("code", [400, 404, 409, 500])
def test_error_known_status_passes_through(code):
    assert ApiErrorResponse(status=code, message="m").http_status() == code


def test_error_unknown_status_falls_back_to_500():
    assert ApiErrorResponse(status=999, message="m").http_status() == 500


def test_error_is_exception_carrying_message():
    error = ApiErrorResponse(status=409, message="Conflicting company")
    assert isinstance(error, Exception)
    assert str(error) == "Conflicting company"
    assert error.http_status() == 409
    assert error.body() == {"status": 409, "message": "Conflicting company"}
    assert json.loads(error.to_json()) == {"status": 409, "message": "Conflicting company"}