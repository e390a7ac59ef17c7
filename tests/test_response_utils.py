import pytest

from errors import (
    BodyAlreadyReadError,
    EnvelopeShapeError,
    HttpStatusError,
    MalformedBodyError,
)
from response_utils import (
    ErrorEnvelope,
    Response,
    is_json_response,
    normalise_content_type,
    resolve_job_handle,
    resolve_result,
)


@pytest.mark.parametrize(
    "content_type",
    [
        "application/json",
        "APPLICATION/JSON",
        'application/JSON; charset="utf-8"',
        "application/json;charset=utf-8",
        ' application/json ; charset = "UTF-8" ',
        'application/json"',
    ],
)
def test_json_content_types(response, content_type) -> None:
    assert is_json_response(Response(response(content_type=content_type)))


@pytest.mark.parametrize(
    "content_type",
    ["text/plain", "my type", "application/json; charset=latin1", "application/problem+json", ""],
)
def test_non_json_content_types(response, content_type) -> None:
    assert not is_json_response(Response(response(content_type=content_type)))


def test_missing_content_type_is_not_json(response) -> None:
    assert not is_json_response(Response(response()))


def test_normalise_content_type() -> None:
    assert normalise_content_type('Application/JSON; charset="UTF-8"') == "application/json;charset=utf-8"


def test_ok_json_returns_body(response) -> None:
    resp = Response(response(200, {"foo": "bar"}, "application/json"))
    assert resolve_result(resp, True) == {"foo": "bar"}


def test_not_ok_json_raises_with_envelope(response) -> None:
    body = {"errors": [{"message": "its an error", "code": "V01"}, {"message": "another"}]}
    resp = Response(response(400, body, "application/json"))
    with pytest.raises(HttpStatusError, match="its an error") as excinfo:
        resolve_result(resp, True)
    envelope = excinfo.value.envelope
    assert excinfo.value.status == 400
    assert envelope.errors[0].message == "its an error"
    assert envelope.errors[0].code == "V01"
    assert envelope.errors[1].code is None
    assert len(envelope.errors) == 2


def test_ok_non_json_returns_response(response) -> None:
    resp = Response(response(204))
    assert resolve_result(resp, False) is resp
    assert resp.status == 204
    assert not resp.body_used


def test_not_ok_non_json_raises_with_response(response) -> None:
    resp = Response(response(400, "bad", "text/plain", reason="Bad Request"))
    with pytest.raises(HttpStatusError, match="HTTP 400 Bad Request") as excinfo:
        resolve_result(resp, False)
    assert excinfo.value.response is resp
    assert excinfo.value.envelope is None
    assert excinfo.value.response.read_text() == "bad"


@pytest.mark.parametrize("status", [200, 500])
def test_malformed_json_raises(response, status) -> None:
    resp = Response(response(status, "{not json", "application/json"))
    with pytest.raises(MalformedBodyError) as excinfo:
        resolve_result(resp, True)
    assert excinfo.value.response is resp
    assert isinstance(excinfo.value.__cause__, ValueError)


@pytest.mark.parametrize(
    "body",
    [
        {"foo": "bar"},
        {"errors": []},
        {"errors": "its an error"},
        {"errors": [{"code": "X"}]},
        ["its an error"],
    ],
)
def test_error_body_without_envelope_raises(response, body) -> None:
    resp = Response(response(400, body, "application/json"))
    with pytest.raises(EnvelopeShapeError) as excinfo:
        resolve_result(resp, True)
    assert excinfo.value.body == body


def test_body_can_only_be_read_once(response) -> None:
    resp = Response(response(200, {"foo": "bar"}, "application/json"))
    assert resp.read_json() == {"foo": "bar"}
    with pytest.raises(BodyAlreadyReadError):
        resp.read_text()


def test_ok_is_2xx_only(response) -> None:
    assert Response(response(299)).ok
    assert not Response(response(302)).ok
    assert not Response(response(404)).ok


def test_envelope_from_json() -> None:
    envelope = ErrorEnvelope.from_json({"errors": [{"message": "m", "code": 7}]})
    assert envelope.first_message == "m"
    assert envelope.errors[0].code == "7"


def test_job_handle_from_json_object(response) -> None:
    resp = Response(response(200, {"text": "/api/v2/job/test"}, "application/json"))
    assert resolve_job_handle(resp, True) == "/api/v2/job/test"


def test_job_handle_from_json_string(response) -> None:
    resp = Response(response(201, '"/api/v2/job/test"', "application/json"))
    assert resolve_job_handle(resp, True) == "/api/v2/job/test"


def test_job_handle_from_text(response) -> None:
    resp = Response(response(201, "/api/v2/job/test\n", "text/plain"))
    assert resolve_job_handle(resp, False) == "/api/v2/job/test"


def test_job_handle_missing_raises(response) -> None:
    resp = Response(response(200, {"href": "/api/v2/job/test"}, "application/json"))
    with pytest.raises(EnvelopeShapeError, match="job reference"):
        resolve_job_handle(resp, True)


def test_job_handle_error_raises(response) -> None:
    resp = Response(response(400, {"errors": [{"message": "its an error"}]}, "application/json"))
    with pytest.raises(HttpStatusError) as excinfo:
        resolve_job_handle(resp, True)
    assert excinfo.value.envelope.errors[0].message == "its an error"


@pytest.mark.parametrize(
    "status, body, content_type, is_json",
    [
        (204, None, None, False),
        (200, "   \n", "text/plain", False),
        (200, '""', "application/json", True),
        (200, {"text": "  "}, "application/json", True),
    ],
)
def test_empty_job_handle_raises(response, status, body, content_type, is_json) -> None:
    resp = Response(response(status, body, content_type))
    with pytest.raises(EnvelopeShapeError, match="job reference"):
        resolve_job_handle(resp, is_json)
