"""Tests for the ApiRequest / ApiResponse collaborators."""

import json

import pytest
from backend.app.core.errors import ApiError
from backend.app.core.http import ApiRequest, ApiResponse


class TestApiRequest:
    def test_query_present(self) -> None:
        assert ApiRequest(query_params={"search": "foo"}).query("search") == "foo"

    def test_query_absent(self) -> None:
        assert ApiRequest().query("search") is None

    def test_json_body_object(self) -> None:
        req = ApiRequest(body=b'{"title": "Hello", "content": "World"}')
        assert req.get_json_body() == {"title": "Hello", "content": "World"}

    @pytest.mark.parametrize("body", [b"", b"   ", b"\n"])
    def test_blank_body_is_empty_mapping(self, body: bytes) -> None:
        assert ApiRequest(body=body).get_json_body() == {}

    @pytest.mark.parametrize("body", [b"{oops", b"[1, 2]", b'"text"', b"42", b"\xff\xfe"])
    def test_invalid_or_non_object_body_rejected(self, body: bytes) -> None:
        with pytest.raises(ApiError) as exc_info:
            ApiRequest(body=body).get_json_body()
        assert exc_info.value.status_code == 400
        assert exc_info.value.message == "Invalid JSON body"

    def test_from_json_round_trips_payload(self) -> None:
        req = ApiRequest.from_json({"title": "T"}, query_params={"a": "b"})
        assert req.get_json_body() == {"title": "T"}
        assert req.query("a") == "b"


class TestApiResponse:
    def test_default_status_200_envelope(self) -> None:
        resp = ApiResponse().success({"id": 1})
        assert resp.status_code == 200
        assert json.loads(resp.body) == {"success": True, "data": {"id": 1}}

    def test_status_override(self) -> None:
        resp = ApiResponse().success({"id": 1}, 201)
        assert resp.status_code == 201

    def test_list_payload(self) -> None:
        resp = ApiResponse().success([])
        assert json.loads(resp.body) == {"success": True, "data": []}

    def test_no_content_has_empty_body(self) -> None:
        resp = ApiResponse().success(None, 204)
        assert resp.status_code == 204
        assert resp.body == b""
