"""Request and response collaborators used by controllers.

``ApiRequest`` gives controllers query-string and JSON-body access without
tying them to Starlette; ``ApiResponse`` builds the success envelope::

    {"success": true, "data": ...}
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse, Response

from backend.app.core.errors import ApiError


class ApiRequest:
    """Already-received HTTP request: query parameters plus raw body bytes."""

    def __init__(self, query_params: Mapping[str, str] | None = None, body: bytes = b"") -> None:
        self._query_params = dict(query_params or {})
        self._body = body

    @classmethod
    async def from_request(cls, request: Request) -> ApiRequest:
        """FastAPI dependency that captures the incoming request."""
        return cls(query_params=request.query_params, body=await request.body())

    @classmethod
    def from_json(cls, payload: Any, query_params: Mapping[str, str] | None = None) -> ApiRequest:
        return cls(query_params=query_params, body=json.dumps(payload).encode("utf-8"))

    def query(self, name: str) -> str | None:
        return self._query_params.get(name)

    def get_json_body(self) -> dict[str, Any]:
        """Parse the body as a JSON object.

        An empty body is treated as ``{}`` so that field validation reports
        the missing fields.

        Raises:
            ApiError: 400 if the body is not valid JSON or not an object.
        """
        if not self._body.strip():
            return {}
        try:
            data = json.loads(self._body)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise ApiError("Invalid JSON body", status_code=400) from exc
        if not isinstance(data, dict):
            raise ApiError("Invalid JSON body", status_code=400)
        return data


class ApiResponse:
    """Builds success responses in the API envelope."""

    def success(self, data: Any = None, status_code: int = 200) -> Response:
        if status_code == 204:
            return Response(status_code=204)
        return JSONResponse(
            status_code=status_code,
            content={"success": True, "data": data},
        )
