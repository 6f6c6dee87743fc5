"""HTTP helpers for the unified {code, message, detail} error payload."""

from __future__ import annotations

import json
from typing import Any
from typing import NoReturn

from fastapi import HTTPException
from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse


class EscapedJSONResponse(JSONResponse):
    """JSON response with non-ASCII escaped, so lone surrogates in names survive encoding."""

    def render(self, content: Any) -> bytes:
        return json.dumps(
            content,
            ensure_ascii=True,
            allow_nan=False,
            indent=None,
            separators=(",", ":"),
        ).encode("ascii")


def api_error(*, code: str, message: str, detail: dict[str, Any] | None = None) -> dict[str, Any]:
    """Build a unified API error payload."""
    return {"code": code, "message": message, "detail": detail or {}}


def raise_api_error(*, status_code: int, code: str, message: str, detail: dict[str, Any]) -> NoReturn:
    """Abort the request with a unified error payload."""
    raise HTTPException(
        status_code=status_code,
        detail=api_error(code=code, message=message, detail=detail),
    )


async def handle_http_exception(_: Request, exc: HTTPException) -> JSONResponse:
    """Pass through payloads already in unified shape; wrap anything else."""
    if isinstance(exc.detail, dict) and {"code", "message", "detail"} <= set(exc.detail):
        return EscapedJSONResponse(status_code=exc.status_code, content=exc.detail, headers=exc.headers)

    return EscapedJSONResponse(
        status_code=exc.status_code,
        content=api_error(code="HTTP_ERROR", message=str(exc.detail)),
        headers=exc.headers,
    )


async def handle_validation_error(_: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed bodies and unknown profiles as VALIDATION_ERROR (422)."""
    fields = [".".join(str(part) for part in error.get("loc", ())) for error in exc.errors()]
    return EscapedJSONResponse(
        status_code=422,
        content=api_error(
            code="VALIDATION_ERROR",
            message="request validation failed",
            detail={"fields": fields, "errors": jsonable_encoder(exc.errors())},
        ),
    )
