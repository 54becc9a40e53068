from __future__ import annotations

import logging
from typing import Any, Dict, Optional, cast

from fastapi import HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette import status

from ...engine.board import ParseError
from ...engine.move import InputFormatError


logger = logging.getLogger(__name__)

_STATUS_CODES: Dict[int, str] = {
    status.HTTP_400_BAD_REQUEST: "bad_request",
    status.HTTP_401_UNAUTHORIZED: "unauthorized",
    status.HTTP_403_FORBIDDEN: "forbidden",
    status.HTTP_404_NOT_FOUND: "not_found",
    status.HTTP_409_CONFLICT: "conflict",
    status.HTTP_422_UNPROCESSABLE_ENTITY: "unprocessable_entity",
}


def error_envelope(
    *,
    code: str,
    message: str,
    err_type: str,
    request_id: str,
    field_errors: Optional[list[dict[str, str]]] = None,
) -> Dict[str, Any]:
    body: Dict[str, Any] = {
        "code": code,
        "message": message,
        "type": err_type,
        "request_id": request_id,
    }
    if field_errors:
        body["field_errors"] = field_errors
    return {"error": body}


def _respond(request: Request, status_code: int, code: str, message: str, **kw: Any) -> JSONResponse:
    payload = error_envelope(
        code=code,
        message=message,
        err_type="client_error" if 400 <= status_code < 500 else "server_error",
        request_id=getattr(request.state, "request_id", ""),
        **kw,
    )
    return JSONResponse(status_code=status_code, content=payload)


def status_to_code(status_code: int) -> str:
    if 500 <= status_code < 600:
        return "internal_error"
    return _STATUS_CODES.get(status_code, "error")


async def http_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    if not isinstance(exc, HTTPException):
        return await exception_handler(request, exc)
    detail = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
    return _respond(request, exc.status_code, status_to_code(exc.status_code), detail)


async def parse_error_handler(request: Request, exc: Exception) -> JSONResponse:
    return _respond(request, status.HTTP_400_BAD_REQUEST, "invalid_position", str(exc))


async def input_format_error_handler(request: Request, exc: Exception) -> JSONResponse:
    return _respond(request, status.HTTP_400_BAD_REQUEST, "invalid_move", str(exc))


async def request_validation_exception_handler(
    request: Request, exc: Exception
) -> JSONResponse:
    field_errors = []
    for e in cast(RequestValidationError, exc).errors():
        loc = ".".join(str(p) for p in e.get("loc", []) if p is not None)
        field_errors.append(
            {
                "field": loc,
                "code": e.get("type", "value_error"),
                "message": e.get("msg", "invalid value"),
            }
        )
    return _respond(
        request,
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        "unprocessable_entity",
        "Validation error",
        field_errors=field_errors or None,
    )


async def exception_handler(request: Request, exc: Exception) -> JSONResponse:
    if isinstance(exc, HTTPException):
        return await http_exception_handler(request, exc)
    logger.exception(
        "Unhandled exception", extra={"request_id": getattr(request.state, "request_id", "")}
    )
    return _respond(
        request, status.HTTP_500_INTERNAL_SERVER_ERROR, "internal_error", "Internal Server Error"
    )


def install_error_handlers(app: Any) -> None:
    """Register the envelope handlers on a FastAPI app."""
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
    app.add_exception_handler(ParseError, parse_error_handler)
    app.add_exception_handler(InputFormatError, input_format_error_handler)
    app.add_exception_handler(Exception, exception_handler)
