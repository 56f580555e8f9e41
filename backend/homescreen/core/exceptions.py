"""RFC 7807 Problem Details error handling.

Problem bodies carry two extension members: ``code`` (machine-readable
error code) and ``errors`` (itemised validation messages, when any).
"""

import logging
from http import HTTPStatus

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from homescreen.services.config_store import ErrorCode, StoreError

logger = logging.getLogger(__name__)

STATUS_BY_CODE: dict[str, int] = {
    ErrorCode.VALIDATION_ERROR.value: 400,
    "BAD_REQUEST": 400,
    "UNAUTHORIZED": 401,
    ErrorCode.FORBIDDEN.value: 403,
    ErrorCode.NOT_FOUND.value: 404,
    "METHOD_NOT_ALLOWED": 405,
    ErrorCode.ALREADY_EXISTS.value: 409,
    ErrorCode.INVALID_CONFIG.value: 500,
    ErrorCode.INTERNAL_ERROR.value: 500,
}

_CODE_BY_STATUS = {
    400: "BAD_REQUEST",
    401: "UNAUTHORIZED",
    403: ErrorCode.FORBIDDEN.value,
    404: ErrorCode.NOT_FOUND.value,
    405: "METHOD_NOT_ALLOWED",
    409: ErrorCode.ALREADY_EXISTS.value,
    500: ErrorCode.INTERNAL_ERROR.value,
}

GENERIC_INTERNAL_DETAIL = "An unexpected error occurred"


class ProblemDetailError(Exception):
    """Raise for RFC 7807 problem+json responses."""

    def __init__(
        self,
        status: int,
        title: str,
        detail: str,
        error_type: str | None = None,
        code: str | None = None,
        errors: list[str] | None = None,
    ):
        self.status = status
        self.title = title
        self.detail = detail
        self.error_type = error_type or "about:blank"
        self.code = code or _CODE_BY_STATUS.get(status)
        self.errors = errors or None

    @classmethod
    def from_store_error(cls, error: StoreError) -> "ProblemDetailError":
        status = STATUS_BY_CODE.get(error.code.value, 500)
        return cls(
            status=status,
            title=HTTPStatus(status).phrase,
            detail=error.message,
            code=error.code.value,
            errors=error.details if status < 500 else None,
        )

    @classmethod
    def bad_request(cls, detail: str) -> "ProblemDetailError":
        return cls(status=400, title="Bad Request", detail=detail, code="BAD_REQUEST")


def _problem_response(
    request: Request,
    status: int,
    title: str,
    detail: str | dict | list,
    error_type: str = "about:blank",
    code: str | None = None,
    errors: list[str] | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    content: dict = {
        "type": error_type,
        "title": title,
        "status": status,
        "detail": detail,
        "instance": str(request.url.path),
    }
    if code is not None:
        content["code"] = code
    if errors:
        content["errors"] = errors
    return JSONResponse(
        status_code=status,
        content=content,
        media_type="application/problem+json",
        headers=headers,
    )


async def problem_detail_handler(request: Request, exc: ProblemDetailError) -> JSONResponse:
    return _problem_response(
        request,
        exc.status,
        exc.title,
        exc.detail,
        error_type=exc.error_type,
        code=exc.code,
        errors=exc.errors,
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return _problem_response(
        request,
        exc.status_code,
        exc.detail if isinstance(exc.detail, str) else "Error",
        exc.detail,
        code=_CODE_BY_STATUS.get(exc.status_code),
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return _problem_response(
        request,
        422,
        "Validation Error",
        jsonable_encoder(exc.errors()),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log the failure server-side and answer with a generic 500."""
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return _problem_response(
        request,
        500,
        "Internal Server Error",
        GENERIC_INTERNAL_DETAIL,
        code=ErrorCode.INTERNAL_ERROR.value,
    )
