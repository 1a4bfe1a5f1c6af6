"""Exception handlers that render every failure in the {success: false, message} envelope."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.errors import AccountError, ValidationFailedError
from app.schemas.common import ErrorResponse, FieldError

logger = logging.getLogger(__name__)


def _error_response(
    status_code: int,
    message: str,
    errors: list[FieldError] | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    body = ErrorResponse(message=message, errors=errors)
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(exclude_none=True),
        headers=headers,
    )


def _field_errors(exc: RequestValidationError) -> list[dict[str, str]]:
    """Flatten pydantic errors to field name + message, dropping the 'body' location prefix."""
    items = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "path", "query")]
        items.append({"field": ".".join(loc) or "body", "message": err.get("msg", "Invalid value")})
    return items


async def account_error_handler(request: Request, exc: AccountError) -> JSONResponse:
    errors = None
    if isinstance(exc, ValidationFailedError) and exc.errors:
        errors = [FieldError(**e) for e in exc.errors]
    return _error_response(exc.status_code, exc.message, errors=errors, headers=exc.headers)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    items = _field_errors(exc)
    first = items[0] if items else {"field": "body", "message": "Invalid request"}
    error = ValidationFailedError(f"{first['field']}: {first['message']}", errors=items)
    return await account_error_handler(request, error)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    message = exc.detail if isinstance(exc.detail, str) else "Request failed"
    return _error_response(exc.status_code, message, headers=getattr(exc, "headers", None))


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(
        "Unhandled error",
        extra={"method": request.method, "path": request.url.path},
    )
    return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Something went wrong")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AccountError, account_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
