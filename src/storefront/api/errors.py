"""Exception handlers mapping domain failures to HTTP responses.

Status codes for Protean exceptions come from
``protean.integrations.fastapi.register_exception_handlers``. Storefront
keeps its own response body, ``{"success": false, "message": ..., "errors": ...}``,
and turns anything unexpected into a generic 500.
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from protean.integrations.fastapi import register_exception_handlers as register_protean_exception_handlers
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = structlog.get_logger(__name__)

GENERIC_ERROR_MESSAGE = "Internal Server Error"


def _messages(exc) -> dict:
    """Field-keyed messages of a domain exception.

    ``ValidationError`` carries them on ``messages``; other Protean exceptions
    (``ObjectNotFoundError``, ``InvalidStateError``...) carry them as their
    first argument.
    """
    messages = getattr(exc, "messages", None)
    if messages is None and exc.args:
        messages = exc.args[0]
    if isinstance(messages, dict):
        return messages
    return {"_entity": [str(messages or exc)]}


def _first_message(messages: dict) -> str:
    for value in messages.values():
        if isinstance(value, (list, tuple)) and value:
            return str(value[0])
        if value:
            return str(value)
    return "Request failed"


def _error_response(status_code: int, message: str, errors=None) -> JSONResponse:
    content = {"success": False, "message": message}
    if errors:
        content["errors"] = errors
    return JSONResponse(status_code=status_code, content=content)


def _with_storefront_body(handler):
    """Keep the status code Protean's handler picks, replace its body."""

    async def domain_error_handler(request: Request, exc: Exception) -> JSONResponse:
        response = await handler(request, exc)
        messages = _messages(exc)
        logger.info(
            "request_rejected",
            path=request.url.path,
            status_code=response.status_code,
            errors=messages,
        )
        return _error_response(response.status_code, _first_message(messages), messages)

    return domain_error_handler


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors: dict[str, list[str]] = {}
    for error in exc.errors():
        field = ".".join(str(part) for part in error["loc"] if part != "body") or "body"
        errors.setdefault(field, []).append(error["msg"])
    return _error_response(400, "Invalid request: " + ", ".join(errors), errors)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return _error_response(exc.status_code, str(exc.detail))


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("unhandled_error", path=request.url.path, error=str(exc), exc_info=exc)
    return _error_response(500, GENERIC_ERROR_MESSAGE)


def register_exception_handlers(app: FastAPI) -> None:
    before = dict(app.exception_handlers)
    register_protean_exception_handlers(app)
    for exc_class, handler in list(app.exception_handlers.items()):
        if before.get(exc_class) is not handler:
            app.add_exception_handler(exc_class, _with_storefront_body(handler))

    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)
