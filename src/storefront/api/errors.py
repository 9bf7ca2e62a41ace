"""Exception-to-HTTP mapping.

Protean's FastAPI integration supplies the default handlers. The storefront
then installs its own for the errors it raises itself, so every error body
has the shape ``{"error": <message or {field: [messages]}>, "code": <slug>}``.
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.integrations.fastapi import register_exception_handlers

from storefront.domain import logger
from storefront.errors import InvalidInput, InvalidProduct, StorefrontError


def error_body(error, code: str) -> dict:
    return {"error": error, "code": code}


async def storefront_error_handler(request: Request, exc: StorefrontError) -> JSONResponse:
    error = exc.errors if isinstance(exc, InvalidInput) and exc.errors else exc.message
    if exc.status_code >= 500:
        logger.error("request_failed", path=request.url.path, code=exc.code, error=exc.message)
    return JSONResponse(status_code=exc.status_code, content=error_body(error, exc.code))


async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    code = InvalidProduct.code if isinstance(exc, InvalidProduct) else InvalidInput.code
    return JSONResponse(status_code=400, content=error_body(exc.messages, code))


async def not_found_handler(request: Request, exc: ObjectNotFoundError) -> JSONResponse:
    return JSONResponse(status_code=404, content=error_body(str(exc) or "Not found", "not_found"))


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors: dict[str, list[str]] = {}
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ()) if part != "body"]
        field = ".".join(loc) or "body"
        errors.setdefault(field, []).append(err.get("msg", "Invalid value"))
    return JSONResponse(status_code=400, content=error_body(errors, InvalidInput.code))


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled_error", path=request.url.path)
    return JSONResponse(status_code=500, content=error_body("Internal Server Error", "internal_error"))


def register_error_handlers(app: FastAPI) -> None:
    register_exception_handlers(app)
    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(ObjectNotFoundError, not_found_handler)
    app.add_exception_handler(StorefrontError, storefront_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
