"""Map service/storage exceptions to `{"error": message}` JSON responses."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from jsonboard.repositories.json_storage import StoreError
from jsonboard.services.collection_service import ItemNotFoundError

logger = logging.getLogger(__name__)

INVALID_JSON_MESSAGE = "Request body is not valid JSON"
NOT_AN_OBJECT_MESSAGE = "Request body must be a JSON object"


def error_response(message: str, status_code: int) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code)


def body_error_message(exc: RequestValidationError) -> str:
    if any(err.get("type") == "json_invalid" for err in exc.errors()):
        return INVALID_JSON_MESSAGE
    return NOT_AN_OBJECT_MESSAGE


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(ItemNotFoundError)
    async def not_found_handler(request: Request, exc: ItemNotFoundError):
        return error_response(str(exc), 404)

    @app.exception_handler(RequestValidationError)
    async def bad_body_handler(request: Request, exc: RequestValidationError):
        # the only request-level check is that the body parses to a JSON object
        logger.warning("Rejected body on %s %s: %s", request.method, request.url.path, exc.errors())
        return error_response(body_error_message(exc), 400)

    @app.exception_handler(StoreError)
    async def store_error_handler(request: Request, exc: StoreError):
        logger.error("Store failure on %s %s: %s", request.method, request.url.path, exc)
        return error_response(str(exc), 500)

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return error_response(str(exc), 500)
