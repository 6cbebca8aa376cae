from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.common.exceptions import LedgerError
from app.common.response import ErrorResponse
from app.logger_config import logger


def register_error_handlers(app: FastAPI):
    @app.exception_handler(LedgerError)
    async def handle_ledger_error(request: Request, e: LedgerError):
        logger.warning(f"{e.error_code} on {request.url.path}: {e.message}")
        body = e.to_dict()
        return ErrorResponse.send(
            message=body["message"],
            status_code=body["status_code"],
            errors=[jsonable_encoder(body["details"])] if body["details"] else None,
            error=body["error"]
        )

    # Handle HTTP (e.g. 404, 400)
    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, e: StarletteHTTPException):
        return ErrorResponse.send(
            message=str(e.detail),
            status_code=e.status_code
        )

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, e: RequestValidationError):
        return ErrorResponse.send(
            message="Validation error",
            status_code=422,
            errors=jsonable_encoder(e.errors())
        )

    # Handle all other exceptions (coding, DB errors, etc.)
    @app.exception_handler(Exception)
    async def handle_exception(request: Request, e: Exception):
        # Log the exception with traceback
        logger.exception("Unhandled exception occurred")
        return ErrorResponse.send(
            message="Internal Server Error",
            status_code=500
        )
