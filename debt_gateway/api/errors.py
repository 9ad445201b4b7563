"""Map domain exceptions to the JSON error bodies the front-end expects"""

import logging
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from debt_gateway.api.dependencies import get_request_id
from debt_gateway.domain.exceptions import AuthenticationError, DomainException


def error_response(status_code: int, message: str, **extra) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={**extra, "error": message})


def register_exception_handlers(app: FastAPI) -> None:
    """Install handlers so every failure leaves as ``{"error": ...}``"""

    @app.exception_handler(AuthenticationError)
    async def authentication_error(request: Request, exc: AuthenticationError):
        return JSONResponse(status_code=exc.status_code, content={"message": str(exc)})

    @app.exception_handler(DomainException)
    async def domain_error(request: Request, exc: DomainException):
        if exc.status_code >= 500:
            logging.error(f"Request failed: {exc}", extra={"request_id": get_request_id(request)})
        else:
            logging.warning(f"Rejected request: {exc}", extra={"request_id": get_request_id(request)})
        return error_response(exc.status_code, str(exc))

    @app.exception_handler(RequestValidationError)
    async def validation_error(request: Request, exc: RequestValidationError):
        if request.url.path.startswith("/debts/batch-"):
            return error_response(400, "Invalid request body", success=False)
        return error_response(400, "Invalid request body")

    @app.exception_handler(Exception)
    async def unexpected_error(request: Request, exc: Exception):
        logging.exception(f"Unexpected error: {exc}", extra={"request_id": get_request_id(request)})
        return error_response(500, "Internal server error")
