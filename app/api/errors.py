"""
Exception handlers mapping gateway errors to HTTP responses.

Every error body has the same shape: {"message": "..."}. The message comes
from the exception itself, so the raiser controls what the merchant sees.

  - PaymentNotFound           → 404 Not Found
  - ValidationFailed          → 400 Bad Request
  - BankUnavailable           → 502 Bad Gateway
  - Unreadable request        → 400 Bad Request
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_404_NOT_FOUND,
    HTTP_502_BAD_GATEWAY,
)

from app.engine.errors import BankUnavailable, PaymentNotFound, ValidationFailed

logger = logging.getLogger("payment_gateway.api")


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message})


async def payment_not_found_handler(request: Request, exc: PaymentNotFound) -> JSONResponse:
    logger.warning("Payment not found: %s", exc.payment_id)
    return _error(HTTP_404_NOT_FOUND, str(exc))


async def validation_failed_handler(request: Request, exc: ValidationFailed) -> JSONResponse:
    logger.warning("Invalid payment request: %s", exc.errors)
    return _error(HTTP_400_BAD_REQUEST, str(exc))


async def bank_unavailable_handler(request: Request, exc: BankUnavailable) -> JSONResponse:
    logger.error("Bank unavailable: %s", exc)
    return _error(HTTP_502_BAD_GATEWAY, str(exc))


def readable_message(exc: RequestValidationError) -> str:
    """Turn a schema error into one merchant-facing message."""
    for error in exc.errors():
        loc = error.get("loc") or ()
        if loc and loc[0] == "path":
            return f"Invalid payment ID: {error.get('input')}"
        if error.get("type") == "extra_forbidden" and len(loc) > 1:
            return f"Unrecognized field: '{loc[-1]}'"
    return "Malformed request body"


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    message = readable_message(exc)
    logger.warning("Unreadable request: %s", message)
    return _error(HTTP_400_BAD_REQUEST, message)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(PaymentNotFound, payment_not_found_handler)
    app.add_exception_handler(ValidationFailed, validation_failed_handler)
    app.add_exception_handler(BankUnavailable, bank_unavailable_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
