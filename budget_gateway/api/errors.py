"""Map domain exceptions to HTTP responses"""

import logging
from typing import Dict, Type

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from budget_gateway.domain.exceptions import (
    ConflictError,
    DomainException,
    InvalidInputError,
    NotFoundError,
    ServiceUnavailableError,
)

STATUS_BY_EXCEPTION: Dict[Type[DomainException], int] = {
    InvalidInputError: 422,
    NotFoundError: 404,
    ConflictError: 409,
    ServiceUnavailableError: 503,
}


async def domain_exception_handler(request: Request, exc: DomainException) -> JSONResponse:
    status_code = next(
        (code for exc_type, code in STATUS_BY_EXCEPTION.items() if isinstance(exc, exc_type)),
        500,
    )
    if status_code >= 500:
        logging.error(f"Domain error: {exc}", extra={"path": request.url.path})
    else:
        logging.info(f"Request rejected: {exc}", extra={"path": request.url.path, "status": status_code})
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DomainException, domain_exception_handler)
