"""Exception handler middleware for structured error responses."""

import logging
from fastapi import Request
from fastapi.responses import JSONResponse
from ..exceptions import SnipVaultException

logger = logging.getLogger(__name__)


async def snipvault_exception_handler(request: Request, exc: SnipVaultException) -> JSONResponse:
    """
    Handle custom exceptions and return structured JSON responses.

    Logs error details and converts exception to standardized JSON format.

    Args:
        request: FastAPI request object
        exc: SnipVaultException instance

    Returns:
        JSONResponse with error details
    """
    log = logger.error if exc.status_code >= 500 else logger.warning
    log(
        f"SnipVaultException: {exc.error_code.value}",
        extra={
            "error_code": exc.error_code.value,
            "path": request.url.path,
            "method": request.method,
            "details": exc.details,
            "status_code": exc.status_code
        }
    )

    headers = {"Retry-After": "1"} if exc.status_code == 503 else None
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict(),
        headers=headers,
    )
