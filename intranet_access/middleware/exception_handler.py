"""Turns PortalException into the JSON error body."""

import logging

from fastapi import Request
from fastapi.responses import JSONResponse

from ..exceptions import PortalException

logger = logging.getLogger(__name__)


async def portal_exception_handler(request: Request, exc: PortalException) -> JSONResponse:
    """Log *exc* and answer with ``exc.to_dict()``.

    Denials and bad input are expected traffic and go out at WARNING;
    only 5xx is logged at ERROR.
    """
    level = logging.ERROR if exc.status_code >= 500 else logging.WARNING
    logger.log(
        level,
        f"{request.method} {request.url.path} -> {exc.status_code} {exc.error_code.value}",
        extra={"error_code": exc.error_code.value, "details": exc.details},
    )
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())
