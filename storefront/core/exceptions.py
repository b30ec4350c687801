"""RFC 7807 Problem Details error handling.

Every problem body also carries an ``error`` member with the short message,
which is what the dashboard and storefront clients display.
"""

import logging

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import InterfaceError, OperationalError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

BACKEND_UNAVAILABLE_DETAIL = (
    "The data backend could not be reached. Check DATABASE_URL (and SUPABASE_URL / "
    "SUPABASE_ANON_KEY when AUTH_MOCK is off) in the environment."
)


class ProblemDetailError(Exception):
    """Raise for RFC 7807 problem+json responses."""

    def __init__(
        self,
        status: int,
        title: str,
        detail: str,
        error_type: str | None = None,
    ):
        self.status = status
        self.title = title
        self.detail = detail
        self.error_type = error_type or "about:blank"


class BackendUnavailableError(ProblemDetailError):
    """The managed store or auth service is unreachable or misconfigured."""

    def __init__(self, detail: str = BACKEND_UNAVAILABLE_DETAIL):
        super().__init__(status=503, title="Backend unavailable", detail=detail)


class ConflictError(ProblemDetailError):
    def __init__(self, detail: str):
        super().__init__(status=409, title="Conflict", detail=detail)


def _problem(
    request: Request,
    status: int,
    title: str,
    detail,
    error_type: str = "about:blank",
) -> JSONResponse:
    return JSONResponse(
        status_code=status,
        content={
            "type": error_type,
            "title": title,
            "status": status,
            "detail": detail,
            "instance": str(request.url.path),
            "error": detail if isinstance(detail, str) else title,
        },
        media_type="application/problem+json",
    )


async def problem_detail_handler(request: Request, exc: ProblemDetailError) -> JSONResponse:
    return _problem(request, exc.status, exc.title, exc.detail, exc.error_type)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    title = exc.detail if isinstance(exc.detail, str) else "Error"
    return _problem(request, exc.status_code, title, exc.detail)


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return _problem(request, 422, "Validation Error", jsonable_encoder(exc.errors()))


async def backend_unavailable_handler(
    request: Request, exc: OperationalError | InterfaceError
) -> JSONResponse:
    logger.error("Backend unreachable on %s %s: %s", request.method, request.url.path, exc)
    return _problem(request, 503, "Backend unavailable", BACKEND_UNAVAILABLE_DETAIL)
