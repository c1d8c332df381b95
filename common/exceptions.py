"""
common.exceptions
~~~~~~~~~~~~~~~~~
Application error taxonomy and the DRF exception handler that renders every
failure as an API envelope.

Each :class:`AppError` subclass carries the HTTP status, the envelope
``status`` text and the machine-readable ``return`` code it maps to.
"""
from __future__ import annotations

from http import HTTPStatus

import structlog
from rest_framework import exceptions as drf_exceptions
from rest_framework import status
from rest_framework.response import Response

logger = structlog.get_logger(__name__)


class AppError(Exception):
    """Base application error.  Subclass to define domain-specific errors."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    status_text: str = "server error"
    return_code: int = 5
    default_detail: str = "unexpected error"

    def __init__(self, detail: str | None = None) -> None:
        self.detail = detail or self.default_detail
        super().__init__(self.detail)

    def __str__(self) -> str:
        return self.detail


class UnauthorizedError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    status_text = "unauthorized"
    return_code = 1
    default_detail = "authentication failed"


class MethodNotAllowedError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    status_text = "bad request"
    return_code = 2
    default_detail = "invalid http method"


class ApiDisabledError(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    status_text = "forbidden"
    return_code = 3
    default_detail = "api is not enabled for this client"


class ConfigStoreUnavailableError(AppError):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    status_text = "service unavailable"
    return_code = 4
    default_detail = "configuration store unavailable"


class RequestError(AppError):
    """A request DRF rejected before it reached an endpoint (parse, throttle ...)."""

    status_code = status.HTTP_400_BAD_REQUEST
    status_text = "bad request"
    return_code = 6
    default_detail = "request rejected"

    def __init__(self, detail: str | None = None, status_code: int | None = None) -> None:
        super().__init__(detail)
        if status_code is not None:
            self.status_code = status_code
            self.status_text = HTTPStatus(status_code).phrase.lower()


def custom_exception_handler(exc: Exception, context: dict) -> Response:
    """
    Global DRF exception handler.

    Converts :class:`AppError` subclasses into their envelope, maps DRF
    authentication and permission failures onto :class:`UnauthorizedError`,
    keeps the status of any other DRF ``APIException`` and turns everything
    else into a 500 envelope, so no failure leaves without a well-formed body.
    """
    from apps.api_v1.envelope import build_response  # noqa: PLC0415

    headers = {}
    if isinstance(exc, (drf_exceptions.NotAuthenticated, drf_exceptions.AuthenticationFailed)):
        if getattr(exc, "auth_header", None):
            headers["WWW-Authenticate"] = exc.auth_header
        exc = UnauthorizedError()
    elif isinstance(exc, drf_exceptions.PermissionDenied):
        exc = UnauthorizedError()
    elif isinstance(exc, drf_exceptions.APIException):
        exc = RequestError(str(exc.detail), status_code=exc.status_code)

    if isinstance(exc, AppError):
        logger.warning(
            "app_error",
            return_code=exc.return_code,
            detail=exc.detail,
            status_code=exc.status_code,
        )
    else:
        logger.exception("unhandled_exception", exc_info=exc)
        exc = AppError()

    envelope, http_status = build_response(exc)
    return Response(envelope.to_dict(), status=http_status, headers=headers)
