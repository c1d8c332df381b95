"""
apps.api_v1.envelope
~~~~~~~~~~~~~~~~~~~~
The uniform response envelope every API endpoint answers with.

Shape::

    {"status": "ok", "code": 200, "return": 0, "message": "", "data": [...]}

``return`` is a machine-readable outcome code distinct from the HTTP status:
``0`` on success, the raising :class:`~common.exceptions.AppError`'s
``return_code`` otherwise.

This module is **pure Python** apart from the error taxonomy import.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from rest_framework import status

from common.exceptions import AppError


@dataclass(frozen=True)
class ApiResponse:
    """
    Immutable API envelope.

    Attributes:
        status: Short outcome text (``"ok"``, ``"bad request"`` ...).
        code: HTTP status code echoed in the body.
        return_code: Machine-readable outcome, serialised as ``"return"``.
        message: Human-readable detail; empty on success.
        data: Payload.  Always a collection, never ``None``.
    """

    status: str
    code: int
    return_code: int
    message: str = ""
    data: Any = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": self.status,
            "code": self.code,
            "return": self.return_code,
            "message": self.message,
            "data": self.data,
        }


def _normalise_data(value: Any) -> Any:
    # Absent or empty slices are always rendered as an empty list.
    if value is None:
        return []
    if isinstance(value, (list, tuple, dict)) and not value:
        return []
    if isinstance(value, tuple):
        return list(value)
    return value


def build_response(result: Any) -> tuple[ApiResponse, int]:
    """
    Wrap *result* into an :class:`ApiResponse` and select the HTTP status.

    Args:
        result: Either the successful payload (any JSON-serialisable value,
            ``None`` meaning "nothing found") or an :class:`AppError`
            instance describing the failure.

    Returns:
        ``(envelope, http_status)``.  For errors the HTTP status and the
        envelope ``code`` are the error's ``status_code``.
    """
    if isinstance(result, AppError):
        envelope = ApiResponse(
            status=result.status_text,
            code=result.status_code,
            return_code=result.return_code,
            message=result.detail,
        )
        return envelope, result.status_code

    envelope = ApiResponse(
        status="ok",
        code=status.HTTP_200_OK,
        return_code=0,
        message="",
        data=_normalise_data(result),
    )
    return envelope, status.HTTP_200_OK
