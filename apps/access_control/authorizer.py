"""
apps.access_control.authorizer
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
Pure authorization decision for API endpoints.

The authorizer never raises and never writes a response; the endpoint
handler turns a ``False`` into the 401 envelope.
"""
from __future__ import annotations

from dataclasses import dataclass, field

import structlog

from .privileges import AccessMode, RequiredPrivileges

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class CallerIdentity:
    """
    An authenticated caller as resolved from the request credentials.

    Attributes:
        username: Appliance user name.
        granted: Every privilege held, directly or through groups.
        write_capable: ``False`` when the caller may only read.
    """

    username: str
    granted: frozenset[str] = field(default_factory=frozenset)
    write_capable: bool = False


def authorize(
    caller: CallerIdentity | None,
    required: RequiredPrivileges,
    mode: AccessMode,
) -> bool:
    """
    Decide whether *caller* may run an operation.

    Args:
        caller: The resolved identity, or ``None`` when the request could not
            be authenticated (always denied).
        required: The endpoint's privilege alternatives.
        mode: ``READ_WRITE`` additionally requires a write-capable caller.

    Returns:
        ``True`` iff the caller is present, holds one full alternative and,
        for ``READ_WRITE``, is write-capable.
    """
    if caller is None:
        logger.info("authorization_denied", reason="unauthenticated")
        return False

    if not required.satisfied_by(caller.granted):
        logger.info("authorization_denied", reason="missing_privilege", username=caller.username)
        return False

    if mode is AccessMode.READ_WRITE and not caller.write_capable:
        logger.info("authorization_denied", reason="read_only_caller", username=caller.username)
        return False

    return True
