"""
apps.access_control.runtime
~~~~~~~~~~~~~~~~~~~~~~~~~~~
Administrative gate checked before any other request processing.

The API answers only when ``settings.API_ENABLED`` is on and, if
``settings.API_ALLOWED_NETWORKS`` is non-empty, the client address falls
inside one of those networks.
"""
from __future__ import annotations

import ipaddress

import structlog
from django.conf import settings

from common.exceptions import ApiDisabledError

logger = structlog.get_logger(__name__)


def client_allowed(address: str | None, networks: list[str]) -> bool:
    """Return ``True`` if *address* lies in any of *networks* (empty = any)."""
    if not networks:
        return True
    try:
        client = ipaddress.ip_address(address or "")
    except ValueError:
        return False
    return any(client in ipaddress.ip_network(net, strict=False) for net in networks)


def check_runtime_allowed(request) -> None:
    """
    Raise :class:`ApiDisabledError` unless the API may serve *request*.
    """
    if not settings.API_ENABLED:
        logger.warning("runtime_gate_denied", reason="api_disabled")
        raise ApiDisabledError()

    address = request.META.get("REMOTE_ADDR")
    if not client_allowed(address, settings.API_ALLOWED_NETWORKS):
        logger.warning("runtime_gate_denied", reason="client_not_allowed", client=address)
        raise ApiDisabledError()
