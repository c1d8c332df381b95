"""
apps.api_v1.services.endpoint_service
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
Composition of the authorization gate, the configuration fetch, the
extended search and the envelope builder for one read-only endpoint.

Views must call only :func:`serve`.  It receives everything it needs as
arguments (caller, HTTP method, query parameters, configuration tree) and
returns ``(envelope, http_status)``; it never raises an
:class:`~common.exceptions.AppError` and never writes a response itself.
"""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

import structlog
from django.core.exceptions import ImproperlyConfigured

from apps.access_control.authorizer import CallerIdentity, authorize
from apps.access_control.privileges import AccessMode, RequiredPrivileges
from apps.api_v1.envelope import ApiResponse, build_response
from apps.config_store.services.config_tree import ConfigTree, ConfigValue, as_list
from apps.config_store.services.extended_search import SearchSpec, filter_entries
from common.exceptions import MethodNotAllowedError, UnauthorizedError

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class Endpoint:
    """
    Declaration of a read-only configuration endpoint.

    Attributes:
        name: Identifier used in logs.
        config_path: ``/``-separated path of the slice in the config tree.
        required_privileges: Privilege alternatives a caller must satisfy.
        access_mode: Whether the endpoint needs a write-capable caller.
        http_method: The only HTTP method served.
        keyed: ``True`` when the slice is a ``name -> entry`` mapping
            (e.g. interfaces) rather than a list of entries.

    Raises:
        ImproperlyConfigured: When *required_privileges* is not a
            :class:`RequiredPrivileges` instance.
    """

    name: str
    config_path: str
    required_privileges: RequiredPrivileges
    access_mode: AccessMode = AccessMode.READ_ONLY
    http_method: str = "GET"
    keyed: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.required_privileges, RequiredPrivileges):
            raise ImproperlyConfigured(
                f"Endpoint '{self.name}' must declare RequiredPrivileges."
            )
        object.__setattr__(self, "http_method", self.http_method.upper())


def fetch_slice(endpoint: Endpoint, tree: ConfigTree) -> list[ConfigValue] | dict[str, ConfigValue]:
    """
    Read the endpoint's slice, normalising absence to an empty collection.

    A list endpoint whose slice holds a single mapping (one element the XML
    store collapsed) gets it back wrapped in a list.
    """
    value = tree.get(endpoint.config_path)
    if endpoint.keyed:
        return dict(value) if isinstance(value, Mapping) else {}
    if isinstance(value, Mapping):
        return [value]
    return as_list(value)


def serve(
    endpoint: Endpoint,
    *,
    caller: CallerIdentity | None,
    method: str,
    query_params: Mapping[str, str] | None,
    tree: ConfigTree,
) -> tuple[ApiResponse, int]:
    """
    Answer one request against *endpoint*.

    Steps:

    1. Authorize *caller*; failure yields the 401 envelope.
    2. Reject any method other than ``endpoint.http_method`` (400, return 2).
    3. Fetch the slice from *tree*; a missing slice is an empty collection.
    4. Apply the extended search built from *query_params*, if any.
    5. Wrap the result into the success envelope.

    Returns:
        ``(envelope, http_status)``.
    """
    if not authorize(caller, endpoint.required_privileges, endpoint.access_mode):
        return build_response(UnauthorizedError())

    if method.upper() != endpoint.http_method:
        logger.warning("invalid_http_method", endpoint=endpoint.name, method=method)
        return build_response(MethodNotAllowedError())

    entries = fetch_slice(endpoint, tree)
    spec = SearchSpec.from_query_params(query_params)
    result = filter_entries(entries, spec)

    logger.info(
        "config_slice_served",
        endpoint=endpoint.name,
        username=caller.username,
        searched=bool(spec),
        count=len(result),
    )
    return build_response(result)
