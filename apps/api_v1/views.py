"""
apps.api_v1.views
~~~~~~~~~~~~~~~~~
Thin DRF views exposing configuration slices.  All decisions are delegated
to :func:`apps.api_v1.services.endpoint_service.serve`.

Endpoints
---------
GET    /firewall/virtual_ip/   – Virtual IP addresses
GET    /interface/             – Interface assignments

Any other HTTP method is answered, after authorization, with the
``invalid http method`` envelope.
"""
from __future__ import annotations

from django.core.exceptions import ImproperlyConfigured
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema, inline_serializer
from rest_framework import serializers
from rest_framework.authentication import BasicAuthentication
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.access_control.identity import resolve_caller
from apps.access_control.runtime import check_runtime_allowed
from apps.config_store.services.config_tree import load_config_tree
from common.exceptions import UnauthorizedError
from . import endpoints
from .authentication import ReadOnlySessionAuthentication
from .envelope import build_response
from .renderers import EnvelopeJSONRenderer, IgnoreClientContentNegotiation
from .services import endpoint_service
from .services.endpoint_service import Endpoint

ENVELOPE_SCHEMA = inline_serializer(
    name="ApiResponse",
    fields={
        "status": serializers.CharField(),
        "code": serializers.IntegerField(),
        "return": serializers.IntegerField(),
        "message": serializers.CharField(allow_blank=True),
        "data": serializers.JSONField(),
    },
)

SEARCH_PARAMETER = OpenApiParameter(
    name="search",
    type=OpenApiTypes.STR,
    location=OpenApiParameter.QUERY,
    required=False,
    description=(
        "Case-insensitive free-text term matched against every value of an "
        "entry.  Other query parameters (``field``, ``field__contains``, "
        "``field__gte`` ...) filter on individual fields."
    ),
)

ERROR_RESPONSES = {
    400: OpenApiResponse(ENVELOPE_SCHEMA, description="Invalid HTTP method (return 2)."),
    401: OpenApiResponse(ENVELOPE_SCHEMA, description="Authentication or authorization failed (return 1)."),
    403: OpenApiResponse(ENVELOPE_SCHEMA, description="API disabled for this client (return 3)."),
    503: OpenApiResponse(ENVELOPE_SCHEMA, description="Configuration store unavailable (return 4)."),
}


class ConfigSliceView(APIView):
    """
    Base view serving one :class:`Endpoint`.

    Subclasses only set ``endpoint``; a subclass without one is rejected
    when it is defined.
    """

    endpoint: Endpoint | None = None
    authentication_classes = [ReadOnlySessionAuthentication, BasicAuthentication]
    permission_classes = []
    renderer_classes = [EnvelopeJSONRenderer]
    content_negotiation_class = IgnoreClientContentNegotiation

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        if not isinstance(cls.endpoint, Endpoint):
            raise ImproperlyConfigured(f"{cls.__name__} must declare an Endpoint.")

    def initial(self, request: Request, *args, **kwargs) -> None:
        check_runtime_allowed(request)
        super().initial(request, *args, **kwargs)

    def finalize_response(self, request, response, *args, **kwargs):
        response = super().finalize_response(request, response, *args, **kwargs)
        response["Referer"] = "no-referrer"
        return response

    def serve(self, request: Request, *args, **kwargs) -> Response:
        if not request.user.is_authenticated:
            envelope, http_status = build_response(UnauthorizedError())
            return Response(envelope.to_dict(), status=http_status)

        tree = load_config_tree()
        caller = resolve_caller(request.user, tree)
        envelope, http_status = endpoint_service.serve(
            self.endpoint,
            caller=caller,
            method=request.method,
            query_params=request.query_params,
            tree=tree,
        )
        return Response(envelope.to_dict(), status=http_status)

    def get(self, request: Request, *args, **kwargs) -> Response:
        return self.serve(request, *args, **kwargs)

    def options(self, request, *args, **kwargs):
        return self.serve(request, *args, **kwargs)

    def http_method_not_allowed(self, request, *args, **kwargs):
        return self.serve(request, *args, **kwargs)


@extend_schema(
    summary="List Virtual IPs",
    description="Returns the virtual IP address entries, optionally filtered.",
    parameters=[SEARCH_PARAMETER],
    responses={200: ENVELOPE_SCHEMA, **ERROR_RESPONSES},
    tags=["Firewall"],
)
class VirtualIPView(ConfigSliceView):
    """GET /firewall/virtual_ip/ – virtual IP address entries."""

    endpoint = endpoints.VIRTUAL_IPS


@extend_schema(
    summary="List Interfaces",
    description="Returns the interface assignments keyed by interface name, optionally filtered.",
    parameters=[SEARCH_PARAMETER],
    responses={200: ENVELOPE_SCHEMA, **ERROR_RESPONSES},
    tags=["Interfaces"],
)
class InterfaceView(ConfigSliceView):
    """GET /interface/ – interface assignments."""

    endpoint = endpoints.INTERFACES
