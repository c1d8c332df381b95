"""
apps.api_v1.renderers
~~~~~~~~~~~~~~~~~~~~~
Rendering and content negotiation for envelope responses.
"""
from rest_framework.negotiation import BaseContentNegotiation
from rest_framework.renderers import JSONRenderer


class EnvelopeJSONRenderer(JSONRenderer):
    """JSON renderer terminating every body with a single newline."""

    def render(self, data, accepted_media_type=None, renderer_context=None):
        body = super().render(data, accepted_media_type, renderer_context)
        return body + b"\n"


class IgnoreClientContentNegotiation(BaseContentNegotiation):
    """Always answer with the first configured renderer, whatever ``Accept`` says."""

    def select_parser(self, request, parsers):
        return parsers[0]

    def select_renderer(self, request, renderers, format_suffix=None):
        return (renderers[0], renderers[0].media_type)
