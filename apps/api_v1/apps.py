"""
apps.api_v1.apps
"""
from django.apps import AppConfig


class ApiV1Config(AppConfig):
    name = "apps.api_v1"
    label = "api_v1"
    verbose_name = "API v1"
