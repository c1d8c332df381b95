"""
apps.access_control.apps
"""
from django.apps import AppConfig


class AccessControlConfig(AppConfig):
    name = "apps.access_control"
    label = "access_control"
    verbose_name = "Access Control"
