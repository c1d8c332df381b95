"""
apps.config_store.apps
"""
from django.apps import AppConfig


class ConfigStoreConfig(AppConfig):
    name = "apps.config_store"
    label = "config_store"
    verbose_name = "Config Store"
