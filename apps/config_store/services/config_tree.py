"""
apps.config_store.services.config_tree
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
Read-only access to the appliance configuration document.

The appliance persists its configuration elsewhere; this service only loads
the JSON rendition of it (``settings.APPLIANCE_CONFIG_PATH``) once per
request and hands out slices by ``/``-separated path.  Nothing here writes
the document.

Public API
----------
ConfigTree            – Path lookups over a loaded document
load_config_tree()    – Build a ConfigTree from a JSON file
"""
from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Union

import structlog
from django.conf import settings

from common.exceptions import ConfigStoreUnavailableError

logger = structlog.get_logger(__name__)

#: Any value found in the configuration document.
ConfigValue = Union[
    str, int, float, bool, None, Mapping[str, "ConfigValue"], Sequence["ConfigValue"]
]
#: A single configuration entry (one VIP, one interface ...).
ConfigEntry = Mapping[str, ConfigValue]

PATH_SEPARATOR = "/"


class ConfigTree:
    """
    Immutable view over a configuration document.

    Example::

        tree = ConfigTree({"virtualip": {"vip": [{"subnet": "203.0.113.5"}]}})
        tree.get("virtualip/vip")      # -> [{"subnet": "203.0.113.5"}]
        tree.get("virtualip/missing")  # -> None
    """

    def __init__(self, document: Mapping[str, ConfigValue]) -> None:
        self._document = document

    def get(self, path: str) -> ConfigValue:
        """
        Return the value stored at *path*, or ``None`` when any segment is
        missing or traverses a non-mapping value.
        """
        node: ConfigValue = self._document
        for segment in (s for s in path.split(PATH_SEPARATOR) if s):
            if not isinstance(node, Mapping) or segment not in node:
                return None
            node = node[segment]
        return node


def load_config_tree(path: str | Path | None = None) -> ConfigTree:
    """
    Load the configuration document from *path*.

    Args:
        path: JSON file to read.  Defaults to ``settings.APPLIANCE_CONFIG_PATH``.

    Returns:
        A :class:`ConfigTree` over the parsed document.

    Raises:
        ConfigStoreUnavailableError: If the file cannot be read, is not valid
            JSON or its top level is not an object.
    """
    config_path = Path(path or settings.APPLIANCE_CONFIG_PATH)
    try:
        with config_path.open(encoding="utf-8") as fh:
            document = json.load(fh)
    except (OSError, ValueError) as exc:
        logger.error("config_store_unavailable", path=str(config_path), error=str(exc))
        raise ConfigStoreUnavailableError() from exc

    if not isinstance(document, dict):
        logger.error("config_store_unavailable", path=str(config_path), error="top level is not an object")
        raise ConfigStoreUnavailableError()

    return ConfigTree(document)


def as_list(value: ConfigValue) -> list[ConfigValue]:
    """
    Normalise a repeated element to a list.

    The XML store collapses a one-element repetition into the element itself
    and drops empty ones, so ``None`` becomes ``[]`` and a lone value
    becomes ``[value]``.
    """
    if value is None:
        return []
    if isinstance(value, list):
        return value
    if isinstance(value, tuple):
        return list(value)
    return [value]
