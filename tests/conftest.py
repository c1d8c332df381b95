"""
tests.conftest
~~~~~~~~~~~~~~
Shared appliance configuration and fixtures.
"""
from __future__ import annotations

import copy
import json

import pytest
from rest_framework.test import APIClient

from apps.config_store.services.config_tree import ConfigTree


# ===========================================================================
# Shared realistic appliance configuration
# ===========================================================================

VIP_WEB = {
    "mode": "ipalias",
    "interface": "wan",
    "uniqid": "5f3c1a2b9d4e1",
    "descr": "Web frontend",
    "type": "single",
    "subnet_bits": "32",
    "subnet": "203.0.113.5",
}
VIP_GATEWAY = {
    "mode": "carp",
    "interface": "lan",
    "vhid": "1",
    "advskew": "0",
    "advbase": "1",
    "password": "carp-secret",
    "uniqid": "5f3c1a2b9d4e2",
    "descr": "LAN gateway",
    "type": "single",
    "subnet_bits": "24",
    "subnet": "192.168.1.254",
}
VIP_DMZ = {
    "mode": "proxyarp",
    "interface": "opt1",
    "uniqid": "5f3c1a2b9d4e3",
    "descr": "DMZ pool",
    "type": "network",
    "subnet_bits": "29",
    "subnet": "198.51.100.8",
}

APPLIANCE_CONFIG: dict = {
    "system": {
        "group": [
            # uid 0 is the built-in admin
            {"name": "admins", "gid": "1999", "member": ["0"], "priv": ["page-all"]},
            {
                "name": "netops",
                "gid": "2000",
                "member": ["2001", "2003"],
                "priv": ["page-firewall-virtualipaddresses"],
            },
        ],
        "user": [
            {"name": "admin", "uid": "0", "descr": "System Administrator"},
            {"name": "netops", "uid": "2001", "priv": ["user-config-readonly"]},
            {"name": "auditor", "uid": "2002", "priv": ["page-interfaces-assignnetworkports"]},
            {"name": "former", "uid": "2003", "disabled": ""},
        ],
    },
    "interfaces": {
        "wan": {"enable": "", "if": "em0", "descr": "WAN", "ipaddr": "dhcp"},
        "lan": {"enable": "", "if": "em1", "descr": "LAN", "ipaddr": "192.168.1.1", "subnet": "24"},
        "opt1": {"if": "em2", "descr": "DMZ", "ipaddr": "198.51.100.1", "subnet": "28"},
    },
    "virtualip": {"vip": [VIP_WEB, VIP_GATEWAY, VIP_DMZ]},
}


# ===========================================================================
# Fixtures
# ===========================================================================

@pytest.fixture
def appliance_config() -> dict:
    """Return a private deep copy of APPLIANCE_CONFIG."""
    return copy.deepcopy(APPLIANCE_CONFIG)


@pytest.fixture
def tree(appliance_config) -> ConfigTree:
    return ConfigTree(appliance_config)


@pytest.fixture
def write_config(tmp_path, settings):
    """
    Return a function that writes a configuration document to disk and
    points ``settings.APPLIANCE_CONFIG_PATH`` at it.
    """
    def _write(document) -> str:
        path = tmp_path / "config.json"
        path.write_text(json.dumps(document), encoding="utf-8")
        settings.APPLIANCE_CONFIG_PATH = str(path)
        return str(path)

    return _write


@pytest.fixture
def config_file(write_config, appliance_config) -> str:
    """Write APPLIANCE_CONFIG to disk and return its path."""
    return write_config(appliance_config)


@pytest.fixture
def api_client() -> APIClient:
    """Return an unauthenticated DRF APIClient."""
    return APIClient()


@pytest.fixture
def login(api_client, django_user_model):
    """
    Return a function creating a Django user and force-authenticating the
    API client as that user.
    """
    def _login(username: str) -> APIClient:
        user = django_user_model.objects.create_user(username=username, password="s3cret-pass")
        api_client.force_authenticate(user=user)
        return api_client

    return _login
