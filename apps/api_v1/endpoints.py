"""
apps.api_v1.endpoints
~~~~~~~~~~~~~~~~~~~~~
Declarations of the configuration slices exposed by the v1 API.
"""
from apps.access_control.privileges import (
    PAGE_ALL,
    PAGE_FIREWALL_VIRTUAL_IP_ADDRESSES,
    PAGE_INTERFACES_ASSIGN_NETWORK_PORTS,
    AccessMode,
    RequiredPrivileges,
)
from .services.endpoint_service import Endpoint

VIRTUAL_IPS = Endpoint(
    name="firewall_virtual_ip",
    config_path="virtualip/vip",
    required_privileges=RequiredPrivileges.any_of(PAGE_ALL, PAGE_FIREWALL_VIRTUAL_IP_ADDRESSES),
    access_mode=AccessMode.READ_ONLY,
)

INTERFACES = Endpoint(
    name="interface",
    config_path="interfaces",
    required_privileges=RequiredPrivileges.any_of(PAGE_ALL, PAGE_INTERFACES_ASSIGN_NETWORK_PORTS),
    access_mode=AccessMode.READ_ONLY,
    keyed=True,
)
