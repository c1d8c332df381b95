"""
tests.test_access_control
~~~~~~~~~~~~~~~~~~~~~~~~~
Unit tests for the authorization gate.

Covers:
- RequiredPrivileges  (declaration rules)
- authorize()         (privilege + access mode decision)
- resolve_caller()    (privileges from the appliance configuration)
- Runtime gate        (API switch and allowed networks)
"""
from __future__ import annotations

import pytest
from django.contrib.auth.models import AnonymousUser, User
from django.test import RequestFactory

from apps.access_control.authorizer import CallerIdentity, authorize
from apps.access_control.identity import collect_privileges, find_user_entry, resolve_caller
from apps.access_control.privileges import (
    PAGE_ALL,
    PAGE_FIREWALL_VIRTUAL_IP_ADDRESSES,
    PAGE_INTERFACES_ASSIGN_NETWORK_PORTS,
    USER_CONFIG_READONLY,
    AccessMode,
    RequiredPrivileges,
)
from apps.access_control.runtime import check_runtime_allowed, client_allowed
from apps.config_store.services.config_tree import ConfigTree
from common.exceptions import ApiDisabledError

VIP_REQUIREMENT = RequiredPrivileges.any_of(PAGE_ALL, PAGE_FIREWALL_VIRTUAL_IP_ADDRESSES)
INTERFACE_REQUIREMENT = RequiredPrivileges.any_of(PAGE_ALL, PAGE_INTERFACES_ASSIGN_NETWORK_PORTS)


def make_caller(*privileges: str, write_capable: bool = True) -> CallerIdentity:
    return CallerIdentity(username="tester", granted=frozenset(privileges), write_capable=write_capable)


# ===========================================================================
# TestRequiredPrivileges
# ===========================================================================

class TestRequiredPrivileges:

    def test_any_of_builds_single_identifier_alternatives(self):
        assert VIP_REQUIREMENT.alternatives == (
            frozenset({PAGE_ALL}),
            frozenset({PAGE_FIREWALL_VIRTUAL_IP_ADDRESSES}),
        )

    def test_no_alternatives_rejected(self):
        with pytest.raises(ValueError):
            RequiredPrivileges(())

    def test_any_of_without_privileges_rejected(self):
        with pytest.raises(ValueError):
            RequiredPrivileges.any_of()

    def test_empty_alternative_rejected(self):
        with pytest.raises(ValueError):
            RequiredPrivileges((frozenset({PAGE_ALL}), frozenset()))

    def test_alternatives_normalised_to_frozensets(self):
        required = RequiredPrivileges(({"a", "b"},))
        assert required.alternatives == (frozenset({"a", "b"}),)


# ===========================================================================
# TestAuthorize
# ===========================================================================

class TestAuthorize:

    @pytest.mark.parametrize("required", [VIP_REQUIREMENT, INTERFACE_REQUIREMENT])
    @pytest.mark.parametrize("mode", list(AccessMode))
    def test_empty_granted_set_always_denied(self, required, mode):
        assert authorize(make_caller(), required, mode) is False

    @pytest.mark.parametrize("required", [VIP_REQUIREMENT, INTERFACE_REQUIREMENT])
    def test_universal_privilege_allows_any_endpoint(self, required):
        assert authorize(make_caller(PAGE_ALL), required, AccessMode.READ_ONLY) is True

    def test_specific_privilege_allows_its_endpoint(self):
        caller = make_caller(PAGE_FIREWALL_VIRTUAL_IP_ADDRESSES)
        assert authorize(caller, VIP_REQUIREMENT, AccessMode.READ_ONLY) is True

    def test_unrelated_privilege_denied(self):
        caller = make_caller(PAGE_INTERFACES_ASSIGN_NETWORK_PORTS)
        assert authorize(caller, VIP_REQUIREMENT, AccessMode.READ_ONLY) is False

    def test_missing_caller_denied(self):
        assert authorize(None, VIP_REQUIREMENT, AccessMode.READ_ONLY) is False

    def test_read_write_requires_write_capability(self):
        caller = make_caller(PAGE_ALL, write_capable=False)
        assert authorize(caller, VIP_REQUIREMENT, AccessMode.READ_WRITE) is False

    def test_read_write_allowed_for_write_capable_caller(self):
        caller = make_caller(PAGE_ALL, write_capable=True)
        assert authorize(caller, VIP_REQUIREMENT, AccessMode.READ_WRITE) is True

    @pytest.mark.parametrize("write_capable", [True, False])
    def test_read_only_admits_both_kinds_of_caller(self, write_capable):
        caller = make_caller(PAGE_ALL, write_capable=write_capable)
        assert authorize(caller, VIP_REQUIREMENT, AccessMode.READ_ONLY) is True

    def test_every_identifier_of_an_alternative_required(self):
        required = RequiredPrivileges((frozenset({"page-a", "page-b"}),))
        assert authorize(make_caller("page-a"), required, AccessMode.READ_ONLY) is False
        assert authorize(make_caller("page-a", "page-b"), required, AccessMode.READ_ONLY) is True


# ===========================================================================
# TestResolveCaller
# ===========================================================================

class TestResolveCaller:

    def test_admin_gets_group_privileges(self, tree):
        caller = resolve_caller(User(username="admin"), tree)
        assert caller is not None
        assert caller.username == "admin"
        assert PAGE_ALL in caller.granted
        assert caller.write_capable is True

    def test_user_and_group_privileges_are_merged(self, tree):
        caller = resolve_caller(User(username="netops"), tree)
        assert caller.granted == frozenset(
            {PAGE_FIREWALL_VIRTUAL_IP_ADDRESSES, USER_CONFIG_READONLY}
        )

    def test_readonly_privilege_removes_write_capability(self, tree):
        caller = resolve_caller(User(username="netops"), tree)
        assert caller.write_capable is False

    def test_read_only_api_removes_write_capability(self, tree, settings):
        settings.API_READ_ONLY = True
        caller = resolve_caller(User(username="admin"), tree)
        assert caller.write_capable is False

    def test_anonymous_user_unresolved(self, tree):
        assert resolve_caller(AnonymousUser(), tree) is None

    def test_unknown_user_unresolved(self, tree):
        assert resolve_caller(User(username="ghost"), tree) is None

    def test_disabled_user_unresolved(self, tree):
        assert resolve_caller(User(username="former"), tree) is None

    def test_collapsed_single_elements_handled(self):
        """A lone user, group and member (no lists) still resolve."""
        tree = ConfigTree({
            "system": {
                "user": {"name": "solo", "uid": "7", "priv": "page-interfaces-assignnetworkports"},
                "group": {"name": "g", "member": "7", "priv": "page-all"},
            }
        })
        entry = find_user_entry(tree, "solo")
        assert collect_privileges(tree, entry) == frozenset(
            {PAGE_ALL, PAGE_INTERFACES_ASSIGN_NETWORK_PORTS}
        )

    def test_user_without_uid_keeps_own_privileges(self):
        tree = ConfigTree({"system": {"user": [{"name": "x", "priv": ["page-all"]}]}})
        assert collect_privileges(tree, find_user_entry(tree, "x")) == frozenset({PAGE_ALL})


# ===========================================================================
# TestRuntimeGate
# ===========================================================================

class TestRuntimeGate:

    def test_empty_network_list_allows_everyone(self):
        assert client_allowed("198.51.100.7", []) is True

    def test_address_inside_network_allowed(self):
        assert client_allowed("10.1.2.3", ["192.168.0.0/16", "10.0.0.0/8"]) is True

    def test_address_outside_network_denied(self):
        assert client_allowed("172.16.0.1", ["10.0.0.0/8"]) is False

    def test_ipv6_network_supported(self):
        assert client_allowed("2001:db8::5", ["2001:db8::/32"]) is True

    def test_unparseable_address_denied(self):
        assert client_allowed(None, ["10.0.0.0/8"]) is False

    def test_disabled_api_raises(self, settings):
        settings.API_ENABLED = False
        request = RequestFactory().get("/api/v1/interface/")
        with pytest.raises(ApiDisabledError):
            check_runtime_allowed(request)

    def test_client_outside_allowed_networks_raises(self, settings):
        settings.API_ALLOWED_NETWORKS = ["10.0.0.0/8"]
        request = RequestFactory().get("/api/v1/interface/", REMOTE_ADDR="192.0.2.10")
        with pytest.raises(ApiDisabledError):
            check_runtime_allowed(request)

    def test_enabled_api_passes(self, settings):
        settings.API_ALLOWED_NETWORKS = ["192.0.2.0/24"]
        request = RequestFactory().get("/api/v1/interface/", REMOTE_ADDR="192.0.2.10")
        check_runtime_allowed(request)  # must not raise
