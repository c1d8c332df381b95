"""
apps.access_control.privileges
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
Privilege identifiers used by this API and the typed privilege requirement
an endpoint declares.

The appliance owns the full privilege catalog; identifiers are treated as
opaque strings here.  Only the ones the shipped endpoints reference are
named below.
"""
from __future__ import annotations

import enum
from dataclasses import dataclass

#: Universal privilege granting every page of the appliance.
PAGE_ALL = "page-all"
PAGE_FIREWALL_VIRTUAL_IP_ADDRESSES = "page-firewall-virtualipaddresses"
PAGE_INTERFACES_ASSIGN_NETWORK_PORTS = "page-interfaces-assignnetworkports"
#: Marker privilege that strips write capability from its holder.
USER_CONFIG_READONLY = "user-config-readonly"


class AccessMode(enum.Enum):
    """Whether an endpoint only reads or also writes the configuration."""

    READ_ONLY = "read_only"
    READ_WRITE = "read_write"


@dataclass(frozen=True)
class RequiredPrivileges:
    """
    Ordered alternatives of privilege sets an endpoint accepts.

    A caller satisfies the requirement when it holds **every** identifier of
    **at least one** alternative (OR across alternatives, AND within one).

    Example::

        RequiredPrivileges.any_of("page-all", "page-firewall-virtualipaddresses")
        # -> ({"page-all"}, {"page-firewall-virtualipaddresses"})

    Raises:
        ValueError: On an empty sequence of alternatives or an empty
            alternative; neither may silently authorise everyone.
    """

    alternatives: tuple[frozenset[str], ...]

    def __post_init__(self) -> None:
        alternatives = tuple(frozenset(alt) for alt in self.alternatives)
        if not alternatives:
            raise ValueError("RequiredPrivileges needs at least one alternative.")
        if any(not alt for alt in alternatives):
            raise ValueError("RequiredPrivileges alternatives must not be empty.")
        object.__setattr__(self, "alternatives", alternatives)

    @classmethod
    def any_of(cls, *privileges: str) -> RequiredPrivileges:
        """Build single-identifier alternatives, one per privilege."""
        return cls(tuple(frozenset([priv]) for priv in privileges))

    def satisfied_by(self, granted: frozenset[str]) -> bool:
        return any(alt <= granted for alt in self.alternatives)
