"""
apps.access_control.identity
~~~~~~~~~~~~~~~~~~~~~~~~~~~~
Resolve the :class:`~apps.access_control.authorizer.CallerIdentity` of an
authenticated request.

Credentials are checked by DRF's authentication classes against Django's
user table.  Privileges come from the appliance configuration: the user's
own ``priv`` list under ``system/user`` plus the ``priv`` list of every
``system/group`` whose ``member`` list holds the user's ``uid``.
"""
from __future__ import annotations

from collections.abc import Mapping

from django.conf import settings

from apps.config_store.services.config_tree import ConfigTree, as_list
from .authorizer import CallerIdentity
from .privileges import USER_CONFIG_READONLY

USERS_PATH = "system/user"
GROUPS_PATH = "system/group"


def find_user_entry(tree: ConfigTree, username: str) -> Mapping | None:
    """Return the ``system/user`` entry named *username*, if any."""
    for entry in as_list(tree.get(USERS_PATH)):
        if isinstance(entry, Mapping) and entry.get("name") == username:
            return entry
    return None


def collect_privileges(tree: ConfigTree, user_entry: Mapping) -> frozenset[str]:
    """Union of the user's own privileges and those of its groups."""
    granted = {str(priv) for priv in as_list(user_entry.get("priv"))}
    uid = user_entry.get("uid")
    if uid is None:
        return frozenset(granted)

    for group in as_list(tree.get(GROUPS_PATH)):
        if not isinstance(group, Mapping):
            continue
        members = {str(member) for member in as_list(group.get("member"))}
        if str(uid) in members:
            granted.update(str(priv) for priv in as_list(group.get("priv")))
    return frozenset(granted)


def resolve_caller(user, tree: ConfigTree) -> CallerIdentity | None:
    """
    Build the caller identity for *user*.

    Returns ``None`` for anonymous users, users unknown to the appliance
    configuration and disabled users.  The caller is write-capable unless the
    API runs in read-only mode or the caller holds ``user-config-readonly``.
    """
    if user is None or not user.is_authenticated:
        return None

    entry = find_user_entry(tree, user.get_username())
    if entry is None or "disabled" in entry:
        return None

    granted = collect_privileges(tree, entry)
    write_capable = not settings.API_READ_ONLY and USER_CONFIG_READONLY not in granted
    return CallerIdentity(
        username=user.get_username(),
        granted=granted,
        write_capable=write_capable,
    )
