"""Static menu: labels plus what confirming each row does.

Dispatch kinds:
- ``InstantCheck``: run a collaborator synchronously and show its result
- ``LongRunning``: enter the busy screen; the install runs on the next tick
- ``OpenBrowser``: open the backup-file browser
- ``Exit``: leave the dashboard
"""

from __future__ import annotations

from dataclasses import dataclass

PACKAGE_MANAGER = "winget"
VPN_CLIENT = "netbird"

INSTALL_ITEM_LABELS: dict[str, str] = {
    PACKAGE_MANAGER: "Winget",
    VPN_CLIENT: "NetBird",
}

CHECK_PACKAGE_MANAGER = "check_package_manager"
CHECK_VPN_CLIENT = "check_vpn_client"
BACKUP_ROLES = "backup_roles"


@dataclass(frozen=True)
class InstantCheck:
    """Collaborator call that runs inside key handling."""

    operation: str


@dataclass(frozen=True)
class LongRunning:
    """Install deferred to the next scheduler tick."""

    item: str


@dataclass(frozen=True)
class OpenBrowser:
    pass


@dataclass(frozen=True)
class Exit:
    pass


MenuAction = InstantCheck | LongRunning | OpenBrowser | Exit


@dataclass(frozen=True)
class MenuItem:
    label: str
    action: MenuAction


# Backup blocks inside key handling like the status checks do.
MENU_ITEMS: tuple[MenuItem, ...] = (
    MenuItem("Check Winget Status", InstantCheck(CHECK_PACKAGE_MANAGER)),
    MenuItem("Install Winget", LongRunning(PACKAGE_MANAGER)),
    MenuItem("Check NetBird Status", InstantCheck(CHECK_VPN_CLIENT)),
    MenuItem("Install NetBird", LongRunning(VPN_CLIENT)),
    MenuItem("Backup Server Roles & Features", InstantCheck(BACKUP_ROLES)),
    MenuItem("Restore Server Roles & Features", OpenBrowser()),
    MenuItem("Exit", Exit()),
)


def menu_labels(items: tuple[MenuItem, ...] = MENU_ITEMS) -> list[str]:
    return [item.label for item in items]


def action_for_index(index: int | None, items: tuple[MenuItem, ...] = MENU_ITEMS) -> MenuAction | None:
    """Return the action bound to menu row ``index``, or ``None`` if out of range."""
    if index is None or not 0 <= index < len(items):
        return None
    return items[index].action


def install_item_label(item: str) -> str:
    return INSTALL_ITEM_LABELS.get(item, item)


__all__ = [
    "PACKAGE_MANAGER",
    "VPN_CLIENT",
    "CHECK_PACKAGE_MANAGER",
    "CHECK_VPN_CLIENT",
    "BACKUP_ROLES",
    "InstantCheck",
    "LongRunning",
    "OpenBrowser",
    "Exit",
    "MenuAction",
    "MenuItem",
    "MENU_ITEMS",
    "menu_labels",
    "action_for_index",
    "install_item_label",
]
