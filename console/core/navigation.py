"""
Sidebar navigation for the admin dashboards.

Some menu entries are plain pages; others are sections of the dashboard
page addressed by fragment (dashboard#settings). Activating a section
entry on the dashboard itself only touches the fragment; from anywhere
else it is a full navigation with the fragment pre-set.
"""

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional

from console.core.location import Location
from security.roles import ADMIN_TYPE_INSTITUTE, ADMIN_TYPE_SUPER

logger = logging.getLogger(__name__)

SUPER = ADMIN_TYPE_SUPER
INSTITUTE = ADMIN_TYPE_INSTITUTE
UNKNOWN = "UNKNOWN"

SUPER_DASHBOARD = "/admin/super-admin/dashboard"
INSTITUTE_DASHBOARD = "/admin/institute-admin/dashboard"


@dataclass(frozen=True)
class NavItem:
    href: str
    icon: str
    label: str
    hash: Optional[str] = None  # None: plain page link

    @property
    def is_hash_nav(self) -> bool:
        return self.hash is not None


_INSTITUTE_ITEMS = [
    NavItem(INSTITUTE_DASHBOARD, "dashboard", "Dashboard", ""),
    NavItem(f"{INSTITUTE_DASHBOARD}#users", "users", "Users", "users"),
    NavItem("/admin/institute-admin/students", "users", "Students"),
    NavItem("/admin/institute-admin/profile-requests", "requests", "Profile Requests"),
    NavItem(f"{INSTITUTE_DASHBOARD}#requests", "requests", "Requests", "requests"),
    NavItem("/admin/institute-admin/events", "events", "Events"),
    NavItem(f"{INSTITUTE_DASHBOARD}#settings", "settings", "Settings", "settings"),
]

_SUPER_ITEMS = [
    NavItem(SUPER_DASHBOARD, "dashboard", "Overview", ""),
    NavItem(f"{SUPER_DASHBOARD}#institutions", "institutions", "Institutions", "institutions"),
    NavItem(f"{SUPER_DASHBOARD}#admins", "admins", "Institute Admins", "admins"),
    NavItem(f"{SUPER_DASHBOARD}#claims", "requests", "Claim Requests", "claims"),
    NavItem(f"{SUPER_DASHBOARD}#settings", "settings", "Settings", "settings"),
]


def admin_type_for_path(path: str) -> str:
    if path.startswith("/admin/institute-admin"):
        return INSTITUTE
    if path.startswith("/admin/super-admin"):
        return SUPER
    return UNKNOWN


def dashboard_base(admin_type: str) -> Optional[str]:
    return {SUPER: SUPER_DASHBOARD, INSTITUTE: INSTITUTE_DASHBOARD}.get(admin_type)


def login_path(admin_type: str) -> str:
    if admin_type == SUPER:
        return "/admin/super-admin/login"
    return "/admin/institute-admin/login"


def nav_items(admin_type: str) -> List[NavItem]:
    if admin_type == INSTITUTE:
        return list(_INSTITUTE_ITEMS)
    if admin_type == SUPER:
        return list(_SUPER_ITEMS)
    return []


def is_item_active(item: NavItem, path: str, current_hash: str) -> bool:
    if item.is_hash_nav:
        base = item.href.split("#", 1)[0]
        return path == base and item.hash == current_hash
    return path == item.href or path.startswith(f"{item.href}/")


class SidebarNavigator:
    """
    Drives the Location when a sidebar entry is activated and tracks the
    current fragment for highlighting.
    """

    def __init__(self, location: Location, base: Optional[str] = None):
        self.location = location
        self.admin_type = admin_type_for_path(location.path)
        self.base = base or dashboard_base(self.admin_type) or location.path
        self.current_hash = location.fragment
        self._unsubscribe: Optional[Callable[[], None]] = location.subscribe(self._on_fragment_change)

    def items(self) -> List[NavItem]:
        return nav_items(self.admin_type)

    def active_items(self) -> List[NavItem]:
        return [i for i in self.items() if is_item_active(i, self.location.path, self.current_hash)]

    def activate(self, item: NavItem) -> None:
        logger.debug("Sidebar entry %s activated on %s", item.label, self.location.path)
        if not item.is_hash_nav:
            self.location.navigate(item.href)
            return

        if self.location.path != self.base:
            # hosting page not mounted yet: full navigation, fragment pre-set
            self.location.navigate(self.base, item.hash)
            return

        if item.hash:
            self.location.set_fragment(item.hash)
            return

        # Back to the overview item: drop the fragment entirely. replace_url
        # does not notify, so dispatch the change by hand.
        self.location.replace_url(self.location.path)
        self.current_hash = ""
        self.location.notify()

    def _on_fragment_change(self, fragment: str) -> None:
        self.current_hash = fragment

    def close(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
