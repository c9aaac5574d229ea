"""
DISPLAY GUARD

Decides which dashboard a profile belongs to so the console can show the
right screen. This is NOT authorization: every action is enforced by the
backend, which rejects unauthorized calls with 401/403.

Rules:
- No mutation of the profile
- No logging
- No side effects
"""

from typing import Any, Dict, Mapping, Optional

from security.roles import ADMIN_TYPE_INSTITUTE, ADMIN_TYPE_SUPER, EVENT_ADMIN, INSTITUTE_ADMIN, SUPER_ADMIN


def extract_admin_profile(response: Optional[Mapping[str, Any]]) -> Optional[Dict[str, Any]]:
    """Profile endpoints answer with {admin}, {user} or the bare profile."""
    if not isinstance(response, Mapping):
        return None
    profile = response.get("admin") or response.get("user") or response
    return dict(profile) if isinstance(profile, Mapping) and profile else None


def is_super_admin(user: Optional[Mapping[str, Any]]) -> bool:
    return isinstance(user, Mapping) and user.get("role") == SUPER_ADMIN


def admin_type_for_user(user: Optional[Mapping[str, Any]]) -> Optional[str]:
    if not isinstance(user, Mapping):
        return None
    role = user.get("role")
    if role == SUPER_ADMIN:
        return ADMIN_TYPE_SUPER
    if role in (INSTITUTE_ADMIN, EVENT_ADMIN):
        return ADMIN_TYPE_INSTITUTE
    return None
