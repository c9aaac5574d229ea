"""
EVENT ROLE HELPERS

Purpose:
- Work out the signed-in user's role on an event (display only)
- Build role panel rows with names resolved through the name cache
- Map awards to participants and shape participant-picker filters

Rules:
- Role lists are read, never modified
- Unknown role keys are a KeyError
"""

from typing import Any, Dict, List, Mapping, Optional

from console.core.name_cache import NameResolutionMap, canonical_id, normalize_identity
from security.roles import COORDINATOR, EVENT_ADMIN, IN_CHARGE, JUDGE

# role key used by the assign/unassign endpoints -> list key on the event
EVENT_ROLES = {
    COORDINATOR: "coordinators",
    IN_CHARGE: "inCharges",
    JUDGE: "judges",
}

ROLE_LABELS = {
    COORDINATOR: "Coordinators",
    IN_CHARGE: "In-Charges",
    JUDGE: "Judges",
}

STUDENT_FILTER_FIELDS = ("classLevel", "house", "section")


def _user_id(user: Optional[Mapping[str, Any]]) -> Optional[str]:
    if not isinstance(user, Mapping):
        return None
    return canonical_id(user.get("_id") or user.get("id"))


def current_user_role(user: Optional[Mapping[str, Any]], event: Optional[Mapping[str, Any]]) -> Optional[str]:
    """
    The signed-in user's role on this event, for display only.

    Returns "admin" for institute admins, otherwise the first role list
    (coordinator, inCharge, judge) containing the user, else None.
    """
    if not isinstance(user, Mapping) or not isinstance(event, Mapping):
        return None
    if user.get("role") == EVENT_ADMIN:
        return EVENT_ADMIN

    uid = _user_id(user)
    if not uid:
        return None

    for role, key in EVENT_ROLES.items():
        for entry in event.get(key) or []:
            if isinstance(entry, Mapping) and canonical_id(entry.get("userId")) == uid:
                return role
    return None


def role_members(event: Mapping[str, Any], role: str, names: NameResolutionMap) -> List[Dict[str, str]]:
    """Display rows for one role list, names resolved through the cache."""
    key = EVENT_ROLES.get(role)
    if key is None:
        raise KeyError(f"Unknown event role '{role}'")

    rows = []
    for entry in event.get(key) or []:
        uid, inline_name = normalize_identity(entry)
        if not uid:
            continue
        rows.append({"id": uid, "name": names.resolve_name(uid, inline_name or "")})
    return rows


def awards_by_user(rankings: Optional[List[Mapping[str, Any]]]) -> Dict[str, Mapping[str, Any]]:
    awards = {}
    for award in rankings or []:
        uid = canonical_id(award.get("userId"))
        if uid:
            awards[uid] = award
    return awards


def student_filter_params(filters: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """Query params for the participant picker: only set filters are sent."""
    params: Dict[str, Any] = {"role": "STUDENT"}
    for field in STUDENT_FILTER_FIELDS:
        value = (filters or {}).get(field)
        if value:
            params[field] = value
    return params
