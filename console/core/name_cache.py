"""
ROLE / NAME RESOLUTION CACHE

Event role lists reference verifiers by id. Names arrive piecemeal (the
event payload, verifier search results, a role just assigned), so the
best-known name per id is accumulated here for the life of the view.

Rules:
- Last write wins per id; other ids untouched
- Nothing is deleted during the session
- Lookup never fails: cached name -> inline name -> the id itself
"""

from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

NameEntry = Union[Tuple[Any, Any], Mapping[str, Any]]

EVENT_ROLE_KEYS = ("coordinators", "inCharges", "judges")


def _entry_pair(entry: NameEntry) -> Tuple[Any, Any]:
    if isinstance(entry, Mapping):
        return entry.get("id"), entry.get("name")
    if isinstance(entry, (tuple, list)) and len(entry) == 2:
        return entry[0], entry[1]
    return None, None


class NameResolutionMap:
    """Identifier -> display name, populated incrementally."""

    def __init__(self):
        self._names: Dict[str, str] = {}

    def record_names(self, entries: Iterable[NameEntry]) -> None:
        """
        Merge (id, name) pairs or {"id", "name"} mappings.

        Ids must already be flat strings (see normalize_identity); entries
        missing an id or a name are skipped.
        """
        for entry in entries or ():
            uid, name = _entry_pair(entry)
            if not uid or not name:
                continue
            self._names[str(uid)] = str(name)

    def resolve_name(self, identifier: Any, inline_fallback_name: Optional[str] = "") -> str:
        if identifier is not None:
            cached = self._names.get(str(identifier))
            if cached:
                return cached
        if inline_fallback_name:
            return str(inline_fallback_name)
        return "" if identifier is None else str(identifier)

    def __contains__(self, identifier: object) -> bool:
        return str(identifier) in self._names

    def __len__(self) -> int:
        return len(self._names)

    def snapshot(self) -> Dict[str, str]:
        return dict(self._names)


# ==================================================
# BOUNDARY ADAPTER (kept outside the cache contract)
# ==================================================

def canonical_id(value: Any) -> Optional[str]:
    """A userId may be a plain id or an embedded user object (_id, then id)."""
    if value is None:
        return None
    if isinstance(value, Mapping):
        nested = value.get("_id") or value.get("id")
        return str(nested) if nested else None
    text = str(value)
    return text or None


def normalize_identity(entry: Optional[Mapping[str, Any]]) -> Tuple[Optional[str], Optional[str]]:
    """
    Flatten a role entry into (id, name).

    Entry shapes seen in event payloads:
        {"userId": "u1", "userName": "Alice"}
        {"userId": {"_id": "u1", "name": "Alice"}}
    """
    if not isinstance(entry, Mapping):
        return None, None

    raw = entry.get("userId")
    uid = canonical_id(raw)
    name = entry.get("userName") or (raw.get("name") if isinstance(raw, Mapping) else None)
    return uid, name or None


def collect_event_names(event: Optional[Mapping[str, Any]]) -> List[Tuple[Optional[str], Optional[str]]]:
    """Normalized (id, name) pairs for every role entry on an event."""
    if not isinstance(event, Mapping):
        return []
    pairs = []
    for key in EVENT_ROLE_KEYS:
        for entry in event.get(key) or []:
            pairs.append(normalize_identity(entry))
    return pairs
