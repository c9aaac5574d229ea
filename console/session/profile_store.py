"""
Read-only view of the signed-in user's profile.

The login flow stores the serialized profile under "user" in a
session-scoped key-value store. It is used for display fallbacks only,
never for authorization decisions.
"""

import json
import logging
from typing import Any, Dict, Mapping, Optional

logger = logging.getLogger(__name__)


class SessionProfileStore:

    def __init__(self, storage: Mapping[str, Any], key: str = "user"):
        self._storage = storage
        self._key = key

    def profile(self) -> Dict[str, Any]:
        raw = self._storage.get(self._key)
        if raw is None or raw == "":
            return {}
        if isinstance(raw, Mapping):
            return dict(raw)
        try:
            data = json.loads(raw)
        except (TypeError, ValueError):
            logger.warning("Ignoring malformed profile under '%s'", self._key)
            return {}
        return data if isinstance(data, dict) else {}

    @property
    def user_id(self) -> Optional[str]:
        profile = self.profile()
        uid = profile.get("_id") or profile.get("id")
        return str(uid) if uid else None

    @property
    def display_name(self) -> str:
        name = (self.profile().get("name") or "").strip()
        return name.split(" ")[0] if name else "Admin"

    @property
    def initial(self) -> str:
        name = (self.profile().get("name") or "").strip()
        return name[0].upper() if name else "A"

    @property
    def email(self) -> str:
        return self.profile().get("email") or ""
