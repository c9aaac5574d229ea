"""
Centralized Data Loading for the Admin Console

CRITICAL PRINCIPLE:
Dashboard lists are fetched ONCE per render cycle and shared across tabs.
Streamlit reruns the whole script on every interaction; without this the
institutions list would be refetched on every click.
"""

import logging
from typing import Any, Callable, MutableMapping, Optional

from console.integrations.api_client import ApiError
from console.notifications.toast import emit_toast, error_message

logger = logging.getLogger(__name__)


def _session_state() -> MutableMapping[str, Any]:
    import streamlit as st
    return st.session_state


class DataLoader:
    """
    Render-cycle cache keyed by resource name.

    DESIGN:
    1. First access in a cycle calls the loader and stores the result
    2. Later accesses (other tabs, other widgets) reuse it
    3. invalidate() after create/update/delete forces a reload
    4. A failed reload keeps the last good value (stale but valid)
    """

    _RENDER_KEY = "_current_render_data"
    _LAST_GOOD_KEY = "_last_good_data"

    def __init__(self, storage: Optional[MutableMapping[str, Any]] = None):
        self._storage = storage if storage is not None else _session_state()

    def _bucket(self, name: str) -> MutableMapping[str, Any]:
        if name not in self._storage:
            self._storage[name] = {}
        return self._storage[name]

    def get(self, key: str, loader_fn: Callable[[], Any], failure_message: str = "Failed to load data", default: Any = None) -> Any:
        cache = self._bucket(self._RENDER_KEY)
        if key in cache:
            return cache[key]

        last_good = self._bucket(self._LAST_GOOD_KEY)
        try:
            value = loader_fn()
        except ApiError as e:
            logger.warning(f"Loading '{key}' failed: {e}")
            emit_toast("error", error_message(e, failure_message))
            return last_good.get(key, default)

        cache[key] = value
        last_good[key] = value
        return value

    def invalidate(self, key: Optional[str] = None) -> None:
        """Drop one cached key (or all) so the next access reloads."""
        cache = self._bucket(self._RENDER_KEY)
        if key is None:
            cache.clear()
        else:
            cache.pop(key, None)
