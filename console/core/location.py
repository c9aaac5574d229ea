"""
Browser-style location / history capability.

Dashboards never touch the URL directly; they talk to a Location so the
same selector logic runs against Streamlit query params in the app and
against an in-memory history in tests.
"""

import logging
from typing import Callable, List, Optional, Tuple

logger = logging.getLogger(__name__)

FragmentListener = Callable[[str], None]


def strip_fragment(raw: Optional[str]) -> str:
    """'#claims' -> 'claims'. None and '' both become ''."""
    if not raw:
        return ""
    return raw[1:] if raw.startswith("#") else raw


class Location:
    """
    Base location. Subclasses store path/fragment; dispatch lives here.

    set_fragment() behaves like assigning window.location.hash and notifies
    listeners. replace_url() behaves like history.replaceState and does NOT
    notify; callers that need listeners to react must call notify().
    """

    def __init__(self, path: str = "/", fragment: str = ""):
        self._path = path
        self._fragment = strip_fragment(fragment)
        self._listeners: List[FragmentListener] = []

    @property
    def path(self) -> str:
        return self._path

    @property
    def fragment(self) -> str:
        return self._fragment

    def subscribe(self, listener: FragmentListener) -> Callable[[], None]:
        """Register a fragment-change listener. Returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def notify(self) -> None:
        """Dispatch a fragment-change notification for the current fragment."""
        fragment = self._fragment
        for listener in list(self._listeners):
            try:
                listener(fragment)
            except Exception:
                logger.exception("Fragment listener failed for #%s", fragment)

    def set_fragment(self, fragment: str) -> None:
        fragment = strip_fragment(fragment)
        if fragment == self._fragment:
            return
        self._write(self._path, fragment, push=True)
        self.notify()

    def replace_url(self, path: str, fragment: str = "") -> None:
        """Rewrite the URL in place: no history entry, no notification."""
        self._write(path, strip_fragment(fragment), push=False)

    def navigate(self, path: str, fragment: str = "") -> None:
        """Full navigation to another page with an optional fragment pre-set."""
        logger.debug("Navigating to %s#%s", path, fragment)
        self._write(path, strip_fragment(fragment), push=True)
        self.notify()

    def _write(self, path: str, fragment: str, push: bool) -> None:
        self._path = path
        self._fragment = fragment


class MemoryLocation(Location):
    """In-process location with a back/forward history."""

    def __init__(self, path: str = "/", fragment: str = ""):
        super().__init__(path, fragment)
        self._history: List[Tuple[str, str]] = [(self._path, self._fragment)]
        self._index = 0

    @property
    def history(self) -> List[Tuple[str, str]]:
        return list(self._history[: self._index + 1])

    def _write(self, path: str, fragment: str, push: bool) -> None:
        super()._write(path, fragment, push)
        if push:
            del self._history[self._index + 1:]
            self._history.append((path, fragment))
            self._index += 1
        else:
            self._history[self._index] = (path, fragment)

    def back(self) -> None:
        if self._index == 0:
            return
        self._go(self._index - 1)

    def forward(self) -> None:
        if self._index >= len(self._history) - 1:
            return
        self._go(self._index + 1)

    def _go(self, index: int) -> None:
        previous = self._fragment
        self._index = index
        self._path, self._fragment = self._history[index]
        if self._fragment != previous:
            self.notify()

    @property
    def url(self) -> str:
        return f"{self._path}#{self._fragment}" if self._fragment else self._path
