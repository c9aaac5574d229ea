"""
HASH-SYNCHRONIZED TAB SELECTOR

Purpose:
- Keep exactly one active dashboard section
- Mirror it in the URL fragment in both directions

Transitions:
- select(S): active = S, fragment rewritten to S
- fragment changes elsewhere (back/forward, direct link, another
  component): active = section named by the fragment, else default

Rules:
- No fragment value is ever an error; unknown ones resolve to default
- The subscription lives exactly as long as the selector (close())
"""

import logging
from typing import Callable, List, Optional, Sequence

from console.core.location import Location

logger = logging.getLogger(__name__)

SectionWatcher = Callable[[str], None]

SUPER_ADMIN_SECTIONS = ("overview", "institutions", "admins", "claims", "settings")
INSTITUTE_ADMIN_SECTIONS = ("overview", "users", "requests", "settings")
STUDENT_PAGE_SECTIONS = ("students", "requests")


def resolve_section(fragment: Optional[str], sections: Sequence[str], default: Optional[str] = None) -> str:
    """
    Map a fragment to a known section.

    Returns the section named by the fragment if recognized, else the
    default (first section when no default is given).
    """
    if not sections:
        raise ValueError("sections must not be empty")
    fallback = default if default is not None else sections[0]

    # the Location has already removed the URL's own leading "#"
    name = fragment if isinstance(fragment, str) else ""
    if name and name in sections:
        return name
    return fallback


class HashTabSelector:
    """
    Active-section state bound to a Location.

    Usage:
        with HashTabSelector(location, SUPER_ADMIN_SECTIONS) as tabs:
            tabs.select("claims")
            tabs.active  # "claims", location.fragment == "claims"
    """

    def __init__(self, location: Location, sections: Sequence[str], default: Optional[str] = None):
        if not sections:
            raise ValueError("sections must not be empty")
        if default is not None and default not in sections:
            raise ValueError(f"default section '{default}' is not one of {list(sections)}")

        self.location = location
        self.sections = tuple(sections)
        self.default = default if default is not None else self.sections[0]
        self._watchers: List[SectionWatcher] = []

        # computed once at mount
        self._active = resolve_section(location.fragment, self.sections, self.default)
        self._unsubscribe: Optional[Callable[[], None]] = location.subscribe(self._on_fragment_change)

    @property
    def active(self) -> str:
        return self._active

    @property
    def closed(self) -> bool:
        return self._unsubscribe is None

    def on_change(self, watcher: SectionWatcher) -> None:
        """Call `watcher(section)` whenever the active section changes."""
        self._watchers.append(watcher)

    def select(self, section: str) -> str:
        """User picked a tab: update state and rewrite the fragment."""
        target = resolve_section(section, self.sections, self.default)
        self._set_active(target)
        # location notifies us back; _set_active ignores the echo
        self.location.set_fragment(target)
        return self._active

    def _on_fragment_change(self, fragment: str) -> None:
        self._set_active(resolve_section(fragment, self.sections, self.default))

    def _set_active(self, section: str) -> None:
        if section == self._active:
            return
        logger.debug("Active section %s -> %s", self._active, section)
        self._active = section
        for watcher in list(self._watchers):
            watcher(section)

    def close(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def __enter__(self) -> "HashTabSelector":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
