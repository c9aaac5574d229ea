"""
STALE RESPONSE GUARD

Purpose:
Filter and page changes can outrun the network. Every fetch is tagged
with the value (filter, section, page) active when it was issued; a
response is applied only if it is still the newest fetch for its key and
its tag still matches the current value.

Rules:
- Cancellation is advisory: stale responses are dropped, not aborted
- Single logical thread; no locking
"""

import itertools
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Hashable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FetchTicket:
    key: str
    tag: Hashable
    seq: int


class StaleResponseGuard:

    def __init__(self):
        self._counter = itertools.count(1)
        self._latest: Dict[str, int] = {}

    def issue(self, key: str, tag: Hashable) -> FetchTicket:
        """Tag a new fetch; it supersedes any outstanding fetch for `key`."""
        ticket = FetchTicket(key=key, tag=tag, seq=next(self._counter))
        self._latest[key] = ticket.seq
        return ticket

    def is_current(self, ticket: FetchTicket, current_tag: Hashable) -> bool:
        return self._latest.get(ticket.key) == ticket.seq and ticket.tag == current_tag

    def deliver(self, ticket: FetchTicket, current_tag: Hashable, apply: Callable[[Any], None], payload: Any) -> bool:
        """Apply `payload` if the ticket is still current. Returns True if applied."""
        if not self.is_current(ticket, current_tag):
            logger.info(
                "Discarding stale %s response (tag=%r, current=%r)",
                ticket.key, ticket.tag, current_tag,
            )
            return False
        apply(payload)
        return True
